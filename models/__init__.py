"""
Modelos del bot.

Schemas validados con Pydantic para el estado de conversación por usuario
y las respuestas salientes.
"""

from .replies import Keyboard, Reply
from .state import (
    STEPS_BY_MODE,
    ChatRole,
    ChatTurn,
    ContactsRecord,
    ItRecord,
    Mode,
    StudentRecord,
    UserId,
    UserState,
    steps_for,
)

__all__ = [
    # Estados
    "Mode",
    "STEPS_BY_MODE",
    "steps_for",
    # Modelos principales
    "UserId",
    "UserState",
    "StudentRecord",
    "ItRecord",
    "ContactsRecord",
    "ChatRole",
    "ChatTurn",
    # Respuestas
    "Keyboard",
    "Reply",
]
