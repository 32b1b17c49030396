"""
Contratos (Interfaces) para student-bot.

Protocol classes que especifican las interfaces que deben implementar
los componentes inyectados en el motor de conversación. Permiten usar
fakes en los tests sin depender de Telegram ni de la API de completions.
"""

from .repositories import IUserStateStore
from .services import ICompletionClient

__all__ = [
    "IUserStateStore",
    "ICompletionClient",
]
