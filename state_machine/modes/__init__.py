"""
Mode handlers for the conversation state machine.

Each handler is self-contained and handles:
- The first prompt when the menu moves the user into its mode
- Free text received while the user is in its mode
- The summary shown when its data was already collected
"""

from typing import Dict, Type

from core.exceptions import StateHandlerNotFoundError
from models import Mode

from .base import ModeHandler
from .chat import ChatHandler
from .collection import CollectionHandler
from .contacts import ContactsHandler
from .idle import IdleHandler
from .it_skills import ItSkillsHandler
from .student import StudentHandler

__all__ = [
    "ModeHandler",
    "CollectionHandler",
    "IdleHandler",
    "StudentHandler",
    "ItSkillsHandler",
    "ContactsHandler",
    "ChatHandler",
    "MODE_HANDLERS",
    "get_handler_class",
]

# Registry mapping Mode to handler class
MODE_HANDLERS: Dict[Mode, Type[ModeHandler]] = {
    Mode.DEFAULT: IdleHandler,
    Mode.COLLECTING_STUDENT: StudentHandler,
    Mode.COLLECTING_IT: ItSkillsHandler,
    Mode.COLLECTING_CONTACTS: ContactsHandler,
    Mode.CHAT: ChatHandler,
}


def get_handler_class(mode: Mode) -> Type[ModeHandler]:
    """
    Gets the handler class for a mode.

    Raises:
        StateHandlerNotFoundError: If no handler is registered for the mode
    """
    try:
        return MODE_HANDLERS[mode]
    except KeyError:
        raise StateHandlerNotFoundError(mode) from None
