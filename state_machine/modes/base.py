"""
Base class for mode handlers.

Each conversation mode has one handler that interprets free text received
while the user is in that mode, following the State pattern.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from models import Mode, UserState

from ..context import ConversationContext


class ModeHandler(ABC):
    """
    Abstract base class for mode handlers.

    Each handler encapsulates:
    - Which modes it handles
    - What to send when the user enters the mode from the menu
    - How to process text received while in the mode
    """

    @property
    @abstractmethod
    def nombre(self) -> str:
        """Human-readable name for logging and debugging."""

    @property
    @abstractmethod
    def modos_que_maneja(self) -> List[Mode]:
        """Modes this handler is registered for."""

    def puede_manejar(self, mode: Mode) -> bool:
        return mode in self.modos_que_maneja

    def summary(self, state: UserState) -> Optional[str]:
        """
        Formatted summary of the data this mode collects.

        Returns None while nothing has been collected yet, which makes the
        menu selection enter the mode instead of showing the summary.
        """
        return None

    async def al_entrar(self, contexto: ConversationContext) -> None:
        """
        Called after the menu moved the user into this mode.

        Override to send the first prompt of the mode.
        """

    @abstractmethod
    async def procesar_mensaje(self, contexto: ConversationContext) -> None:
        """
        Processes free text received in this mode.

        Implementations update `contexto.state` and queue replies with
        `contexto.reply`.
        """
