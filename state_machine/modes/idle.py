"""Default mode: nothing in progress, the user is pointed back to the menu."""

from typing import List

from models import Keyboard, Mode
from templates.messages import MENU_FALLBACK

from ..context import ConversationContext
from .base import ModeHandler


class IdleHandler(ModeHandler):
    @property
    def nombre(self) -> str:
        return "Idle"

    @property
    def modos_que_maneja(self) -> List[Mode]:
        return [Mode.DEFAULT]

    async def procesar_mensaje(self, contexto: ConversationContext) -> None:
        contexto.reply(MENU_FALLBACK, Keyboard.MAIN_MENU)
