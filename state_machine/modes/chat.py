"""
Free-form chat mode proxied to the chat-completion API.

Every message is sent with the recent history as context. The history only
grows on success; a failed call leaves it untouched so the user can retry.
"""

from typing import List

from core.exceptions import CompletionError
from models import Keyboard, Mode
from templates.messages import CHAT_ACTIVATED, CHAT_NOT_CONFIGURED, error_reply

from ..context import ConversationContext
from .base import ModeHandler


class ChatHandler(ModeHandler):
    @property
    def nombre(self) -> str:
        return "Chat"

    @property
    def modos_que_maneja(self) -> List[Mode]:
        return [Mode.CHAT]

    async def al_entrar(self, contexto: ConversationContext) -> None:
        if not contexto.completion_client.configured:
            contexto.log("warning", "Modo chat sin credencial de completion")
            contexto.reply(CHAT_NOT_CONFIGURED, Keyboard.BACK_ONLY)
            return
        contexto.reply(CHAT_ACTIVATED, Keyboard.BACK_ONLY)

    async def procesar_mensaje(self, contexto: ConversationContext) -> None:
        historial = contexto.state.history_tail(contexto.history_limit)

        try:
            respuesta = await contexto.completion_client.complete(
                historial, contexto.text
            )
        except CompletionError as exc:
            contexto.log(
                "warning",
                f"Error en completion: {exc.reason}",
                error_type=type(exc).__name__,
            )
            contexto.reply(error_reply(exc.reason), Keyboard.BACK_ONLY)
            return

        contexto.state = contexto.state.with_exchange(contexto.text, respuesta)
        contexto.reply(respuesta, Keyboard.BACK_ONLY)
