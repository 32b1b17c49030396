"""
Conversation engine.

This module implements the state machine that interprets each inbound text
message: global navigation first, then the menu, then the handler of the
user's current mode.
"""

import logging
from typing import Dict, List, Optional, Tuple

from contracts import ICompletionClient, IUserStateStore
from infrastructure.logging import get_correlation_id
from models import Keyboard, Mode, Reply, UserId, UserState
from templates.messages import (
    LABEL_BACK,
    LABEL_CHAT,
    LABEL_CONTACTS,
    LABEL_IT,
    LABEL_STUDENT,
    MENU_PROMPT,
)

from .context import ConversationContext
from .modes import ModeHandler, get_handler_class

# Menu label -> mode it opens
MENU_TARGETS: Dict[str, Mode] = {
    LABEL_STUDENT: Mode.COLLECTING_STUDENT,
    LABEL_IT: Mode.COLLECTING_IT,
    LABEL_CONTACTS: Mode.COLLECTING_CONTACTS,
    LABEL_CHAT: Mode.CHAT,
}


class ConversationEngine:
    """
    State machine orchestrator for the bot conversation.

    Responsibilities:
    - Load or create the user's state, one message at a time per user
    - Resolve back navigation and menu selections
    - Delegate free text to the handler of the current mode
    - Store the resulting state

    Usage:
        engine = ConversationEngine(
            store=UserStateStore(),
            completion_client=CompletionClient.from_settings(settings),
        )

        replies = await engine.handle(user_id=42, text="Студент")
    """

    def __init__(
        self,
        store: IUserStateStore,
        completion_client: ICompletionClient,
        history_limit: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the engine.

        Args:
            store: User state store (IUserStateStore)
            completion_client: Chat-completion client (ICompletionClient)
            history_limit: History entries sent with each chat message
            logger: Logger instance
        """
        self.store = store
        self.completion_client = completion_client
        self.history_limit = history_limit
        self.logger = logger or logging.getLogger(__name__)

        # Handler instance cache
        self._handler_cache: Dict[Mode, ModeHandler] = {}

    async def handle(self, user_id: UserId, text: str) -> List[Reply]:
        """
        Processes an inbound text message from a user.

        Messages from the same user are serialized with the store's per-user
        lock; different users do not block each other.

        Args:
            user_id: Sender identifier
            text: Message text

        Returns:
            Replies to send, in order
        """
        async with self.store.lock(user_id):
            state = await self.store.get_or_create(user_id)

            self.logger.info(
                "Procesando mensaje",
                extra={"user_id": user_id, "mode": state.mode.value},
            )

            nuevo_estado, replies = await self.process(state, text)
            await self.store.save(nuevo_estado)

        return replies

    async def process(
        self, state: UserState, text: str
    ) -> Tuple[UserState, List[Reply]]:
        """
        Decides the next state and the replies for one message.

        Does not touch the store; the only side effect is the completion call
        made in chat mode.

        Args:
            state: Current user state
            text: Message text

        Returns:
            Tuple (new state, replies)
        """
        contexto = ConversationContext(
            state=state,
            text=text.strip(),
            completion_client=self.completion_client,
            history_limit=self.history_limit,
            logger=self.logger,
            correlation_id=get_correlation_id(),
        )

        if contexto.text == LABEL_BACK:
            self._volver_al_menu(contexto)
        elif contexto.text in MENU_TARGETS:
            await self._seleccionar_menu(contexto, MENU_TARGETS[contexto.text])
        else:
            handler = self._obtener_handler(contexto.mode)
            await handler.procesar_mensaje(contexto)

        return contexto.state, contexto.replies

    def _volver_al_menu(self, contexto: ConversationContext) -> None:
        contexto.transition(Mode.DEFAULT)
        contexto.reply(MENU_PROMPT, Keyboard.MAIN_MENU)

    async def _seleccionar_menu(
        self, contexto: ConversationContext, destino: Mode
    ) -> None:
        """
        Opens a menu entry.

        Collection entries show the stored summary when the record exists and
        leave the mode as it is; otherwise the user enters the mode.
        """
        if destino != Mode.CHAT and contexto.mode == Mode.CHAT:
            contexto.state = contexto.state.clear_history()

        handler = self._obtener_handler(destino)

        resumen = handler.summary(contexto.state)
        if resumen is not None:
            contexto.reply(resumen, Keyboard.MAIN_MENU)
            return

        contexto.transition(destino)
        await handler.al_entrar(contexto)

    def _obtener_handler(self, mode: Mode) -> ModeHandler:
        if mode not in self._handler_cache:
            self._handler_cache[mode] = get_handler_class(mode)()
        return self._handler_cache[mode]
