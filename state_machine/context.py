"""
Context for the conversation state machine.

This module defines the context that mode handlers receive while processing
one inbound message: the current state, the message, the injected services
and the replies accumulated so far.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from models import Keyboard, Mode, Reply, UserState


@dataclass
class ConversationContext:
    """
    Shared context for one processed message.

    Attributes:
        state: Current user state (replaced on every update)
        text: Incoming message text, already stripped
        completion_client: Chat-completion client (ICompletionClient)
        history_limit: History entries sent to the completion API
        logger: Logger instance
        correlation_id: ID for tracing the update
        replies: Replies to send, in order
    """

    state: UserState
    text: str = ""

    # Services
    completion_client: Optional[Any] = None
    history_limit: int = 10

    # Infrastructure
    logger: Optional[Any] = None
    correlation_id: Optional[str] = None

    # Results
    replies: List[Reply] = field(default_factory=list)

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def update_state(self, **kwargs: Any) -> None:
        """
        Updates the state with new data.

        Args:
            **kwargs: Fields to update in the state
        """
        self.state = self.state.update(**kwargs)

    def transition(self, mode: Mode) -> None:
        """
        Moves the state to another mode, resetting step and draft.

        Args:
            mode: Target mode
        """
        previous = self.state.mode
        self.state = self.state.transition_to(mode)
        if previous != mode:
            self.log("info", f"Transición: {previous.value} -> {mode.value}")

    def reply(self, text: str, keyboard: Optional[Keyboard] = None) -> None:
        """Queues a reply to send to the user."""
        self.replies.append(Reply(text=text, keyboard=keyboard))

    def log(self, nivel: str, mensaje: str, **kwargs: Any) -> None:
        """
        Logs a message with context information.

        Args:
            nivel: Log level (debug, info, warning, error)
            mensaje: Message to log
            **kwargs: Additional context
        """
        if not self.logger:
            return

        log_data = {
            "user_id": self.state.user_id,
            "mode": self.state.mode.value,
            "step": self.state.step,
            "correlation_id": self.correlation_id,
            **kwargs,
        }

        getattr(self.logger, nivel, self.logger.info)(
            mensaje,
            extra=log_data,
        )
