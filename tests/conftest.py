"""
Shared pytest fixtures for student-bot tests.

This module provides fixtures for:
- Fake completion client and OpenAI SDK stub
- In-memory state store and configured engine
- Test data factories
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
from unittest.mock import MagicMock

import pytest

from core.exceptions import CompletionNotConfiguredError
from infrastructure.persistence import UserStateStore
from models import ChatRole, ChatTurn, Mode, UserState
from state_machine import ConversationEngine
from templates.messages import COMPLETION_NOT_CONFIGURED

# ============================================================
# TEST DATA FACTORIES
# ============================================================


@dataclass
class UserStateFactory:
    """Factory for creating test UserState instances."""

    @staticmethod
    def crear(
        user_id: int = 42,
        mode: Mode = Mode.DEFAULT,
        step: int = 0,
        **kwargs: Any,
    ) -> UserState:
        return UserState(user_id=user_id, mode=mode, step=step, **kwargs)

    @staticmethod
    def en_chat(user_id: int = 42, turnos: int = 0) -> UserState:
        """Creates a state in chat mode with `turnos` exchanges in history."""
        historial = []
        for i in range(turnos):
            historial.append(ChatTurn(role=ChatRole.USER, content=f"pregunta {i}"))
            historial.append(
                ChatTurn(role=ChatRole.ASSISTANT, content=f"respuesta {i}")
            )
        return UserState(user_id=user_id, mode=Mode.CHAT, chat_history=historial)


# ============================================================
# MOCK SERVICES
# ============================================================


class FakeCompletionClient:
    """Fake chat-completion client recording every call."""

    def __init__(
        self,
        respuestas: Optional[List[str]] = None,
        configured: bool = True,
        error: Optional[Exception] = None,
    ):
        self._configured = configured
        self.respuestas = list(respuestas or [])
        self.error = error
        self.llamadas: List[Tuple[List[ChatTurn], str]] = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def complete(self, history_tail: Sequence[ChatTurn], user_text: str) -> str:
        self.llamadas.append((list(history_tail), user_text))
        if not self._configured:
            raise CompletionNotConfiguredError(COMPLETION_NOT_CONFIGURED)
        if self.error:
            raise self.error
        if self.respuestas:
            return self.respuestas.pop(0)
        return f"eco: {user_text}"


class _Choice:
    def __init__(self, content: Optional[str]):
        self.message = type("_Message", (), {"content": content})()


class _Response:
    def __init__(self, content: Optional[str], sin_opciones: bool = False):
        self.choices = [] if sin_opciones else [_Choice(content)]


class _Completions:
    def __init__(self, stub: "OpenAIStub"):
        self.stub = stub

    async def create(self, **kwargs: Any) -> _Response:
        self.stub.peticiones.append(kwargs)
        if self.stub.error:
            raise self.stub.error
        if self.stub.demora:
            await asyncio.sleep(self.stub.demora)
        return _Response(self.stub.contenido, sin_opciones=self.stub.sin_opciones)


class _Chat:
    def __init__(self, stub: "OpenAIStub"):
        self.completions = _Completions(stub)


class OpenAIStub:
    """Stub of the AsyncOpenAI surface used by CompletionClient."""

    def __init__(
        self,
        contenido: Optional[str] = "Відповідь",
        error: Optional[Exception] = None,
        demora: float = 0,
        sin_opciones: bool = False,
    ):
        self.contenido = contenido
        self.error = error
        self.demora = demora
        self.sin_opciones = sin_opciones
        self.peticiones: List[Dict[str, Any]] = []
        self.cerrado = False
        self.chat = _Chat(self)

    async def close(self) -> None:
        self.cerrado = True


# ============================================================
# FIXTURES
# ============================================================


@pytest.fixture
def state_factory() -> UserStateFactory:
    return UserStateFactory()


@pytest.fixture
def store() -> UserStateStore:
    return UserStateStore()


@pytest.fixture
def fake_completion() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def engine(store: UserStateStore, fake_completion: FakeCompletionClient):
    return ConversationEngine(store=store, completion_client=fake_completion)


@pytest.fixture
def mock_logger() -> MagicMock:
    """Provides a mock logger."""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.debug = MagicMock()
    return logger
