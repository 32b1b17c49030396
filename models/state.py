"""
Schema validado para el estado de conversación por usuario usando Pydantic.

Este módulo define el modelo principal UserState: el modo actual, el cursor
de paso dentro del modo, los registros recopilados y el historial de chat.
Las actualizaciones son inmutables: cada cambio produce una nueva instancia
validada.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

UserId = Union[int, str]


def _utcnow() -> str:
    """Retorna timestamp ISO UTC actual."""
    return datetime.now(timezone.utc).isoformat()


class Mode(str, Enum):
    """
    Modos válidos de la máquina de estados conversacional.

    default -> collect_student | collect_it | collect_contacts | chat -> default
    """

    DEFAULT = "default"
    COLLECTING_STUDENT = "collect_student"
    COLLECTING_IT = "collect_it"
    COLLECTING_CONTACTS = "collect_contacts"
    CHAT = "chat"


# Número de pasos por modo; los modos ausentes tienen un solo paso
STEPS_BY_MODE: Dict[Mode, int] = {
    Mode.COLLECTING_STUDENT: 2,
    Mode.COLLECTING_CONTACTS: 2,
}


def steps_for(mode: Mode) -> int:
    """Returns how many step positions a mode has."""
    return STEPS_BY_MODE.get(mode, 1)


class StudentRecord(BaseModel):
    """Datos del estudiante."""

    surname: str
    group: str


class ItRecord(BaseModel):
    """Tecnologías IT declaradas por el usuario."""

    technologies: str


class ContactsRecord(BaseModel):
    """Datos de contacto."""

    phone: str
    email: str


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """Un mensaje del historial de chat."""

    role: ChatRole
    content: str

    def to_message(self) -> Dict[str, str]:
        """Converts the turn to the chat-completion message format."""
        return {"role": self.role.value, "content": self.content}


class UserState(BaseModel):
    """
    Modelo principal del estado de conversación de un usuario.

    Invariantes:
    - `step` siempre está dentro del rango del modo actual
    - los registros (student, it, contacts) están completos o ausentes;
      los valores parciales viven en `draft`
    """

    user_id: UserId

    # Estado actual de la conversación
    mode: Mode = Mode.DEFAULT
    step: int = Field(default=0, ge=0)

    # Campos recopilados en el flujo actual, aún sin confirmar
    draft: Dict[str, str] = Field(default_factory=dict)

    # Registros completos
    student: Optional[StudentRecord] = None
    it: Optional[ItRecord] = None
    contacts: Optional[ContactsRecord] = None

    # Historial del modo chat
    chat_history: List[ChatTurn] = Field(default_factory=list)

    # Metadata
    created_at: str = Field(default_factory=_utcnow)
    updated_at: Optional[str] = None

    @model_validator(mode="after")
    def validar_paso(self) -> "UserState":
        """Rejects a step that the current mode does not have."""
        if self.step >= steps_for(self.mode):
            raise ValueError(
                f"Paso {self.step} fuera de rango para el modo {self.mode.value}"
            )
        return self

    def update(self, **kwargs: Any) -> "UserState":
        """
        Actualiza campos del estado de forma inmutable.

        Returns:
            Nueva instancia con los campos actualizados
        """
        datos = self.model_dump()
        datos.update(kwargs)
        datos["updated_at"] = _utcnow()

        return UserState(**datos)

    def transition_to(self, mode: Mode) -> "UserState":
        """
        Cambia de modo reiniciando el paso y el borrador.

        The chat history is cleared whenever Chat mode is entered or left.

        Returns:
            Nueva instancia en el modo indicado
        """
        changes: Dict[str, Any] = {"mode": mode, "step": 0, "draft": {}}
        if mode == Mode.CHAT or self.mode == Mode.CHAT:
            changes["chat_history"] = []
        return self.update(**changes)

    def clear_history(self) -> "UserState":
        return self.update(chat_history=[])

    def history_tail(self, limit: int) -> List[ChatTurn]:
        """Returns the `limit` most recent chat turns."""
        if limit <= 0:
            return []
        return list(self.chat_history[-limit:])

    def with_exchange(self, user_text: str, answer: str) -> "UserState":
        """Appends a user turn and the assistant answer, in that order."""
        historial = [turn.model_dump() for turn in self.chat_history]
        historial.append({"role": ChatRole.USER, "content": user_text})
        historial.append({"role": ChatRole.ASSISTANT, "content": answer})
        return self.update(chat_history=historial)
