"""Contratos para el almacenamiento del estado de conversación."""

import asyncio
from typing import Protocol, runtime_checkable

from models import UserId, UserState


@runtime_checkable
class IUserStateStore(Protocol):
    """
    Interfaz para el almacén de estado por usuario.

    Implementaciones:
    - UserStateStore: mapa en memoria con un lock por usuario
    """

    async def get_or_create(self, user_id: UserId) -> UserState:
        """
        Obtiene el estado del usuario, creándolo si no existe.

        Args:
            user_id: Identificador del usuario

        Returns:
            Estado actual del usuario
        """
        ...

    async def save(self, state: UserState) -> None:
        """Guarda el estado bajo su user_id."""
        ...

    def lock(self, user_id: UserId) -> asyncio.Lock:
        """Lock que serializa el procesamiento de mensajes del usuario."""
        ...
