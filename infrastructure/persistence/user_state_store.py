"""Almacén en memoria del estado de conversación por usuario."""

import asyncio
import logging
from typing import Dict, Optional

from models import Mode, UserId, UserState


class UserStateStore:
    """
    Almacén del estado de conversación, en memoria y sin persistencia.

    Cada usuario tiene exactamente un registro, creado en el primer contacto
    y nunca eliminado. El almacén también entrega un `asyncio.Lock` por
    usuario para que dos updates del mismo usuario no procesen en paralelo
    sobre el mismo registro.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._states: Dict[UserId, UserState] = {}
        self._locks: Dict[UserId, asyncio.Lock] = {}
        self.logger = logger or logging.getLogger(__name__)

    async def get_or_create(self, user_id: UserId) -> UserState:
        """
        Obtiene el estado del usuario o crea uno por defecto.

        Args:
            user_id: Identificador del usuario

        Returns:
            Instancia de UserState (la misma en llamadas sucesivas)
        """
        state = self._states.get(user_id)
        if state is None:
            state = UserState(user_id=user_id, mode=Mode.DEFAULT, step=0)
            self._states[user_id] = state
            self.logger.info(
                "Estado creado para nuevo usuario", extra={"user_id": user_id}
            )
        return state

    async def save(self, state: UserState) -> None:
        self._states[state.user_id] = state

    def lock(self, user_id: UserId) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._states
