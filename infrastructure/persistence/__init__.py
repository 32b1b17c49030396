# Persistence infrastructure module
from .user_state_store import UserStateStore

__all__ = [
    "UserStateStore",
]
