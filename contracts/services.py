"""Contratos para servicios externos usados por el motor de conversación."""

from typing import Protocol, Sequence, runtime_checkable

from models import ChatTurn


@runtime_checkable
class ICompletionClient(Protocol):
    """
    Interfaz para el cliente de chat-completion.

    Implementaciones:
    - CompletionClient: API compatible con OpenAI (OpenRouter)
    """

    @property
    def configured(self) -> bool:
        """True si hay credencial para llamar a la API."""
        ...

    async def complete(self, history_tail: Sequence[ChatTurn], user_text: str) -> str:
        """
        Obtiene la respuesta del asistente.

        Args:
            history_tail: Turnos recientes del historial
            user_text: Mensaje nuevo del usuario

        Returns:
            Texto de la respuesta

        Raises:
            CompletionNotConfiguredError: Sin credencial configurada
            CompletionUpstreamError: Falla de red, de la API o timeout
        """
        ...
