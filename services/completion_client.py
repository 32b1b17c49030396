"""Cliente de chat-completion sobre una API compatible con OpenAI."""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from config import Settings
from core.exceptions import CompletionNotConfiguredError, CompletionUpstreamError
from models import ChatTurn
from templates.messages import (
    COMPLETION_NOT_CONFIGURED,
    COMPLETION_TIMEOUT,
    NO_RESPONSE,
    SYSTEM_PROMPT,
)


class CompletionClient:
    """
    Envía el historial reciente y el mensaje del usuario a la API de
    completions y devuelve la respuesta del asistente.

    Un solo intento por llamada; cualquier falla se convierte en
    CompletionUpstreamError para que el modo chat la reporte al usuario.
    """

    def __init__(
        self,
        cliente_openai: Optional[AsyncOpenAI],
        modelo: str,
        tiempo_espera: float,
        semaforo: Optional[asyncio.Semaphore] = None,
        limite_historial: int = 10,
        prompt_sistema: str = SYSTEM_PROMPT,
        logger: Optional[logging.Logger] = None,
    ):
        self.cliente_openai = cliente_openai
        self.modelo = modelo
        self.tiempo_espera = tiempo_espera
        self.semaforo = semaforo
        self.limite_historial = limite_historial
        self.prompt_sistema = prompt_sistema
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[logging.Logger] = None
    ) -> "CompletionClient":
        """Construye el cliente a partir de la configuración."""
        cliente_openai = (
            AsyncOpenAI(
                base_url=settings.openrouter_base_url,
                api_key=settings.openrouter_api_key,
            )
            if settings.completion_configured
            else None
        )
        semaforo = (
            asyncio.Semaphore(settings.max_completion_concurrency)
            if cliente_openai
            else None
        )
        return cls(
            cliente_openai=cliente_openai,
            modelo=settings.openrouter_model,
            tiempo_espera=settings.completion_timeout_seconds,
            semaforo=semaforo,
            limite_historial=settings.chat_history_limit,
            logger=logger,
        )

    @property
    def configured(self) -> bool:
        return self.cliente_openai is not None

    def build_messages(
        self, history_tail: Sequence[ChatTurn], user_text: str
    ) -> List[Dict[str, str]]:
        """
        Arma la lista de mensajes para la API.

        System prompt, then at most `limite_historial` recent turns, then the
        new user message.
        """
        recientes: List[ChatTurn] = []
        if self.limite_historial > 0:
            recientes = list(history_tail)[-self.limite_historial :]
        return [
            {"role": "system", "content": self.prompt_sistema},
            *(turn.to_message() for turn in recientes),
            {"role": "user", "content": user_text},
        ]

    async def complete(self, history_tail: Sequence[ChatTurn], user_text: str) -> str:
        """
        Obtiene la respuesta del asistente.

        Raises:
            CompletionNotConfiguredError: Sin credencial, no se llama a la red
            CompletionUpstreamError: Error de la API, de red o timeout
        """
        if not self.cliente_openai:
            raise CompletionNotConfiguredError(COMPLETION_NOT_CONFIGURED)

        mensajes = self.build_messages(history_tail, user_text)

        try:
            if self.semaforo:
                async with self.semaforo:
                    respuesta = await self._crear(mensajes)
            else:
                respuesta = await self._crear(mensajes)
        except asyncio.TimeoutError as exc:
            self.logger.warning(
                f"⚠️ Timeout de completion tras {self.tiempo_espera}s",
                extra={"modelo": self.modelo},
            )
            raise CompletionUpstreamError(COMPLETION_TIMEOUT) from exc
        except OpenAIError as exc:
            self.logger.warning(
                f"⚠️ Error de la API de completion: {exc}",
                extra={"modelo": self.modelo},
            )
            raise CompletionUpstreamError(str(exc)) from exc

        return self._extraer_texto(respuesta)

    async def _crear(self, mensajes: List[Dict[str, str]]):
        return await asyncio.wait_for(
            self.cliente_openai.chat.completions.create(
                model=self.modelo,
                messages=mensajes,
            ),
            timeout=self.tiempo_espera,
        )

    def _extraer_texto(self, respuesta) -> str:
        opciones = getattr(respuesta, "choices", None)
        if not opciones:
            return NO_RESPONSE

        mensaje = getattr(opciones[0], "message", None)
        contenido = (getattr(mensaje, "content", None) or "").strip()
        return contenido or NO_RESPONSE

    async def aclose(self) -> None:
        """Libera la conexión HTTP del cliente."""
        if self.cliente_openai:
            await self.cliente_openai.close()
