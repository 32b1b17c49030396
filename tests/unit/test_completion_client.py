"""
Unit tests for CompletionClient.

The AsyncOpenAI surface is replaced by a stub; no network is used.
"""

import asyncio
import logging

import pytest
from openai import OpenAIError

from config import Settings
from core.exceptions import CompletionNotConfiguredError, CompletionUpstreamError
from models import ChatRole, ChatTurn
from services import CompletionClient
from templates.messages import (
    COMPLETION_NOT_CONFIGURED,
    COMPLETION_TIMEOUT,
    NO_RESPONSE,
    SYSTEM_PROMPT,
)
from tests.conftest import OpenAIStub


def _cliente(stub=None, tiempo_espera=1.0, semaforo=None) -> CompletionClient:
    return CompletionClient(
        cliente_openai=stub,
        modelo="gpt-4o-mini",
        tiempo_espera=tiempo_espera,
        semaforo=semaforo,
        logger=logging.getLogger("test"),
    )


def _turnos(n: int):
    return [
        ChatTurn(
            role=ChatRole.USER if i % 2 == 0 else ChatRole.ASSISTANT,
            content=f"turno {i}",
        )
        for i in range(n)
    ]


class TestSinCredencial:
    @pytest.mark.asyncio
    async def test_falla_sin_cliente_openai(self):
        cliente = _cliente(stub=None)

        assert cliente.configured is False
        with pytest.raises(CompletionNotConfiguredError) as exc_info:
            await cliente.complete([], "привіт")

        assert exc_info.value.reason == COMPLETION_NOT_CONFIGURED

    def test_from_settings_sin_api_key(self):
        cliente = CompletionClient.from_settings(Settings(openrouter_api_key=None))

        assert cliente.configured is False
        assert cliente.semaforo is None

    def test_from_settings_con_api_key(self):
        settings = Settings(
            openrouter_api_key="sk-test",
            openrouter_model="openai/gpt-4o",
            completion_timeout_seconds=12,
            chat_history_limit=6,
        )

        cliente = CompletionClient.from_settings(settings)

        assert cliente.configured is True
        assert cliente.modelo == "openai/gpt-4o"
        assert cliente.tiempo_espera == 12
        assert cliente.limite_historial == 6
        assert cliente.semaforo is not None


class TestMensajes:
    def test_mensajes_con_system_prompt_historial_y_usuario(self):
        cliente = _cliente()

        mensajes = cliente.build_messages(_turnos(2), "нове питання")

        assert mensajes == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "turno 0"},
            {"role": "assistant", "content": "turno 1"},
            {"role": "user", "content": "нове питання"},
        ]

    def test_nunca_mas_de_diez_entradas_de_historial(self):
        cliente = _cliente()

        mensajes = cliente.build_messages(_turnos(14), "ще")

        assert len(mensajes) == 12
        assert mensajes[1]["content"] == "turno 4"
        assert mensajes[-2]["content"] == "turno 13"


class TestComplete:
    @pytest.mark.asyncio
    async def test_respuesta_recortada(self):
        stub = OpenAIStub(contenido="  Привіт!  \n")
        cliente = _cliente(stub)

        respuesta = await cliente.complete(_turnos(2), "привіт")

        assert respuesta == "Привіт!"
        peticion = stub.peticiones[0]
        assert peticion["model"] == "gpt-4o-mini"
        assert peticion["messages"][-1] == {"role": "user", "content": "привіт"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("contenido", [None, "", "   "])
    async def test_respuesta_vacia_usa_texto_por_defecto(self, contenido):
        cliente = _cliente(OpenAIStub(contenido=contenido))

        assert await cliente.complete([], "привіт") == NO_RESPONSE

    @pytest.mark.asyncio
    async def test_sin_opciones_usa_texto_por_defecto(self):
        cliente = _cliente(OpenAIStub(sin_opciones=True))

        assert await cliente.complete([], "привіт") == NO_RESPONSE

    @pytest.mark.asyncio
    async def test_error_de_api_se_convierte_en_upstream(self):
        cliente = _cliente(OpenAIStub(error=OpenAIError("Rate limit exceeded")))

        with pytest.raises(CompletionUpstreamError) as exc_info:
            await cliente.complete([], "привіт")

        assert exc_info.value.reason == "Rate limit exceeded"

    @pytest.mark.asyncio
    async def test_timeout_se_convierte_en_upstream(self):
        cliente = _cliente(OpenAIStub(demora=0.05), tiempo_espera=0.001)

        with pytest.raises(CompletionUpstreamError) as exc_info:
            await cliente.complete([], "привіт")

        assert exc_info.value.reason == COMPLETION_TIMEOUT

    @pytest.mark.asyncio
    async def test_usa_semaforo(self):
        semaforo = asyncio.Semaphore(1)
        stub = OpenAIStub()
        cliente = _cliente(stub, semaforo=semaforo)

        await cliente.complete([], "привіт")

        assert len(stub.peticiones) == 1
        assert not semaforo.locked()

    @pytest.mark.asyncio
    async def test_aclose_cierra_el_cliente(self):
        stub = OpenAIStub()

        await _cliente(stub).aclose()

        assert stub.cerrado is True
