"""
Unit tests for the ConversationEngine.

Tests back navigation, menu selection and fallback handling.
"""

import asyncio

import pytest

from models import (
    ChatRole,
    ChatTurn,
    ItRecord,
    Keyboard,
    Mode,
    StudentRecord,
    UserState,
)
from state_machine import ConversationEngine
from templates.messages import (
    ASK_PHONE,
    ASK_SURNAME,
    ASK_TECHNOLOGIES,
    CHAT_ACTIVATED,
    CHAT_NOT_CONFIGURED,
    LABEL_BACK,
    LABEL_CHAT,
    LABEL_CONTACTS,
    LABEL_IT,
    LABEL_STUDENT,
    MENU_FALLBACK,
    MENU_PROMPT,
)
from tests.conftest import FakeCompletionClient


def _historial(n: int = 4):
    roles = [ChatRole.USER, ChatRole.ASSISTANT]
    return [ChatTurn(role=roles[i % 2], content=str(i)) for i in range(n)]


class TestEngineCreacion:
    def test_creacion_con_dependencias_minimas(self, store, fake_completion):
        engine = ConversationEngine(store=store, completion_client=fake_completion)

        assert engine.store is store
        assert engine.completion_client is fake_completion
        assert engine.history_limit == 10


class TestVolverAlMenu:
    @pytest.mark.asyncio
    async def test_volver_desde_chat_limpia_historial(self, engine):
        state = UserState(user_id=1, mode=Mode.CHAT, chat_history=_historial())

        nuevo, replies = await engine.process(state, LABEL_BACK)

        assert nuevo.mode == Mode.DEFAULT
        assert nuevo.step == 0
        assert nuevo.chat_history == []
        assert [(r.text, r.keyboard) for r in replies] == [
            (MENU_PROMPT, Keyboard.MAIN_MENU)
        ]

    @pytest.mark.asyncio
    async def test_volver_desde_coleccion_reinicia_modo_y_paso(self, engine):
        state = UserState(
            user_id=1,
            mode=Mode.COLLECTING_STUDENT,
            step=1,
            draft={"surname": "Шевченко"},
        )

        nuevo, replies = await engine.process(state, LABEL_BACK)

        assert nuevo.mode == Mode.DEFAULT
        assert nuevo.step == 0
        assert nuevo.draft == {}
        assert nuevo.student is None
        assert replies[0].keyboard == Keyboard.MAIN_MENU

    @pytest.mark.asyncio
    async def test_volver_fuera_de_chat_no_toca_historial(self, engine):
        state = UserState(
            user_id=1, mode=Mode.COLLECTING_IT, chat_history=_historial()
        )

        nuevo, _ = await engine.process(state, LABEL_BACK)

        assert len(nuevo.chat_history) == 4

    @pytest.mark.asyncio
    async def test_texto_con_espacios(self, engine):
        state = UserState(user_id=1, mode=Mode.COLLECTING_IT)

        nuevo, _ = await engine.process(state, f"  {LABEL_BACK}\n")

        assert nuevo.mode == Mode.DEFAULT


class TestSeleccionMenu:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "label,modo,prompt",
        [
            (LABEL_STUDENT, Mode.COLLECTING_STUDENT, ASK_SURNAME),
            (LABEL_IT, Mode.COLLECTING_IT, ASK_TECHNOLOGIES),
            (LABEL_CONTACTS, Mode.COLLECTING_CONTACTS, ASK_PHONE),
        ],
    )
    async def test_sin_registro_entra_a_coleccion(self, engine, label, modo, prompt):
        nuevo, replies = await engine.process(UserState(user_id=1), label)

        assert nuevo.mode == modo
        assert nuevo.step == 0
        assert [(r.text, r.keyboard) for r in replies] == [
            (prompt, Keyboard.BACK_ONLY)
        ]

    @pytest.mark.asyncio
    async def test_con_registro_muestra_resumen(self, engine):
        state = UserState(
            user_id=1, student=StudentRecord(surname="Шевченко", group="CS-101")
        )

        nuevo, replies = await engine.process(state, LABEL_STUDENT)

        assert nuevo.mode == Mode.DEFAULT
        assert len(replies) == 1
        assert "Шевченко" in replies[0].text
        assert "CS-101" in replies[0].text
        assert replies[0].keyboard == Keyboard.MAIN_MENU

    @pytest.mark.asyncio
    async def test_desde_chat_limpia_historial_aunque_haya_registro(self, engine):
        state = UserState(
            user_id=1,
            mode=Mode.CHAT,
            it=ItRecord(technologies="Python"),
            chat_history=_historial(),
        )

        nuevo, replies = await engine.process(state, LABEL_IT)

        assert nuevo.chat_history == []
        assert nuevo.mode == Mode.CHAT
        assert replies[0].text == "Ваші IT-технології:\nPython"

    @pytest.mark.asyncio
    async def test_desde_chat_sin_registro_entra_a_coleccion(self, engine):
        state = UserState(user_id=1, mode=Mode.CHAT, chat_history=_historial())

        nuevo, _ = await engine.process(state, LABEL_CONTACTS)

        assert nuevo.mode == Mode.COLLECTING_CONTACTS
        assert nuevo.chat_history == []

    @pytest.mark.asyncio
    async def test_chat_configurado(self, engine):
        nuevo, replies = await engine.process(UserState(user_id=1), LABEL_CHAT)

        assert nuevo.mode == Mode.CHAT
        assert [(r.text, r.keyboard) for r in replies] == [
            (CHAT_ACTIVATED, Keyboard.BACK_ONLY)
        ]

    @pytest.mark.asyncio
    async def test_chat_sin_configurar_permanece_en_chat(self, store):
        engine = ConversationEngine(
            store=store, completion_client=FakeCompletionClient(configured=False)
        )

        nuevo, replies = await engine.process(UserState(user_id=1), LABEL_CHAT)

        assert nuevo.mode == Mode.CHAT
        assert replies[0].text == CHAT_NOT_CONFIGURED
        assert replies[0].keyboard == Keyboard.BACK_ONLY

    @pytest.mark.asyncio
    async def test_chat_otra_vez_limpia_historial(self, engine):
        state = UserState(user_id=1, mode=Mode.CHAT, chat_history=_historial())

        nuevo, _ = await engine.process(state, LABEL_CHAT)

        assert nuevo.mode == Mode.CHAT
        assert nuevo.chat_history == []


class TestFallback:
    @pytest.mark.asyncio
    async def test_texto_libre_en_modo_default(self, engine):
        nuevo, replies = await engine.process(UserState(user_id=1), "привіт")

        assert nuevo.mode == Mode.DEFAULT
        assert [(r.text, r.keyboard) for r in replies] == [
            (MENU_FALLBACK, Keyboard.MAIN_MENU)
        ]


class TestHandle:
    @pytest.mark.asyncio
    async def test_handle_guarda_el_nuevo_estado(self, engine, store):
        await engine.handle(9, LABEL_STUDENT)

        state = await store.get_or_create(9)
        assert state.mode == Mode.COLLECTING_STUDENT

    @pytest.mark.asyncio
    async def test_mensajes_del_mismo_usuario_se_serializan(self, store):
        """Two concurrent messages of one user never interleave."""
        eventos = []

        class CompletionLento(FakeCompletionClient):
            async def complete(self, history_tail, user_text):
                eventos.append(f"inicio {user_text}")
                await asyncio.sleep(0.01)
                eventos.append(f"fin {user_text}")
                return f"ok {user_text}"

        engine = ConversationEngine(store=store, completion_client=CompletionLento())
        await store.save(UserState(user_id=3, mode=Mode.CHAT))

        await asyncio.gather(engine.handle(3, "a"), engine.handle(3, "b"))

        assert eventos in (
            ["inicio a", "fin a", "inicio b", "fin b"],
            ["inicio b", "fin b", "inicio a", "fin a"],
        )
        state = await store.get_or_create(3)
        assert len(state.chat_history) == 4
