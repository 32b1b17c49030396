"""
Base handler for the data-collection modes.

A collection mode asks for its fields one at a time. The step cursor points
at the field being asked; answers are kept in the state's draft and the
record is only stored once the last field arrives.
"""

from typing import Callable, List, Optional, Tuple, Type

from pydantic import BaseModel

from models import Keyboard, Mode, UserState, steps_for

from ..context import ConversationContext
from .base import ModeHandler


class CollectionHandler(ModeHandler):
    """
    Collects the fields of one record sequentially.

    Subclasses declare:
        modo: Mode handled
        campos: (field name, prompt) pairs, in order
        atributo_registro: UserState attribute that receives the record
        clase_registro: Pydantic model of the record
        mensaje_guardado: Acknowledgement sent when the record is stored
        formatear: Summary formatter for the record
    """

    modo: Mode
    campos: List[Tuple[str, str]]
    atributo_registro: str
    clase_registro: Type[BaseModel]
    mensaje_guardado: str
    formatear: Callable[[BaseModel], str]

    @property
    def modos_que_maneja(self) -> List[Mode]:
        return [self.modo]

    def __init__(self) -> None:
        if len(self.campos) != steps_for(self.modo):
            raise ValueError(
                f"{type(self).__name__}: {len(self.campos)} campos para "
                f"{steps_for(self.modo)} pasos del modo {self.modo.value}"
            )

    def registro(self, state: UserState) -> Optional[BaseModel]:
        return getattr(state, self.atributo_registro)

    def summary(self, state: UserState) -> Optional[str]:
        registro = self.registro(state)
        if registro is None:
            return None
        return self.formatear(registro)

    async def al_entrar(self, contexto: ConversationContext) -> None:
        _, prompt = self.campos[0]
        contexto.reply(prompt, Keyboard.BACK_ONLY)

    async def procesar_mensaje(self, contexto: ConversationContext) -> None:
        paso = contexto.state.step
        campo, _ = self.campos[paso]
        borrador = {**contexto.state.draft, campo: contexto.text}

        if paso + 1 < len(self.campos):
            contexto.update_state(draft=borrador, step=paso + 1)
            _, siguiente_prompt = self.campos[paso + 1]
            contexto.reply(siguiente_prompt, Keyboard.BACK_ONLY)
            return

        registro = self.clase_registro(**borrador)
        contexto.update_state(**{self.atributo_registro: registro})
        contexto.transition(Mode.DEFAULT)
        contexto.log("info", f"{self.nombre}: datos guardados")

        contexto.reply(self.mensaje_guardado)
        contexto.reply(self.formatear(registro), Keyboard.MAIN_MENU)
