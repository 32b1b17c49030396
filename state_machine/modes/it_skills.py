"""Collection mode for IT technologies, a single free-text field."""

from models import ItRecord, Mode
from templates.messages import ASK_TECHNOLOGIES, IT_SAVED, format_it

from .collection import CollectionHandler


class ItSkillsHandler(CollectionHandler):
    modo = Mode.COLLECTING_IT
    campos = [("technologies", ASK_TECHNOLOGIES)]
    atributo_registro = "it"
    clase_registro = ItRecord
    mensaje_guardado = IT_SAVED
    formatear = staticmethod(format_it)

    @property
    def nombre(self) -> str:
        return "IT skills"
