"""Collection mode for the student record: surname, then group."""

from models import Mode, StudentRecord
from templates.messages import ASK_GROUP, ASK_SURNAME, STUDENT_SAVED, format_student

from .collection import CollectionHandler


class StudentHandler(CollectionHandler):
    modo = Mode.COLLECTING_STUDENT
    campos = [
        ("surname", ASK_SURNAME),
        ("group", ASK_GROUP),
    ]
    atributo_registro = "student"
    clase_registro = StudentRecord
    mensaje_guardado = STUDENT_SAVED
    formatear = staticmethod(format_student)

    @property
    def nombre(self) -> str:
        return "Student"
