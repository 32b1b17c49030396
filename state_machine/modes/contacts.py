"""Collection mode for contact details: phone, then e-mail."""

from models import ContactsRecord, Mode
from templates.messages import ASK_EMAIL, ASK_PHONE, CONTACTS_SAVED, format_contacts

from .collection import CollectionHandler


class ContactsHandler(CollectionHandler):
    modo = Mode.COLLECTING_CONTACTS
    campos = [
        ("phone", ASK_PHONE),
        ("email", ASK_EMAIL),
    ]
    atributo_registro = "contacts"
    clase_registro = ContactsRecord
    mensaje_guardado = CONTACTS_SAVED
    formatear = staticmethod(format_contacts)

    @property
    def nombre(self) -> str:
        return "Contacts"
