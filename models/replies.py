"""Modelos de respuesta saliente hacia el gateway de mensajería."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Keyboard(str, Enum):
    """Variantes de teclado de respuesta."""

    MAIN_MENU = "main_menu"
    BACK_ONLY = "back_only"


class Reply(BaseModel):
    """
    Mensaje de salida.

    `keyboard=None` sends the text without replacing the keyboard the user
    already has.
    """

    text: str
    keyboard: Optional[Keyboard] = None
