"""Gateway de Telegram: teclados, comandos y ciclo de vida del polling."""

from .gateway import (
    TelegramGateway,
    back_only_keyboard,
    build_application,
    main_menu_keyboard,
    render_keyboard,
)

__all__ = [
    "TelegramGateway",
    "build_application",
    "main_menu_keyboard",
    "back_only_keyboard",
    "render_keyboard",
]
