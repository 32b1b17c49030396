"""
Gateway de mensajería sobre python-telegram-bot.

Traduce updates de Telegram a llamadas del motor de conversación y envía
las respuestas con el teclado correspondiente.
"""

import logging
from typing import Awaitable, Callable, Optional

from telegram import ReplyKeyboardMarkup, Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from config import Settings
from infrastructure.logging import (
    clear_correlation_id,
    clear_request_context,
    set_correlation_id,
    set_request_context,
)
from models import Keyboard, Reply
from templates.messages import (
    BACK_ONLY_LAYOUT,
    HELP_TEXT,
    MAIN_MENU_LAYOUT,
    UNEXPECTED_ERROR,
    greeting,
)


def main_menu_keyboard() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(MAIN_MENU_LAYOUT, resize_keyboard=True)


def back_only_keyboard() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(BACK_ONLY_LAYOUT, resize_keyboard=True)


def render_keyboard(keyboard: Optional[Keyboard]) -> Optional[ReplyKeyboardMarkup]:
    """Convierte la variante de teclado del motor en markup de Telegram."""
    if keyboard == Keyboard.MAIN_MENU:
        return main_menu_keyboard()
    if keyboard == Keyboard.BACK_ONLY:
        return back_only_keyboard()
    return None


class TelegramGateway:
    """
    Adaptador entre Telegram y el motor de conversación.

    Registra los handlers de /start, /help y mensajes de texto en una
    Application de python-telegram-bot.
    """

    def __init__(self, engine, logger: Optional[logging.Logger] = None):
        """
        Args:
            engine: ConversationEngine que decide las respuestas
            logger: Logger instance
        """
        self.engine = engine
        self.logger = logger or logging.getLogger(__name__)

    async def on_start(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Saluda al usuario y muestra el menú principal."""
        if not update.message:
            return
        user = update.effective_user
        first_name = user.first_name if user else None
        await update.message.reply_text(
            greeting(first_name), reply_markup=main_menu_keyboard()
        )

    async def on_help(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        if not update.message:
            return
        await update.message.reply_text(HELP_TEXT)

    async def on_text(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Procesa un mensaje de texto y envía las respuestas del motor."""
        if not update.message or not update.effective_user:
            return

        user_id = update.effective_user.id
        set_correlation_id(str(update.update_id))
        set_request_context(user_id=user_id)

        try:
            replies = await self.engine.handle(user_id, update.message.text or "")
        except Exception as e:
            self.logger.exception(
                f"❌ Error procesando mensaje: {e}", extra={"user_id": user_id}
            )
            await update.message.reply_text(UNEXPECTED_ERROR)
            return
        finally:
            clear_request_context()
            clear_correlation_id()

        for reply in replies:
            await self._send(update, reply)

    async def _send(self, update: Update, reply: Reply) -> None:
        markup = render_keyboard(reply.keyboard)
        if markup is None:
            await update.message.reply_text(reply.text)
        else:
            await update.message.reply_text(reply.text, reply_markup=markup)

    async def on_error(
        self, update: object, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Registra errores del transporte que python-telegram-bot no maneja."""
        self.logger.error(
            f"❌ Error en update de Telegram: {context.error}",
            exc_info=context.error,
        )

    def register(self, application: Application) -> None:
        application.add_handler(CommandHandler("start", self.on_start))
        application.add_handler(CommandHandler("help", self.on_help))
        application.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self.on_text)
        )
        application.add_error_handler(self.on_error)


def build_application(
    settings: Settings,
    gateway: TelegramGateway,
    post_init: Optional[Callable[[Application], Awaitable[None]]] = None,
    post_shutdown: Optional[Callable[[Application], Awaitable[None]]] = None,
) -> Application:
    """
    Construye la Application de Telegram con los handlers del gateway.

    Args:
        settings: Configuración con el token del bot
        gateway: Gateway que recibe los updates
        post_init: Callback al arrancar el polling
        post_shutdown: Callback al detener la Application

    Returns:
        Application lista para run_polling
    """
    builder = (
        ApplicationBuilder()
        .token(settings.bot_token)
        .concurrent_updates(settings.concurrent_updates)
    )
    if post_init:
        builder = builder.post_init(post_init)
    if post_shutdown:
        builder = builder.post_shutdown(post_shutdown)

    application = builder.build()
    gateway.register(application)
    return application
