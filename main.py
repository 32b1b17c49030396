"""
Student Bot - Bot de Telegram con menú de datos y chat con IA.

Recopila datos del estudiante, tecnologías IT y contactos, y ofrece un modo
de chat libre contra una API de completions compatible con OpenAI.
"""

import signal
import sys

from telegram import Update
from telegram.ext import Application

from config import settings
from infrastructure.logging import configure_logging, get_logger
from infrastructure.persistence import UserStateStore
from infrastructure.telegram import TelegramGateway, build_application
from services import CompletionClient
from state_machine import ConversationEngine

logger = get_logger(__name__)


def main() -> None:
    configure_logging(
        level=settings.log_level,
        json_output=settings.log_format.lower() == "json",
        service_name=settings.service_name,
    )

    if not settings.bot_token:
        logger.error("❌ BOT_TOKEN no configurado. Añádelo al archivo .env")
        sys.exit(1)

    completion_client = CompletionClient.from_settings(
        settings, logger=get_logger("services.completion_client")
    )
    logger.info("🔧 Chat con IA habilitado: %s", completion_client.configured)

    engine = ConversationEngine(
        store=UserStateStore(logger=get_logger("infrastructure.persistence")),
        completion_client=completion_client,
        history_limit=settings.chat_history_limit,
        logger=get_logger("state_machine.engine"),
    )
    gateway = TelegramGateway(engine, logger=get_logger("infrastructure.telegram"))

    async def startup_event(application: Application) -> None:
        """Se ejecuta al arrancar el polling."""
        logger.info("✅ Бот запущено (polling)")

    async def shutdown_event(application: Application) -> None:
        """Limpiar conexiones al detener el bot."""
        logger.info("🔴 Deteniendo bot...")
        await completion_client.aclose()
        logger.info("✅ Conexiones cerradas")

    application = build_application(
        settings,
        gateway,
        post_init=startup_event,
        post_shutdown=shutdown_event,
    )

    logger.info("🚀 Iniciando Student Bot...")
    application.run_polling(
        allowed_updates=Update.ALL_TYPES,
        stop_signals=(signal.SIGINT, signal.SIGTERM),
    )


if __name__ == "__main__":
    main()
