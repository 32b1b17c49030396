"""
Módulo de logging estructurado.

Proporciona logging en formato JSON con correlation IDs
para seguir cada update de Telegram a través del bot.
"""

from .structured_logger import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_correlation_id,
    clear_request_context,
    configure_logging,
    get_correlation_id,
    get_logger,
    get_request_context,
    set_correlation_id,
    set_request_context,
)

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    # Context management
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_request_context",
    "set_request_context",
    "clear_request_context",
    # Formatters
    "StructuredFormatter",
    "HumanReadableFormatter",
]
