"""
Configuración de logging estructurado con JSON y correlation IDs.

Este módulo proporciona un sistema de logging estructurado que:
- Emite logs en formato JSON para fácil parsing
- Incluye un correlation ID por update de Telegram
- Soporta context variables para metadata automática (user_id, modo)
- Es compatible con el sistema de logging estándar de Python
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Context variables para correlation tracking
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
request_context: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "request_context", default=None
)

# Atributos estándar de LogRecord que no son campos extra
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "taskName", "message", "asctime",
    }
)

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "telegram", "apscheduler")


def get_correlation_id() -> Optional[str]:
    """Obtiene el correlation ID del contexto actual."""
    return correlation_id.get()


def set_correlation_id(cid: Optional[str] = None) -> str:
    """
    Establece un correlation ID en el contexto.

    Args:
        cid: ID existente o None para generar uno nuevo

    Returns:
        El correlation ID establecido
    """
    cid = cid or str(uuid.uuid4())
    correlation_id.set(cid)
    return cid


def clear_correlation_id() -> None:
    correlation_id.set(None)


def get_request_context() -> Dict[str, Any]:
    return dict(request_context.get() or {})


def set_request_context(**kwargs: Any) -> None:
    """
    Agrega metadata al contexto del update actual.

    Args:
        **kwargs: Pares clave-valor a agregar al contexto
    """
    current = get_request_context()
    current.update(kwargs)
    request_context.set(current)


def clear_request_context() -> None:
    request_context.set(None)


class StructuredFormatter(logging.Formatter):
    """
    Formatter que produce logs en formato JSON estructurado.

    Incluye automáticamente:
    - Timestamp ISO 8601
    - Correlation ID y contexto del update
    - Level, logger name, message
    - Extra fields pasados al log
    """

    def __init__(self, service_name: str = "student-bot"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        cid = get_correlation_id()
        if cid:
            log_data["correlation_id"] = cid

        ctx = get_request_context()
        if ctx:
            log_data["context"] = ctx

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_trace"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter para desarrollo con output legible pero estructurado.
    """

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname:8}{self.RESET}"

        cid = get_correlation_id()
        cid_str = f"[{cid[:8]}] " if cid else ""

        base = f"{timestamp} {level} {cid_str}{record.name}: {record.getMessage()}"

        ctx = get_request_context()
        context_str = " | ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
        if context_str:
            base += f" | {context_str}"

        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"

        return base


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    service_name: str = "student-bot",
) -> None:
    """
    Configura el sistema de logging estructurado.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR)
        json_output: True para JSON, False para humano-legible
        service_name: Nombre del servicio para los logs
    """
    if json_output:
        formatter: logging.Formatter = StructuredFormatter(service_name=service_name)
    else:
        formatter = HumanReadableFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    root_logger.addHandler(handler)

    # Configurar loggers de terceros
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Obtiene un logger configurado.

    Args:
        name: Nombre del logger (usualmente __name__)

    Returns:
        Logger configurado
    """
    return logging.getLogger(name)
