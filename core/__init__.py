"""Núcleo de dominio: excepciones compartidas."""

from .exceptions import (
    CompletionError,
    CompletionNotConfiguredError,
    CompletionUpstreamError,
    StateHandlerNotFoundError,
)

__all__ = [
    "CompletionError",
    "CompletionNotConfiguredError",
    "CompletionUpstreamError",
    "StateHandlerNotFoundError",
]
