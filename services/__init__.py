"""Servicios externos del bot."""

from .completion_client import CompletionClient

__all__ = ["CompletionClient"]
