"""Plantillas de mensajes del bot."""
