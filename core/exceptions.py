"""Excepciones personalizadas del dominio para student-bot."""


class CompletionError(Exception):
    """Error en la llamada a la API de chat-completion."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class CompletionNotConfiguredError(CompletionError):
    """No hay credencial configurada para la API de chat-completion."""


class CompletionUpstreamError(CompletionError):
    """La API remota o el transporte fallaron (red, error de API, timeout)."""


class StateHandlerNotFoundError(Exception):
    """Error cuando no hay handler para un modo de conversación."""

    def __init__(self, mode):
        super().__init__(f"No handler found for mode: {mode}")
        self.mode = mode
