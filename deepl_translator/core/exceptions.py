"""
Exception hierarchy for the translation provider system.
"""

from typing import Optional, Dict, Any


class TranslationError(Exception):
    """Base exception for all translation-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context about the error
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" (context: {context_str})"
        return base


class ProtocolError(TranslationError):
    """Raised when the backend answers with a JSON-RPC error envelope.

    The message is always ``API_SERVER_ERROR``; the backend's own error code
    and message are kept in ``context``.
    """

    MESSAGE = "API_SERVER_ERROR"

    def __init__(
        self,
        method: str,
        code: Optional[int] = None,
        backend_message: Optional[str] = None
    ):
        super().__init__(
            self.MESSAGE,
            context={"method": method, "code": code, "message": backend_message},
            recoverable=False
        )
        self.method = method
        self.code = code
        self.backend_message = backend_message


class ShapeMismatchError(TranslationError):
    """Raised when a successful response lacks the expected result fields.

    Always recoverable: the provider falls back to a safe default.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context, recoverable=True)
