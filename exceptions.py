"""
Activation errors.

Every failure of the activation pipeline is one of these types so the
HTTP layer can turn it into a `{success: false, error}` outcome without
inspecting the cause.
"""
from typing import Optional


class ActivationError(Exception):
    """Base exception for all activation failures."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidIdentifierError(ActivationError):
    """Raised when an installation id fails local validation."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_IDENTIFIER")


class TransportError(ActivationError):
    """Raised on timeout, connection failure or a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, code="TRANSPORT_ERROR")
        self.status_code = status_code


class MalformedResponseError(ActivationError):
    """Raised when the activation service reply matches no known shape."""

    def __init__(self, message: str = "Activation service returned unrecognized response format"):
        super().__init__(message, code="MALFORMED_RESPONSE")


class RemoteRejectedError(ActivationError):
    """Raised when the activation service explicitly declines the request."""

    def __init__(self, message: str, remote_code: Optional[str] = None):
        super().__init__(message, code="REMOTE_REJECTED")
        self.remote_code = remote_code
