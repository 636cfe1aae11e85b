"""
Error types shared by services and routes.

Every error raised here is converted to the ``{"error": ..., "details": ...}``
envelope by the handlers registered in ``main.py``.
"""
from typing import Any, Optional


class APIError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None, **extra: Any):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details
        self.extra = extra

    def to_dict(self) -> dict:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class LLMError(Exception):
    """The provider call failed (HTTP status, network or unsupported provider)."""


class LLMTimeoutError(LLMError):
    """The provider call was aborted by the client-side timeout."""


class ResponseParseError(ValueError):
    """Model output could not be parsed into the expected JSON shape."""

    def __init__(self, message: str, preview: str = ""):
        super().__init__(message)
        self.preview = preview


class StoreError(Exception):
    """The hosted database rejected or failed a request."""

    def __init__(self, message: str, code: Optional[str] = None, status_code: int = 500):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class NotFoundError(StoreError):
    """A requested row does not exist (or is not visible to the caller)."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="PGRST116", status_code=404)


class ConflictError(StoreError):
    """The row would duplicate one the user already has."""

    def __init__(self, message: str):
        super().__init__(message, code="conflict", status_code=409)
