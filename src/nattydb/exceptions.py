from typing import Any

__all__ = [
    "ConfigError",
    "EnvelopeError",
    "NattyDBError",
    "RequestError",
    "RequestTimeoutError",
    "TransportError",
]


class NattyDBError(Exception):
    """Base exception for all NattyDB errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(NattyDBError):
    """Raised when an endpoint definition is malformed."""


class RequestError(NattyDBError):
    """
    Base class for failures of a single endpoint invocation.

    Attributes:
        status: HTTP status code, ``0`` when no response was obtainable,
            ``None`` when the request timed out.
        timeout: True only when the configured timeout expired.
    """

    def __init__(self, message: str, status: int | None = 0, timeout: bool = False) -> None:
        super().__init__(message)
        self.status = status
        self.timeout = timeout


class TransportError(RequestError):
    """Raised on a non-2xx status or when the request could not be sent."""

    def __init__(self, message: str, status: int = 0) -> None:
        super().__init__(message, status=status, timeout=False)


class RequestTimeoutError(RequestError):
    """Raised when no response arrives within the configured timeout."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status=None, timeout=True)


class EnvelopeError(RequestError):
    """Raised when the (possibly fitted) envelope reports ``success`` as falsy."""

    def __init__(self, envelope: Any, status: int | None = None) -> None:
        super().__init__(f"Request was not successful: {envelope!r}", status=status)
        self.envelope = envelope
