"""Project-native typed exceptions for platform adapter failures."""

from __future__ import annotations


class PlatformAdapterError(Exception):
    """Base exception for adapter-level platform API failures.

    Attributes:
        status_code: Optional upstream HTTP status code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PlatformTransportError(PlatformAdapterError, ConnectionError):
    """Transport-level failure during platform API communication."""


class PlatformTransportTimeoutError(PlatformTransportError, TimeoutError):
    """Single request exceeded the configured transport timeout."""


class PlatformDecodeError(PlatformAdapterError, ValueError):
    """Response payload is not JSON or does not match the endpoint contract."""


class PlatformNotFoundError(PlatformAdapterError, LookupError):
    """Requested resource (for example a current droplet) does not exist."""
