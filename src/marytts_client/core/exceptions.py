"""Exception hierarchy for marytts-client."""

from typing import Optional


class MaryTTSError(Exception):
    """Base exception for all marytts-client errors."""


class ConfigError(MaryTTSError):
    """Configuration loading or validation error."""


class TransportError(MaryTTSError):
    """The server could not be reached or the connection failed."""


class ProtocolError(MaryTTSError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        message = f"{status_code}: {self.reason}" if self.reason else str(status_code)
        super().__init__(message)


class NoDataError(MaryTTSError):
    """The response lacked the data the caller asked for."""


class InvalidOptionsError(MaryTTSError):
    """Request options failed validation."""


class ClientClosedError(MaryTTSError):
    """The client was used after cleanup()."""
