"""Exceptions raised by the twsms library.

Every failure surfaces to the caller as one of these. Nothing is retried
or swallowed internally, so callers can tell a transport hiccup (worth a
retry) from a message the carrier refused (worth telling a human about).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import MessageResource


class TwilioSMSError(RuntimeError):
    """Base class for all twsms errors."""


class EncodeError(TwilioSMSError):
    """Raised when an outbound message cannot be form-url-encoded."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DecodeError(TwilioSMSError):
    """Raised when a provider reply cannot be decoded into a MessageResource."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.status_code = status_code


class TransportError(TwilioSMSError):
    """Raised when the HTTP call itself fails (DNS, TLS, reset, timeout)."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class NotDelivered(TwilioSMSError):
    """Raised when a message reaches a terminal status other than ``delivered``."""

    def __init__(self, status: str, *, resource: MessageResource | None = None) -> None:
        super().__init__(f"Message not delivered: {status}")
        self.status = status
        self.resource = resource


class PollLimitExceeded(TwilioSMSError):
    """Raised when polling hits ``PollConfig.max_attempts`` on a non-terminal status."""

    def __init__(self, status: str, attempts: int, *, resource: MessageResource | None = None) -> None:
        super().__init__(f"Message still {status!r} after {attempts} status checks")
        self.status = status
        self.attempts = attempts
        self.resource = resource
