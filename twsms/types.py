"""Core types for the twsms library."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import DecodeError


class DeliveryStatus(str, Enum):
    """Message status values reported by the Twilio Messages API."""

    ACCEPTED = "accepted"
    SCHEDULED = "scheduled"
    QUEUED = "queued"
    SENDING = "sending"
    SENT = "sent"
    DELIVERED = "delivered"
    UNDELIVERED = "undelivered"
    FAILED = "failed"
    RECEIVING = "receiving"
    RECEIVED = "received"
    READ = "read"
    CANCELED = "canceled"


# Statuses the poller keeps re-fetching on. Deliberately narrow: "sending",
# "accepted" and "scheduled" are classified immediately.
NON_TERMINAL_STATUSES: frozenset[str] = frozenset({DeliveryStatus.QUEUED.value, DeliveryStatus.SENT.value})


# ── Credentials and configuration ─────────────────────────────────────


@dataclass(frozen=True, slots=True)
class TwilioCredentials:
    """Account SID and auth token used for HTTP basic auth."""

    account_sid: str
    auth_token: str = field(repr=False)

    @property
    def auth(self) -> tuple[str, str]:
        """The ``(username, password)`` pair sent with every request."""
        return (self.account_sid, self.auth_token)


@dataclass(frozen=True, slots=True)
class PollConfig:
    """Bounds for the delivery poll loop.

    ``interval_seconds`` is slept before every status GET. ``max_attempts``
    caps the number of GETs; ``None`` polls until the status leaves the
    non-terminal set, however long that takes.
    """

    interval_seconds: float = 1.0
    max_attempts: int | None = 300

    def __post_init__(self) -> None:
        if not math.isfinite(self.interval_seconds) or self.interval_seconds < 0:
            raise ValueError("PollConfig.interval_seconds must be a finite number >= 0")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("PollConfig.max_attempts must be >= 1 or None")


# ── Outbound message ──────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """An SMS to submit. Empty strings are sent as-is, never omitted."""

    to: str
    from_: str
    body: str


# ── Message resource ──────────────────────────────────────────────────

# (attribute, wire key, required)
_TEXT_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("sid", "sid", True),
    ("date_created", "date_created", True),
    ("date_updated", "date_updated", True),
    ("date_sent", "date_sent", False),
    ("account_sid", "account_sid", True),
    ("to", "to", True),
    ("from_", "from", True),
    ("messaging_service_sid", "messaging_service_sid", False),
    ("body", "body", True),
    ("status", "status", True),
    ("num_segments", "num_segments", True),
    ("num_media", "num_media", True),
    ("direction", "direction", True),
    ("api_version", "api_version", True),
    ("price", "price", False),
    ("price_unit", "price_unit", True),
    ("error_code", "error_code", False),
    ("error_message", "error_message", False),
    ("uri", "uri", True),
)


@dataclass(frozen=True, slots=True)
class MessageResource:
    """A message resource as returned by ``Messages.json``.

    Built fresh from every reply and never mutated. Optional fields are
    ``None`` until the provider fills them in (``date_sent`` once the
    carrier accepts the message, ``error_*`` only on failure).
    """

    sid: str
    date_created: str
    date_updated: str
    date_sent: str | None
    account_sid: str
    to: str
    from_: str
    messaging_service_sid: str | None
    body: str
    status: str
    num_segments: str
    num_media: str
    direction: str
    api_version: str
    price: str | None
    price_unit: str
    error_code: str | None
    error_message: str | None
    uri: str
    subresource_uris: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "subresource_uris", MappingProxyType(dict(self.subresource_uris)))

    @property
    def delivery_status(self) -> DeliveryStatus | None:
        """``status`` as a DeliveryStatus, or None for a value we don't know."""
        try:
            return DeliveryStatus(self.status)
        except ValueError:
            return None

    @property
    def is_non_terminal(self) -> bool:
        return self.status in NON_TERMINAL_STATUSES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MessageResource:
        """Build a MessageResource from a decoded JSON object.

        Unknown keys are ignored. A missing required key or a value of the
        wrong JSON type raises DecodeError; nothing partial is returned.
        """
        if not isinstance(data, Mapping):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for attr, key, required in _TEXT_FIELDS:
            if key not in data:
                if required:
                    raise DecodeError(f"Missing required field {key!r}", field=key)
                values[attr] = None
                continue
            value = data[key]
            if value is None:
                if required:
                    raise DecodeError(f"Field {key!r} must not be null", field=key)
                values[attr] = None
            elif key == "error_code" and isinstance(value, int) and not isinstance(value, bool):
                # The live API sends error codes as JSON numbers.
                values[attr] = str(value)
            elif isinstance(value, str):
                values[attr] = value
            else:
                raise DecodeError(
                    f"Field {key!r} must be a string, got {type(value).__name__}",
                    field=key,
                )

        values["subresource_uris"] = _parse_subresource_uris(data)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the provider's wire field names."""
        result: dict[str, Any] = {key: getattr(self, attr) for attr, key, _ in _TEXT_FIELDS}
        result["subresource_uris"] = dict(self.subresource_uris)
        return result


def _parse_subresource_uris(data: Mapping[str, Any]) -> dict[str, str]:
    if "subresource_uris" not in data:
        raise DecodeError("Missing required field 'subresource_uris'", field="subresource_uris")
    raw = data["subresource_uris"]
    if not isinstance(raw, Mapping):
        raise DecodeError(
            f"Field 'subresource_uris' must be an object, got {type(raw).__name__}",
            field="subresource_uris",
        )
    uris: dict[str, str] = {}
    for name, uri in raw.items():
        if not isinstance(uri, str):
            raise DecodeError(
                f"subresource_uris[{name!r}] must be a string, got {type(uri).__name__}",
                field="subresource_uris",
            )
        uris[name] = uri
    return uris


# ── Poll result ───────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DeliveryOutcome:
    """Successful end of a delivery poll."""

    resource: MessageResource
    polls: int = 0

    @property
    def status(self) -> str:
        return self.resource.status

    @property
    def succeeded(self) -> bool:
        return self.resource.status == DeliveryStatus.DELIVERED.value
