"""Form-url-encoding of outbound messages for the Messages API."""

from __future__ import annotations

from urllib.parse import urlencode

from .errors import EncodeError
from .types import OutboundMessage

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode(message: OutboundMessage) -> str:
    """Encode a message as ``Body=...&From=...&To=...``.

    Field names use Twilio's casing and are emitted in name order. All
    three are always present, even when empty.
    """
    fields = {
        "Body": message.body,
        "From": message.from_,
        "To": message.to,
    }
    for name, value in fields.items():
        if not isinstance(value, str):
            raise EncodeError(
                f"Cannot encode {name}: expected str, got {type(value).__name__}",
                field=name,
            )
    try:
        return urlencode(sorted(fields.items()))
    except UnicodeEncodeError as exc:
        raise EncodeError(f"Cannot encode message as UTF-8: {exc}") from exc
