"""Decoding of Messages API replies into MessageResource values."""

from __future__ import annotations

import json

from .errors import DecodeError
from .transport import TransportResponse
from .types import MessageResource


def decode(body: bytes) -> MessageResource:
    """Decode raw reply bytes (UTF-8 JSON) into a MessageResource."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Reply is not valid UTF-8: {exc}") from exc
    return decode_str(text)


def decode_str(text: str) -> MessageResource:
    """Decode a reply that has already been read into a string."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise DecodeError(f"Reply is not valid JSON: {exc}") from exc
    return MessageResource.from_dict(data)


def decode_response(response: TransportResponse) -> MessageResource:
    """Decode a transport reply, tagging any failure with its HTTP status."""
    try:
        return decode(response.content)
    except DecodeError as exc:
        raise DecodeError(
            f"{exc} (HTTP {response.status_code})",
            field=exc.field,
            status_code=response.status_code,
        ) from exc
