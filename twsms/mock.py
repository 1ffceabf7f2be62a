"""Scripted transport for testing.

Records every request and replays canned replies in order, so code that
sends and polls can be exercised without touching the network.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from .errors import TransportError
from .transport import TransportResponse

ScriptedReply = Union[TransportResponse, BaseException]

_BASE_REPLY: dict[str, Any] = {
    "sid": "SMXXXX",
    "date_created": "Wed, 22 Jan 2020 15:23:30 +0000",
    "date_updated": "Wed, 22 Jan 2020 15:23:30 +0000",
    "date_sent": None,
    "account_sid": "ACXXXX",
    "to": "+10987654321",
    "from": "+11234567890",
    "messaging_service_sid": None,
    "body": "Hiya",
    "status": "queued",
    "num_segments": "1",
    "num_media": "0",
    "direction": "outbound-api",
    "api_version": "2010-04-01",
    "price": None,
    "price_unit": "USD",
    "error_code": None,
    "error_message": None,
    "uri": "/2010-04-01/Accounts/ACXXXX/Messages/SMXXXX.json",
    "subresource_uris": {"media": "/2010-04-01/Accounts/ACXXXX/Messages/SMXXXX/Media.json"},
}


def reply(status: str = "queued", *, status_code: int = 200, **overrides: Any) -> TransportResponse:
    """Build a Messages API JSON reply with the given status.

    ``overrides`` replace fields of the base reply by wire name; pass
    ``from_=`` for the ``from`` field.
    """
    payload = dict(_BASE_REPLY, status=status)
    if "from_" in overrides:
        overrides["from"] = overrides.pop("from_")
    payload.update(overrides)
    return TransportResponse(
        status_code=status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@dataclass
class RecordedRequest:
    """A request made through the MockTransport."""

    method: str
    url: str
    auth: tuple[str, str]
    data: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


class MockTransport:
    """Transport that replays scripted replies and records requests.

    Usage::

        transport = MockTransport([reply("queued"), reply("delivered")])
        outcome = await_delivery(transport.next_reply(), credentials, transport=transport)
        assert len(transport.gets) == 1

    A scripted exception is raised instead of returned. Running out of
    replies raises TransportError.
    """

    def __init__(self, replies: Iterable[ScriptedReply] = ()) -> None:
        self._replies: list[ScriptedReply] = list(replies)
        self.requests: list[RecordedRequest] = []

    def queue(self, *replies: ScriptedReply) -> None:
        """Append replies to the script."""
        self._replies.extend(replies)

    def next_reply(self) -> TransportResponse:
        """Pop the next scripted reply without recording a request."""
        return self._pop("GET", "<direct>")

    @property
    def gets(self) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def posts(self) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == "POST"]

    def post(
        self,
        url: str,
        *,
        data: str,
        headers: Mapping[str, str],
        auth: tuple[str, str],
    ) -> TransportResponse:
        self.requests.append(RecordedRequest("POST", url, auth, data=data, headers=dict(headers)))
        return self._pop("POST", url)

    def get(self, url: str, *, auth: tuple[str, str]) -> TransportResponse:
        self.requests.append(RecordedRequest("GET", url, auth))
        return self._pop("GET", url)

    def reset(self) -> None:
        """Clear recorded requests and any remaining replies."""
        self.requests.clear()
        self._replies.clear()

    def _pop(self, method: str, url: str) -> TransportResponse:
        if not self._replies:
            raise TransportError(f"No scripted reply left for {method} {url}", method=method, url=url)
        scripted = self._replies.pop(0)
        if isinstance(scripted, BaseException):
            raise scripted
        return scripted
