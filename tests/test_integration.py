"""Integration tests — full send-and-poll flow over a fake Twilio server.

These wire the real client, encoder, decoder, poller and HttpxTransport
together and only replace the network with ``httpx.MockTransport``. They
catch mismatches between what we send and what we expect back: wrong
URLs, missing auth, form fields Twilio would reject, or a poll URL built
from the wrong part of the reply.
"""

from __future__ import annotations

import base64
import json
from urllib.parse import parse_qs

import httpx
import pytest

from twsms import (
    HttpxTransport,
    NotDelivered,
    OutboundMessage,
    PollConfig,
    TwilioCredentials,
    TwilioSMSClient,
)


class FakeTwilio:
    """Minimal stand-in for the Messages API."""

    def __init__(self, statuses: list[str]) -> None:
        self.statuses = list(statuses)
        self.requests: list[httpx.Request] = []
        self.created: dict | None = None

    def _resource(self, status: str) -> dict:
        assert self.created is not None
        return {
            "sid": "SM0001",
            "date_created": "Wed, 22 Jan 2020 15:23:30 +0000",
            "date_updated": "Wed, 22 Jan 2020 15:23:31 +0000",
            "date_sent": None if status == "queued" else "Wed, 22 Jan 2020 15:23:31 +0000",
            "account_sid": "ACint",
            "to": self.created["To"],
            "from": self.created["From"],
            "messaging_service_sid": None,
            "body": self.created["Body"],
            "status": status,
            "num_segments": "1",
            "num_media": "0",
            "direction": "outbound-api",
            "api_version": "2010-04-01",
            "price": None,
            "price_unit": "USD",
            "error_code": 30003 if status == "undelivered" else None,
            "error_message": "Unreachable destination handset" if status == "undelivered" else None,
            "uri": "/2010-04-01/Accounts/ACint/Messages/SM0001.json",
            "subresource_uris": {"media": "/2010-04-01/Accounts/ACint/Messages/SM0001/Media.json"},
            "tags": None,
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        expected_auth = "Basic " + base64.b64encode(b"ACint:int_token").decode()
        if request.headers.get("Authorization") != expected_auth:
            return httpx.Response(401, json={"code": 20003, "message": "Authenticate", "status": 401})

        if request.method == "POST" and request.url.path == "/2010-04-01/Accounts/ACint/Messages.json":
            form = {k: v[0] for k, v in parse_qs(request.content.decode(), keep_blank_values=True).items()}
            self.created = form
            return httpx.Response(201, content=json.dumps(self._resource(self.statuses.pop(0))).encode())

        if request.method == "GET" and request.url.path == "/2010-04-01/Accounts/ACint/Messages/SM0001.json":
            return httpx.Response(200, content=json.dumps(self._resource(self.statuses.pop(0))).encode())

        return httpx.Response(404, json={"code": 20404, "message": "Not found", "status": 404})


def _client(server: FakeTwilio, token: str = "int_token") -> TwilioSMSClient:
    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(server)))
    return TwilioSMSClient(
        TwilioCredentials(account_sid="ACint", auth_token=token),
        transport=transport,
        poll=PollConfig(interval_seconds=0, max_attempts=10),
    )


MESSAGE = OutboundMessage(to="+10987654321", from_="+11234567890", body="Hello, world!")


class TestSendAndWait:
    def test_delivered(self):
        server = FakeTwilio(["queued", "queued", "sent", "delivered"])

        outcome = _client(server).send_and_wait(MESSAGE)

        assert outcome.succeeded
        assert outcome.polls == 3
        assert outcome.resource.body == "Hello, world!"
        assert outcome.resource.date_sent is not None
        assert [r.method for r in server.requests] == ["POST", "GET", "GET", "GET"]

    def test_form_fields_reach_twilio(self):
        server = FakeTwilio(["delivered"])

        _client(server).send_and_wait(MESSAGE)

        post = server.requests[0]
        assert post.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert server.created == {"Body": "Hello, world!", "From": "+11234567890", "To": "+10987654321"}

    def test_undelivered_carries_error_details(self):
        server = FakeTwilio(["queued", "sent", "undelivered"])

        with pytest.raises(NotDelivered) as exc_info:
            _client(server).send_and_wait(MESSAGE)

        assert exc_info.value.status == "undelivered"
        assert exc_info.value.resource is not None
        assert exc_info.value.resource.error_code == "30003"

    def test_sending_is_classified_immediately(self):
        server = FakeTwilio(["sending"])

        with pytest.raises(NotDelivered):
            _client(server).send_and_wait(MESSAGE)

        assert len(server.requests) == 1

    def test_bad_credentials_surface_as_decode_error(self):
        from twsms import DecodeError

        server = FakeTwilio(["queued"])

        with pytest.raises(DecodeError) as exc_info:
            _client(server, token="wrong").send_and_wait(MESSAGE)

        assert exc_info.value.status_code == 401
        assert len(server.requests) == 1
