"""Sending SMS through the Twilio Messages API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .decoding import decode_response
from .encoding import FORM_CONTENT_TYPE, encode
from .poller import await_delivery
from .transport import HttpxTransport, Transport, TransportResponse
from .types import DeliveryOutcome, MessageResource, OutboundMessage, PollConfig, TwilioCredentials
from .urls import TWILIO_API_BASE, messages_url

logger = logging.getLogger(__name__)


def send_message(
    credentials: TwilioCredentials,
    encoded_body: str,
    *,
    transport: Transport | None = None,
    base_url: str = TWILIO_API_BASE,
) -> TransportResponse:
    """POST a pre-encoded message body and return the raw reply.

    The reply is not inspected or decoded. Raises TransportError if the
    request could not be completed; there is no retry.
    """
    url = messages_url(credentials.account_sid, base_url)
    logger.debug("Sending SMS via %s", url)
    if transport is None:
        with HttpxTransport() as owned:
            return _post(owned, url, credentials, encoded_body)
    return _post(transport, url, credentials, encoded_body)


def _post(transport: Transport, url: str, credentials: TwilioCredentials, encoded_body: str) -> TransportResponse:
    response = transport.post(
        url,
        data=encoded_body,
        headers={"Content-Type": FORM_CONTENT_TYPE},
        auth=credentials.auth,
    )
    logger.info("Twilio replied %s to SMS send", response.status_code)
    return response


class TwilioSMSClient:
    """Sends SMS and waits for delivery using one set of credentials.

    Usage::

        from twsms import OutboundMessage, TwilioCredentials, TwilioSMSClient

        with TwilioSMSClient(TwilioCredentials("AC...", "token")) as client:
            outcome = client.send_and_wait(
                OutboundMessage(to="+10987654321", from_="+11234567890", body="Hiya")
            )
            print(outcome.resource.sid, outcome.status)
    """

    def __init__(
        self,
        credentials: TwilioCredentials,
        *,
        transport: Transport | None = None,
        base_url: str = TWILIO_API_BASE,
        poll: PollConfig | None = None,
    ) -> None:
        if not credentials.account_sid:
            raise ValueError("TwilioCredentials.account_sid is required")
        if not credentials.auth_token:
            raise ValueError("TwilioCredentials.auth_token is required")
        self._credentials = credentials
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            self._owned_transport = HttpxTransport()
            transport = self._owned_transport
        self._transport: Transport = transport
        self._base_url = base_url
        self._poll = poll or PollConfig()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> TwilioSMSClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ── Public API ────────────────────────────────────────────────

    def send(self, message: OutboundMessage) -> TransportResponse:
        """Encode and submit a message, returning the raw reply."""
        return send_message(
            self._credentials,
            encode(message),
            transport=self._transport,
            base_url=self._base_url,
        )

    def send_and_decode(self, message: OutboundMessage) -> MessageResource:
        """Submit a message and decode the reply into a MessageResource."""
        return decode_response(self.send(message))

    def await_delivery(self, reply: TransportResponse) -> DeliveryOutcome:
        """Poll the message in ``reply`` until it is delivered or fails."""
        return await_delivery(
            reply,
            self._credentials,
            transport=self._transport,
            poll=self._poll,
            base_url=self._base_url,
        )

    def send_and_wait(self, message: OutboundMessage) -> DeliveryOutcome:
        """Submit a message and block until its delivery is settled."""
        return self.await_delivery(self.send(message))

    async def send_async(self, message: OutboundMessage) -> TransportResponse:
        """Submit a message asynchronously (runs sync send in a thread)."""
        return await asyncio.to_thread(self.send, message)

    async def await_delivery_async(self, reply: TransportResponse) -> DeliveryOutcome:
        """Poll asynchronously (runs the blocking poll loop in a thread)."""
        return await asyncio.to_thread(self.await_delivery, reply)

    async def send_and_wait_async(self, message: OutboundMessage) -> DeliveryOutcome:
        """Submit and wait for delivery asynchronously."""
        return await asyncio.to_thread(self.send_and_wait, message)
