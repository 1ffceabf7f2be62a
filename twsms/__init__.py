"""
twsms — minimal Twilio SMS client with delivery polling.

Builds an outbound message, submits it to the Twilio Messages API over
HTTPS, decodes the JSON reply, and can poll the message until it is
delivered or definitively not.

Quick start::

    from twsms import OutboundMessage, TwilioCredentials, TwilioSMSClient

    credentials = TwilioCredentials(account_sid="AC...", auth_token="...")
    with TwilioSMSClient(credentials) as client:
        reply = client.send(OutboundMessage(to="+10987654321", from_="+11234567890", body="Hiya"))
        outcome = client.await_delivery(reply)
        print(f"Delivered: {outcome.resource.sid}")

The same steps as plain functions::

    from twsms import await_delivery, decode_response, encode, send_message

    reply = send_message(credentials, encode(message))
    resource = decode_response(reply)
    outcome = await_delivery(reply, credentials)

Failures are raised, never returned::

    from twsms import NotDelivered, TransportError

    try:
        client.send_and_wait(message)
    except NotDelivered as exc:
        print(f"Carrier says: {exc.status}")
    except TransportError:
        ...  # network trouble, safe to retry the send

For testing::

    from twsms import MockTransport
    from twsms.mock import reply

    transport = MockTransport([reply("queued"), reply("delivered")])
    client = TwilioSMSClient(credentials, transport=transport)

Module overview
---------------
- ``types``     — OutboundMessage, MessageResource, DeliveryStatus, configs
- ``errors``    — EncodeError, DecodeError, TransportError, NotDelivered
- ``encoding``  — form-url-encoding of outbound messages
- ``decoding``  — JSON reply decoding
- ``transport`` — HttpxTransport, TwilioHttpClientTransport
- ``client``    — send_message and the TwilioSMSClient façade
- ``poller``    — await_delivery status polling
- ``mock``      — MockTransport for offline tests
- ``config``    — credentials and poll settings from the environment
- ``cli``       — ``python -m twsms send ...``

What this library does NOT do:
- Queue, retry or rate-limit sends
- Persist messages or statuses
- Talk to any provider other than Twilio
"""

from .client import TwilioSMSClient, send_message
from .config import load_credentials, load_poll_config
from .decoding import decode, decode_response, decode_str
from .encoding import encode
from .errors import (
    DecodeError,
    EncodeError,
    NotDelivered,
    PollLimitExceeded,
    TransportError,
    TwilioSMSError,
)
from .mock import MockTransport
from .poller import await_delivery, polling_url
from .transport import HttpxTransport, Transport, TransportResponse, TwilioHttpClientTransport
from .types import (
    NON_TERMINAL_STATUSES,
    DeliveryOutcome,
    DeliveryStatus,
    MessageResource,
    OutboundMessage,
    PollConfig,
    TwilioCredentials,
)
from .urls import TWILIO_API_BASE, messages_url

__all__ = [
    # Client
    "TwilioSMSClient",
    "send_message",
    "await_delivery",
    "polling_url",
    "messages_url",
    "TWILIO_API_BASE",
    # Wire format
    "encode",
    "decode",
    "decode_str",
    "decode_response",
    # Transports
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "TwilioHttpClientTransport",
    "MockTransport",
    # Types
    "DeliveryOutcome",
    "DeliveryStatus",
    "MessageResource",
    "NON_TERMINAL_STATUSES",
    "OutboundMessage",
    "PollConfig",
    "TwilioCredentials",
    # Errors
    "TwilioSMSError",
    "EncodeError",
    "DecodeError",
    "TransportError",
    "NotDelivered",
    "PollLimitExceeded",
    # Config
    "load_credentials",
    "load_poll_config",
]
