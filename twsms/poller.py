"""Delivery status polling.

After a send, Twilio reports the message as ``queued`` and later ``sent``
while it moves through the carrier. ``await_delivery`` re-fetches the
message resource until it leaves those two statuses and then classifies
the result: ``delivered`` is success, anything else raises NotDelivered.

Only ``queued`` and ``sent`` are polled on. A reply of ``sending``,
``accepted`` or ``scheduled`` is classified straight away and so ends in
NotDelivered; widening that set needs confirmation of provider semantics.
"""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack

from .decoding import decode_response
from .errors import NotDelivered, PollLimitExceeded
from .transport import HttpxTransport, Transport, TransportResponse
from .types import DeliveryOutcome, DeliveryStatus, MessageResource, PollConfig, TwilioCredentials
from .urls import TWILIO_API_BASE, join_url

logger = logging.getLogger(__name__)


def polling_url(resource: MessageResource, base_url: str = TWILIO_API_BASE) -> str:
    """Absolute URL for re-fetching ``resource``."""
    return join_url(base_url, resource.uri)


def await_delivery(
    initial_reply: TransportResponse,
    credentials: TwilioCredentials,
    *,
    transport: Transport | None = None,
    poll: PollConfig | None = None,
    base_url: str = TWILIO_API_BASE,
) -> DeliveryOutcome:
    """Poll a sent message until it is delivered or definitively not.

    Args:
        initial_reply: The reply returned by the original send.
        credentials: The same credentials used for the send.
        transport: HTTP transport; a temporary HttpxTransport if omitted.
        poll: Delay and attempt bound between status checks.
        base_url: Host the resource ``uri`` is resolved against.

    Returns:
        DeliveryOutcome holding the final resource and the number of GETs.

    Raises:
        DecodeError: the initial reply or any polled reply is malformed.
        TransportError: a status GET failed.
        NotDelivered: the message ended in a status other than ``delivered``.
        PollLimitExceeded: ``poll.max_attempts`` GETs were spent while the
            message was still queued or sent.
    """
    poll = poll or PollConfig()
    resource = decode_response(initial_reply)
    url = polling_url(resource, base_url)
    logger.debug("Polling %s for message %s (status=%s)", url, resource.sid, resource.status)

    polls = 0
    with ExitStack() as stack:
        if transport is None:
            transport = stack.enter_context(HttpxTransport())

        while resource.is_non_terminal:
            if poll.max_attempts is not None and polls >= poll.max_attempts:
                logger.warning(
                    "Giving up on message %s after %d status checks (status=%s)",
                    resource.sid,
                    polls,
                    resource.status,
                )
                raise PollLimitExceeded(resource.status, polls, resource=resource)
            if poll.interval_seconds > 0:
                time.sleep(poll.interval_seconds)

            reply = transport.get(url, auth=credentials.auth)
            polls += 1
            resource = decode_response(reply)
            logger.debug("Message %s status=%s (check %d)", resource.sid, resource.status, polls)

    if resource.status == DeliveryStatus.DELIVERED.value:
        logger.info("Message %s delivered after %d status checks", resource.sid, polls)
        return DeliveryOutcome(resource=resource, polls=polls)

    if resource.delivery_status is None:
        logger.warning("Unknown Twilio message status received: %s", resource.status)
    logger.info("Message %s not delivered: status=%s", resource.sid, resource.status)
    raise NotDelivered(resource.status, resource=resource)
