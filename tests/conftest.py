"""Shared test fixtures for the twsms library."""

import pytest

from twsms import MockTransport, OutboundMessage, PollConfig, TwilioCredentials

SAMPLE_REPLY = (
    '{"sid": "XXXX", "date_created": "Wed, 22 Jan 2020 15:23:30 +0000", '
    '"date_updated": "Wed, 22 Jan 2020 15:23:30 +0000", "date_sent": null, '
    '"account_sid": "ACXXXX", "to": "+11234567890", "from": "+10987654321", '
    '"messaging_service_sid": null, "body": "Sent from your Twilio trial account - Hiya", '
    '"status": "queued", "num_segments": "1", "num_media": "0", "direction": "outbound-api", '
    '"api_version": "2010-04-01", "price": null, "price_unit": "USD", "error_code": null, '
    '"error_message": null, "uri": "/2010-04-01/Accounts/ACXXXX/Messages/XXXX.json", '
    '"subresource_uris": {"media": "/2010-04-01/Accounts/ACXXXX/Messages/XXXX/Media.json"}}'
)


@pytest.fixture
def credentials() -> TwilioCredentials:
    return TwilioCredentials(account_sid="ACtest123", auth_token="test_token_456")


@pytest.fixture
def sample_reply() -> str:
    return SAMPLE_REPLY


@pytest.fixture
def outbound_message() -> OutboundMessage:
    return OutboundMessage(to="+10987654321", from_="+11234567890", body="Hello, world!")


@pytest.fixture
def fast_poll() -> PollConfig:
    return PollConfig(interval_seconds=0, max_attempts=50)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()
