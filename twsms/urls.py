"""Twilio REST endpoint construction."""

from __future__ import annotations

TWILIO_API_BASE = "https://api.twilio.com"
API_VERSION = "2010-04-01"


def join_url(base_url: str, path: str) -> str:
    """Join a host base URL and a path, with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def messages_url(account_sid: str, base_url: str = TWILIO_API_BASE) -> str:
    """URL of the account's Messages list, the target of a send."""
    return join_url(base_url, f"{API_VERSION}/Accounts/{account_sid}/Messages.json")
