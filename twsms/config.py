"""Loading credentials and poll settings from the environment.

Not used by the core: the client and poller take explicit values. This
is for scripts and the command line.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from .types import PollConfig, TwilioCredentials

ACCOUNT_SID_VARS = ("TW_SID", "TWILIO_ACCOUNT_SID")
AUTH_TOKEN_VARS = ("TW_TOKEN", "TWILIO_AUTH_TOKEN")


def _first(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def load_credentials(env: Mapping[str, str] | None = None) -> TwilioCredentials:
    """Read the account SID and auth token from ``env`` (default: os.environ)."""
    env = os.environ if env is None else env
    account_sid = _first(env, ACCOUNT_SID_VARS)
    if not account_sid:
        raise ValueError(f"Missing Twilio account SID; set {' or '.join(ACCOUNT_SID_VARS)}")
    auth_token = _first(env, AUTH_TOKEN_VARS)
    if not auth_token:
        raise ValueError(f"Missing Twilio auth token; set {' or '.join(AUTH_TOKEN_VARS)}")
    return TwilioCredentials(account_sid=account_sid, auth_token=auth_token)


def load_poll_config(env: Mapping[str, str] | None = None) -> PollConfig:
    """Read ``TW_POLL_INTERVAL`` and ``TW_POLL_MAX_ATTEMPTS`` (0 means unbounded)."""
    env = os.environ if env is None else env
    defaults = PollConfig()
    interval = float(env.get("TW_POLL_INTERVAL") or defaults.interval_seconds)
    raw_attempts = env.get("TW_POLL_MAX_ATTEMPTS")
    if raw_attempts is None:
        max_attempts = defaults.max_attempts
    else:
        max_attempts = int(raw_attempts or 0) or None
    return PollConfig(interval_seconds=interval, max_attempts=max_attempts)
