"""Command line entry point: send an SMS and optionally wait for delivery.

Credentials come from ``TW_SID``/``TW_TOKEN`` (or ``TWILIO_ACCOUNT_SID``/
``TWILIO_AUTH_TOKEN``), optionally via a ``.env`` file. ``--to`` and
``--from`` default to ``TW_TO`` and ``TW_FROM``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .client import TwilioSMSClient
from .config import load_credentials, load_poll_config
from .decoding import decode_response
from .errors import NotDelivered, PollLimitExceeded, TwilioSMSError
from .types import OutboundMessage, PollConfig

EXIT_OK = 0
EXIT_NOT_DELIVERED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twsms", description="Send an SMS through Twilio.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send a message")
    send.add_argument("--to", default=os.getenv("TW_TO"), help="Recipient number (default: $TW_TO)")
    send.add_argument("--from", dest="from_", default=os.getenv("TW_FROM"), help="Sender number (default: $TW_FROM)")
    send.add_argument("--body", required=True, help="Message text")
    send.add_argument("--wait", action="store_true", help="Poll until the message is delivered or fails")
    send.add_argument("--interval", type=float, default=None, help="Seconds between status checks")
    send.add_argument("--max-attempts", type=int, default=None, help="Status checks before giving up (0 = no limit)")
    return parser


def _poll_config(args: argparse.Namespace) -> PollConfig:
    base = load_poll_config()
    interval = base.interval_seconds if args.interval is None else args.interval
    if args.max_attempts is None:
        max_attempts = base.max_attempts
    else:
        max_attempts = args.max_attempts or None
    return PollConfig(interval_seconds=interval, max_attempts=max_attempts)


def _send(args: argparse.Namespace) -> int:
    if not args.to or not args.from_:
        print("error: --to and --from are required (or set TW_TO and TW_FROM)", file=sys.stderr)
        return EXIT_ERROR

    try:
        credentials = load_credentials()
        poll = _poll_config(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    message = OutboundMessage(to=args.to, from_=args.from_, body=args.body)
    with TwilioSMSClient(credentials, poll=poll) as client:
        try:
            reply = client.send(message)
            resource = decode_response(reply)
            print(f"sid={resource.sid} status={resource.status}")
            if not args.wait:
                return EXIT_OK
            outcome = client.await_delivery(reply)
        except (NotDelivered, PollLimitExceeded) as exc:
            print(f"not delivered: {exc.status}", file=sys.stderr)
            return EXIT_NOT_DELIVERED
        except TwilioSMSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_ERROR

    print(f"status={outcome.status} checks={outcome.polls}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "send":
        return _send(args)
    return EXIT_ERROR  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main())
