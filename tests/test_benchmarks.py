"""Benchmark tests for the encode/decode/poll hot paths.

Run with:
    pytest tests/test_benchmarks.py --benchmark-only -v
"""

from __future__ import annotations

from twsms import MockTransport, OutboundMessage, PollConfig, TwilioCredentials, await_delivery, decode_str, encode
from twsms.mock import reply


def test_bench_encode(benchmark):
    message = OutboundMessage(to="+10987654321", from_="+11234567890", body="Your code is 123456 " * 8)
    result = benchmark(encode, message)
    assert result.startswith("Body=Your+code")


def test_bench_decode(benchmark, sample_reply: str):
    result = benchmark(decode_str, sample_reply)
    assert result.status == "queued"


def test_bench_poll_ten_checks(benchmark):
    credentials = TwilioCredentials("ACbench", "token")
    poll = PollConfig(interval_seconds=0, max_attempts=None)

    def run():
        transport = MockTransport([reply("sent")] * 9 + [reply("delivered")])
        return await_delivery(reply("queued"), credentials, transport=transport, poll=poll)

    outcome = benchmark(run)
    assert outcome.polls == 10
