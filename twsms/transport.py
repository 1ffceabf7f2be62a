"""HTTP transports used to reach the Twilio REST API.

The library only needs two calls: a basic-auth POST with a pre-encoded
body, and a basic-auth GET. Anything that implements ``Transport`` can be
plugged into the client and poller; two implementations ship here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import requests
from twilio.http.http_client import TwilioHttpClient  # type: ignore[import-untyped]

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and raw body of an HTTP reply, left unparsed."""

    status_code: int
    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Transport(Protocol):
    """Interface every HTTP transport must implement."""

    def post(
        self,
        url: str,
        *,
        data: str,
        headers: Mapping[str, str],
        auth: tuple[str, str],
    ) -> TransportResponse:
        """POST ``data`` to ``url``; raise TransportError if the call fails."""
        ...

    def get(self, url: str, *, auth: tuple[str, str]) -> TransportResponse:
        """GET ``url``; raise TransportError if the call fails."""
        ...


class HttpxTransport:
    """Transport backed by a reused ``httpx.Client``."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *args: Any) -> None:
        self.close()

    def post(
        self,
        url: str,
        *,
        data: str,
        headers: Mapping[str, str],
        auth: tuple[str, str],
    ) -> TransportResponse:
        return self._request("POST", url, content=data.encode("utf-8"), headers=dict(headers), auth=auth)

    def get(self, url: str, *, auth: tuple[str, str]) -> TransportResponse:
        return self._request("GET", url, auth=auth)

    def _request(self, method: str, url: str, **kwargs: Any) -> TransportResponse:
        try:
            response = self._client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("HTTP %s %s failed: %s", method, url, exc)
            raise TransportError(f"HTTP {method} {url} failed: {exc}", method=method, url=url) from exc
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )


class TwilioHttpClientTransport:
    """Transport that shares the Twilio SDK's ``TwilioHttpClient`` connection pool.

    Requests go through the SDK client's ``requests.Session`` (and its
    proxy and timeout settings) rather than ``TwilioHttpClient.request``,
    which only hands back the body as already-decoded text. Keeping the raw
    bytes lets a reply that is not valid UTF-8 be reported as such.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: TwilioHttpClient | None = None,
    ) -> None:
        self._http_client = http_client if http_client is not None else TwilioHttpClient(timeout=timeout)
        self._timeout = self._http_client.timeout if self._http_client.timeout is not None else timeout

    def post(
        self,
        url: str,
        *,
        data: str,
        headers: Mapping[str, str],
        auth: tuple[str, str],
    ) -> TransportResponse:
        return self._request("POST", url, data=data.encode("utf-8"), headers=dict(headers), auth=auth)

    def get(self, url: str, *, auth: tuple[str, str]) -> TransportResponse:
        return self._request("GET", url, auth=auth)

    def _request(self, method: str, url: str, **kwargs: Any) -> TransportResponse:
        session = self._http_client.session
        try:
            if session is None:
                # TwilioHttpClient(pool_connections=False) keeps no session.
                with requests.Session() as one_off:
                    response = self._send(one_off, method, url, **kwargs)
            else:
                response = self._send(session, method, url, **kwargs)
        except requests.RequestException as exc:
            logger.error("HTTP %s %s failed: %s", method, url, exc)
            raise TransportError(f"HTTP {method} {url} failed: {exc}", method=method, url=url) from exc
        return TransportResponse(
            status_code=int(response.status_code),
            content=response.content,
            headers=dict(response.headers),
        )

    def _send(self, session: requests.Session, method: str, url: str, **kwargs: Any) -> requests.Response:
        return session.request(
            method,
            url,
            proxies=self._http_client.proxy or None,
            timeout=self._timeout,
            allow_redirects=False,
            **kwargs,
        )
