"""Stateless HTTP transport over httpx."""

from typing import Any
from urllib.parse import urlparse

import httpx

from .config import DEFAULT_TIMEOUT


def parse_set_cookie(header: str) -> tuple[str, str]:
    """Split the name=value part off a Set-Cookie header."""
    cookie_part = header.split(";")[0].strip()
    name, _, value = cookie_part.partition("=")
    return name.strip(), value.strip()


def received_cookies(response: httpx.Response) -> dict[str, dict[str, str]]:
    """Collect Set-Cookie values per host, redirect hops included.

    Later responses win over earlier ones for the same host and name.
    """
    by_host: dict[str, dict[str, str]] = {}
    for resp in [*response.history, response]:
        for header in resp.headers.get_list("set-cookie"):
            name, value = parse_set_cookie(header)
            if name:
                by_host.setdefault(resp.url.host, {})[name] = value
    return by_host


def scoped_cookies(url: str, cookies: dict[str, str] | None) -> httpx.Cookies:
    """Cookies bound to the host of url, so redirects elsewhere don't carry them."""
    jar = httpx.Cookies()
    host = urlparse(url).hostname or ""
    for name, value in (cookies or {}).items():
        jar.set(name, value, domain=host)
    return jar


class Transport:
    """Issues one request per short-lived client.

    Cookies are injected per call and only sent to the target host;
    nothing survives between calls.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize transport.

        Args:
            timeout: Default timeout in seconds for every request
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.timeout = timeout
        self._transport = transport

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | str | None = None,
        follow_redirects: bool = True,
        timeout: float | None = None,
        cookies: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and return the fully read response."""
        with httpx.Client(
            cookies=scoped_cookies(url, cookies),
            follow_redirects=follow_redirects,
            timeout=self.timeout if timeout is None else timeout,
            transport=self._transport,
        ) as client:
            response = client.request(
                method.upper(),
                url,
                headers=headers,
                params=params,
                data=data,
                json=json,
                content=content,
            )
            response.read()
        return response
