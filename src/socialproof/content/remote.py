"""Transport used to fetch notification content from a remote endpoint."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Final, Protocol, runtime_checkable

import requests
from requests.exceptions import RequestException
from typing_extensions import NotRequired, TypedDict

from socialproof.errors import NetworkError, ParseError

logger: Final = logging.getLogger(__name__)


class RemotePayload(TypedDict):
    """Body expected from a notification endpoint."""

    message: str
    timestamp: NotRequired[str]


@runtime_checkable
class Transport(Protocol):
    """Protocol for fetching a JSON body from a URL."""

    def fetch(self, url: str) -> RemotePayload | Any:
        """Fetch and decode a JSON document.

        Args:
            url: Endpoint to query

        Returns:
            The decoded JSON body

        Raises:
            TransportFailure: On network, status or decoding errors
        """
        ...


class HttpTransport:
    """Implementation that performs a single HTTP GET with requests."""

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        """Initialize the transport.

        Args:
            timeout: Timeout for HTTP request in seconds
            session: Optional session to reuse connections
        """
        self.timeout = timeout
        self.session = session

    def fetch(self, url: str) -> RemotePayload | Any:
        try:
            parsed = urllib.parse.urlparse(url)
        except ValueError as exc:
            raise NetworkError(0, f"Invalid URL: {url}", exc) from exc
        if not parsed.scheme or not parsed.netloc:
            raise NetworkError(0, f"Invalid URL: {url}")

        get = self.session.get if self.session is not None else requests.get
        try:
            resp = get(url, timeout=self.timeout)
        except RequestException as exc:
            raise NetworkError(0, f"Network error: {exc}", exc) from exc

        if resp.status_code != 200:
            logger.debug("content: HTTP %s from %s", resp.status_code, url)
            raise NetworkError.from_status(resp.status_code, url)

        try:
            return resp.json()
        except ValueError as exc:  # JSON decode error
            raise ParseError(f"Response from {url} is not JSON", exc) from exc
