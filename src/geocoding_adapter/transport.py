"""
HTTP transport built on requests.

Adapters only need something that turns a URL into bytes; this is the
default implementation. It does no retrying and no status interpretation
beyond "2xx is a body, anything else is a TransportError".
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

import requests

from .base import HttpClient
from .errors import TransportError

logger = logging.getLogger(__name__)

_SECRET_PARAMS = re.compile(r"(?<=[?&])((?:apiKey|api_key|key)=)[^&]*", re.IGNORECASE)

DEFAULT_USER_AGENT = "geocoding-adapter"


def redact_url(url: str) -> str:
    """Mask credential query parameters so URLs are safe to log."""
    return _SECRET_PARAMS.sub(r"\1***", url)


class RequestsHttpClient(HttpClient):
    """
    HttpClient backed by a requests.Session.

    Args:
        timeout: Request timeout in seconds
        session: Optional pre-configured session (one is created otherwise)
        headers: Extra headers merged over the defaults
    """

    def __init__(
        self,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        headers: Optional[Mapping[str, str]] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.headers = {"Accept": "application/json", "User-Agent": user_agent}
        if headers:
            self.headers.update(headers)

    def fetch(self, url: str) -> bytes:
        safe_url = redact_url(url)
        logger.debug(f"GET {safe_url}")

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {type(e).__name__}", url=safe_url) from e

        logger.debug(f"GET {safe_url} -> {response.status_code}")

        if not response.ok:
            raise TransportError(
                f"Unexpected response status {response.status_code}",
                url=safe_url,
                status_code=response.status_code,
            )
        return response.content

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RequestsHttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
