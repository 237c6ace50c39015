from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from geocoding_adapter.base import HttpClient  # noqa: E402


class RecordingHttpClient(HttpClient):
    """HttpClient fake that records URLs and replays a canned body or error."""

    def __init__(self, body: Any = b'{"features": []}', error: Exception | None = None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        self.body = body
        self.error = error
        self.urls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def recording_client():
    return RecordingHttpClient()


@pytest.fixture
def boston_body():
    return {
        "features": [
            {"properties": {"country_code": "US", "city": "Boston", "lat": 42.36, "lon": -71.06}}
        ]
    }


@pytest.fixture
def full_properties():
    return {
        "country_code": "de",
        "country": "Germany",
        "street": "Unter den Linden",
        "housenumber": "77",
        "city": "Berlin",
        "postcode": "10117",
        "lat": 52.5163,
        "lon": 13.3777,
        "timezone": {"name": "Europe/Berlin", "offset_STD": "+01:00"},
        "formatted": "Unter den Linden 77, 10117 Berlin, Germany",
    }
