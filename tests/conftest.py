"""Shared fixtures and fakes for the weather server tests."""

import copy
import json
from typing import Any, Callable, Optional

import httpx
import pytest

from core.config import Settings

TEST_BASE_URL = "https://owm.test/data/2.5"

ROME_PAYLOAD: dict[str, Any] = {
    "coord": {"lat": 41.9028, "lon": 12.4964},
    "weather": [
        {"id": 800, "main": "Clear", "description": "cielo sereno", "icon": "01d"},
        {"id": 701, "main": "Mist", "description": "foschia", "icon": "50d"},
    ],
    "main": {
        "temp": 18.3,
        "feels_like": 17.9,
        "temp_min": 16.0,
        "temp_max": 20.1,
        "pressure": 1012,
        "humidity": 55,
    },
    "wind": {"speed": 3.2, "deg": 180},
    "name": "Roma",
}


class FakeUpstream:
    """Stand-in for OpenWeatherMap behind an httpx.MockTransport.

    Records every request and answers with ``responder(request)``.
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    @classmethod
    def returning_json(cls, body: Any, status_code: int = 200) -> "FakeUpstream":
        return cls(lambda request: httpx.Response(status_code, json=body))

    @classmethod
    def returning_text(cls, text: str, status_code: int = 200) -> "FakeUpstream":
        return cls(lambda request: httpx.Response(status_code, text=text))

    @classmethod
    def unreachable(cls, message: str = "Connection refused") -> "FakeUpstream":
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=request)

        return cls(refuse)


@pytest.fixture
def rome_payload() -> dict[str, Any]:
    return copy.deepcopy(ROME_PAYLOAD)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", base_url=TEST_BASE_URL)


@pytest.fixture
def settings_without_key() -> Settings:
    return Settings(api_key=None, base_url=TEST_BASE_URL)


def error_body(code: int, message: Optional[str]) -> str:
    """OpenWeatherMap-style error body."""
    body: dict[str, Any] = {"cod": str(code)}
    if message is not None:
        body["message"] = message
    return json.dumps(body)
