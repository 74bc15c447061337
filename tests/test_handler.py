"""Tests for the get-forecast handler."""

import json
import logging

import httpx
import pytest

from conftest import FakeUpstream, error_body
from core.handler import (
    MISSING_CREDENTIAL_MESSAGE,
    RETRIEVAL_FAILED_MESSAGE,
    handle_get_forecast,
    text_reply,
)
from core.models import Coordinate, TextBlock, ToolReply

ROME = Coordinate(latitude=41.9028, longitude=12.4964)
NULL_ISLAND = Coordinate(latitude=0, longitude=0)


def only_text(reply: ToolReply) -> str:
    assert len(reply.content) == 1
    assert reply.content[0].type == "text"
    return reply.content[0].text


class TestTextReply:
    def test_single_block(self):
        assert text_reply("ciao") == ToolReply(content=[TextBlock(text="ciao", type="text")])


class TestHandleGetForecast:
    """Tests for handle_get_forecast."""

    @pytest.mark.asyncio
    async def test_success(self, settings, rome_payload):
        upstream = FakeUpstream.returning_json(rome_payload)

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings, client=client)

        text = only_text(reply)
        assert text.startswith("Meteo attuale per: **Roma**")
        assert "☀️ Condizioni: Cielo sereno" in text

    @pytest.mark.asyncio
    async def test_missing_credential_skips_upstream(self, settings_without_key, rome_payload):
        upstream = FakeUpstream.returning_json(rome_payload)

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings_without_key, client=client)

        assert only_text(reply) == MISSING_CREDENTIAL_MESSAGE
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_missing_credential_with_unreachable_upstream(self, settings_without_key):
        upstream = FakeUpstream.unreachable()

        async with upstream.client() as client:
            reply = await handle_get_forecast(NULL_ISLAND, settings_without_key, client=client)

        assert only_text(reply) == MISSING_CREDENTIAL_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
    async def test_http_failure(self, settings, status):
        upstream = FakeUpstream(
            lambda request: httpx.Response(status, text=error_body(status, "nope"))
        )

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings, client=client)

        assert only_text(reply) == RETRIEVAL_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_unreachable_upstream(self, settings):
        upstream = FakeUpstream.unreachable("Name or service not known")

        async with upstream.client() as client:
            reply = await handle_get_forecast(NULL_ISLAND, settings, client=client)

        text = only_text(reply)
        assert text == RETRIEVAL_FAILED_MESSAGE
        assert "Traceback" not in text
        assert "Name or service not known" not in text

    @pytest.mark.asyncio
    async def test_malformed_payload(self, settings, rome_payload):
        rome_payload["weather"] = []
        upstream = FakeUpstream.returning_json(rome_payload)

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings, client=client)

        assert only_text(reply) == RETRIEVAL_FAILED_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, literal", [
        ("pressure", "1e400"),
        ("humidity", "Infinity"),
        ("temp", "NaN"),
        ("temp", "-1e400"),
    ])
    async def test_non_finite_number(self, settings, rome_payload, field, literal):
        original = json.dumps(rome_payload["main"][field])
        body = json.dumps(rome_payload).replace(f'"{field}": {original}', f'"{field}": {literal}')
        upstream = FakeUpstream.returning_text(body)

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings, client=client)

        assert only_text(reply) == RETRIEVAL_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_missing_credential_logged_once(self, settings_without_key, caplog):
        caplog.set_level(logging.DEBUG)

        await handle_get_forecast(ROME, settings_without_key)

        mentions = [r for r in caplog.records if "OPENWEATHER_API_KEY" in r.getMessage()]
        assert len(mentions) == 1
        assert mentions[0].levelno == logging.ERROR

    @pytest.mark.asyncio
    async def test_failure_never_reports_misconfiguration(self, settings):
        upstream = FakeUpstream(
            lambda request: httpx.Response(401, text=error_body(401, "Invalid API key."))
        )

        async with upstream.client() as client:
            reply = await handle_get_forecast(ROME, settings, client=client)

        assert only_text(reply) != MISSING_CREDENTIAL_MESSAGE

    @pytest.mark.asyncio
    async def test_calls_are_independent(self, settings, rome_payload):
        answers = iter([
            httpx.Response(500, text=error_body(500, "boom")),
            httpx.Response(200, json=rome_payload),
        ])
        upstream = FakeUpstream(lambda request: next(answers))

        async with upstream.client() as client:
            first = await handle_get_forecast(ROME, settings, client=client)
            second = await handle_get_forecast(ROME, settings, client=client)

        assert only_text(first) == RETRIEVAL_FAILED_MESSAGE
        assert only_text(second).startswith("Meteo attuale per: **Roma**")
