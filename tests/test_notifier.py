"""Tests for LINE push delivery."""

import json

import httpx
import pytest

from oura_digest.errors import TransportError, UpstreamError
from oura_digest.notifier import LineNotifier, build_push_payload


def test_build_push_payload():
    assert build_push_payload("U1", "hello") == {
        "to": "U1",
        "messages": [{"type": "text", "text": "hello"}],
    }


def test_push_payload_json_round_trip():
    text = "■睡眠データ:\n\t　08h:00m:00s"
    decoded = json.loads(json.dumps(build_push_payload("U1", text)))

    assert decoded["to"] == "U1"
    assert decoded["messages"][0]["text"] == text


class TestLineNotifier:
    @pytest.mark.asyncio
    async def test_notify_posts_single_text_message(self, line_settings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await LineNotifier(line_settings, client).notify("おはよう")

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.line.me/v2/bot/message/push"
        assert request.headers["Authorization"] == "Bearer line-token"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "to": "U1234567890",
            "messages": [{"type": "text", "text": "おはよう"}],
        }

    @pytest.mark.asyncio
    async def test_non_200_raises_without_retry(self, line_settings):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, json={"message": "Internal error"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await LineNotifier(line_settings, client).notify("report")

        assert exc_info.value.status == 500
        assert calls == 1

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self, line_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("dns failure", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="dns failure"):
                await LineNotifier(line_settings, client).notify("report")
