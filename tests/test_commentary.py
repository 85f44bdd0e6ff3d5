"""Tests for the Gemini client, the commentary generator and the background service."""

import asyncio
import json
import random
import threading
import time

import httpx
import pytest

from kickoff.commentary import (
    FALLBACK_MESSAGES,
    CommentaryGenerator,
    CommentaryKind,
    CommentaryRequest,
    CommentaryService,
    GeminiClient,
    GenerationResult,
    ImmediateCommentary,
)
from kickoff.exceptions import CommentaryAPIError, CommentaryError, CommentaryRateLimitError


def _gemini_reply(text, tokens=12):
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}}],
        "usageMetadata": {"totalTokenCount": tokens},
    }


def _client(handler):
    return GeminiClient(api_key="test-key", transport=httpx.MockTransport(handler))


async def _generate_once(client):
    try:
        return await client.generate(system="You are a commentator.", user="Goal!")
    finally:
        await client.close()


class FakeClient:
    """Stand-in client returning a fixed line or raising."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0
        self.closed = False

    async def generate(self, system, user, temperature=0.9, max_tokens=64):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return GenerationResult(text=self.text, model="fake", total_tokens=0, latency_ms=1.0)

    async def close(self):
        self.closed = True


class TestGeminiClient:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(CommentaryError):
            GeminiClient()

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert GeminiClient().api_key == "env-key"

    def test_successful_generation(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers["x-goog-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_gemini_reply("What a strike!", tokens=21))

        client = _client(handler)
        result = asyncio.run(_generate_once(client))

        assert result.text == "What a strike!"
        assert result.total_tokens == 21
        assert result.model == "gemini-2.5-flash"
        assert client.request_count == 1
        assert seen["url"].endswith("/models/gemini-2.5-flash:generateContent")
        assert seen["key"] == "test-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Goal!"
        assert seen["body"]["generationConfig"]["maxOutputTokens"] == 64

    def test_rate_limited(self):
        client = _client(lambda request: httpx.Response(429, text="slow down"))
        with pytest.raises(CommentaryRateLimitError):
            asyncio.run(_generate_once(client))

    def test_resource_exhausted_body(self):
        client = _client(
            lambda request: httpx.Response(400, json={"error": {"status": "RESOURCE_EXHAUSTED"}})
        )
        with pytest.raises(CommentaryRateLimitError):
            asyncio.run(_generate_once(client))

    def test_server_error(self):
        client = _client(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(CommentaryAPIError) as exc_info:
            asyncio.run(_generate_once(client))

        assert exc_info.value.status_code == 500
        assert exc_info.value.response_body == "boom"
        assert client.request_count == 0

    def test_empty_candidates(self):
        client = _client(lambda request: httpx.Response(200, json={"candidates": []}))
        with pytest.raises(CommentaryAPIError):
            asyncio.run(_generate_once(client))

    def test_non_json_body(self):
        client = _client(lambda request: httpx.Response(200, text="<html>proxy</html>"))
        with pytest.raises(CommentaryAPIError) as exc_info:
            asyncio.run(_generate_once(client))

        assert exc_info.value.response_body == "<html>proxy</html>"
        assert client.request_count == 0

    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "an", "object"],
            {"candidates": "oops"},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        ],
    )
    def test_malformed_json(self, payload):
        client = _client(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(CommentaryAPIError):
            asyncio.run(_generate_once(client))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = _client(handler)
        with pytest.raises(CommentaryError):
            asyncio.run(_generate_once(client))


class TestCommentaryGenerator:
    def test_offline_without_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        generator = CommentaryGenerator()

        assert not generator.online
        line = asyncio.run(generator.generate("Blue score!", CommentaryKind.GOAL))
        assert line == "Blue score!"

    def test_use_ai_false_skips_client(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert not CommentaryGenerator(use_ai=False).online

    def test_successful_line_is_stripped(self):
        generator = CommentaryGenerator(client=FakeClient("  Blue are flying!  \n"))
        line = asyncio.run(generator.generate("Blue score!", CommentaryKind.GOAL, "Blue 1 - Red 0"))

        assert line == "Blue are flying!"

    @pytest.mark.parametrize(
        "error",
        [
            CommentaryRateLimitError("quota"),
            CommentaryAPIError("bad", 500),
            CommentaryError("timeout"),
        ],
    )
    def test_client_failure_falls_back(self, error):
        generator = CommentaryGenerator(client=FakeClient(error=error), rng=random.Random(3))
        line = asyncio.run(generator.generate("Full time!", CommentaryKind.END))

        assert line in FALLBACK_MESSAGES[CommentaryKind.END]

    def test_non_json_reply_falls_back(self):
        client = _client(lambda request: httpx.Response(200, text="<html>proxy</html>"))
        generator = CommentaryGenerator(client=client, rng=random.Random(5))

        async def run():
            try:
                return await generator.generate("Blue score!", CommentaryKind.GOAL)
            finally:
                await generator.close()

        assert asyncio.run(run()) in FALLBACK_MESSAGES[CommentaryKind.GOAL]

    def test_empty_reply_falls_back(self):
        generator = CommentaryGenerator(client=FakeClient("   "))
        line = asyncio.run(generator.generate("Kick off!", CommentaryKind.START))

        assert line in FALLBACK_MESSAGES[CommentaryKind.START]

    def test_non_ai_kinds_pass_through(self):
        client = FakeClient("never used")
        generator = CommentaryGenerator(client=client)
        line = asyncio.run(generator.generate("End of quarter 1!", CommentaryKind.HALFTIME))

        assert line == "End of quarter 1!"
        assert client.calls == 0

    def test_fallback_without_messages_returns_event(self):
        generator = CommentaryGenerator(use_ai=False)
        assert generator.fallback("Corner!", CommentaryKind.GENERIC) == "Corner!"


class TestImmediateCommentary:
    def test_lines_available_on_next_poll(self):
        commentary = ImmediateCommentary()
        commentary.submit(CommentaryRequest("1", "Blue score!", CommentaryKind.GOAL, timestamp=12))
        commentary.submit(CommentaryRequest("2", "End of quarter 1!", CommentaryKind.HALFTIME))

        lines = commentary.poll()
        assert [line.request_id for line in lines] == ["1", "2"]
        assert lines[0].text == "Blue score!"
        assert lines[0].timestamp == 12
        assert lines[1].text == "End of quarter 1!"
        assert commentary.poll() == []


class TestCommentaryService:
    def _wait_for_lines(self, service, count, timeout=5.0):
        lines = []
        deadline = time.monotonic() + timeout
        while len(lines) < count and time.monotonic() < deadline:
            lines.extend(service.poll())
            time.sleep(0.01)
        return lines

    def test_lines_arrive_in_background(self):
        client = FakeClient("Red pull one back!")
        service = CommentaryService(CommentaryGenerator(client=client))
        try:
            service.submit(CommentaryRequest("7", "Red score!", CommentaryKind.GOAL, timestamp=30))
            lines = self._wait_for_lines(service, 1)
        finally:
            service.stop()

        assert len(lines) == 1
        assert lines[0].request_id == "7"
        assert lines[0].text == "Red pull one back!"
        assert lines[0].timestamp == 30
        assert client.closed
        assert not service.running

    def test_failures_still_produce_a_line(self):
        service = CommentaryService(
            CommentaryGenerator(client=FakeClient(error=CommentaryAPIError("bad", 503)))
        )
        try:
            service.submit(CommentaryRequest("1", "Kick off!", CommentaryKind.START))
            lines = self._wait_for_lines(service, 1)
        finally:
            service.stop()

        assert lines[0].text in FALLBACK_MESSAGES[CommentaryKind.START]

    def test_stop_tolerates_stuck_worker(self):
        release = threading.Event()

        class StuckGenerator(CommentaryGenerator):
            async def close(self):
                # Blocks the worker loop itself, not just this coroutine.
                release.wait(5.0)

        service = CommentaryService(StuckGenerator(use_ai=False))
        service.start()
        try:
            service.stop(timeout=0.05)
            assert not service.running
        finally:
            release.set()

    def test_poll_never_blocks(self):
        service = CommentaryService(CommentaryGenerator(use_ai=False))
        assert service.poll() == []
        service.stop()
