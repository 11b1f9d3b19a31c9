"""
Tests for the Gemini client (httpx.MockTransport, no network).
"""

import json

import httpx
import pytest

from trader.config import Settings
from trader.llm.gemini_client import GeminiClient, GeminiError, GeminiOverloadedError

pytestmark = pytest.mark.anyio


def ok_body(text="Match report", finish_reason="STOP"):
    return {
        "candidates": [{
            "content": {"parts": [{"text": text}]},
            "finishReason": finish_reason,
            "groundingMetadata": {
                "groundingAttributions": [
                    {"web": {"uri": "https://news.example/a", "title": "Team news A"}},
                    {"web": {"uri": "https://news.example/b"}},
                ],
            },
        }],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 480},
        "modelVersion": "gemini-2.5-flash",
    }


def make_client(handler, api_key="test-key", **overrides):
    settings = Settings(GEMINI_RETRY_DELAYS=[0, 0], **overrides)
    return GeminiClient(api_key, settings, transport=httpx.MockTransport(handler))


class TestGenerate:
    """Successful calls."""

    async def test_returns_text_sources_and_usage(self):
        """Text, grounding sources and token usage are extracted."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=ok_body())

        async with make_client(handler) as client:
            result = await client.generate("Analyze", "You are an analyst")

        assert result.text == "Match report"
        assert [(s.uri, s.title) for s in result.sources] == [("https://news.example/a", "Team news A")]
        assert (result.tokens_in, result.tokens_out) == (120, 480)
        assert result.finish_reason == "STOP"
        assert result.attempts == 1
        assert result.to_dict() == {
            "text": "Match report",
            "sources": [{"uri": "https://news.example/a", "title": "Team news A"}],
        }

        request = requests[0]
        assert request.url.path.endswith("/models/gemini-2.5-flash:generateContent")
        assert request.url.params["key"] == "test-key"

    async def test_payload_with_search(self):
        """Search grounding adds the google_search tool."""
        payloads = []

        def handler(request: httpx.Request) -> httpx.Response:
            payloads.append(json.loads(request.content))
            return httpx.Response(200, json=ok_body())

        async with make_client(handler) as client:
            await client.generate("Analyze", "System", include_search=True)
            await client.generate("Analyze", "System", include_search=False)

        with_search, without_search = payloads
        assert with_search["contents"] == [{"parts": [{"text": "Analyze"}]}]
        assert with_search["systemInstruction"] == {"parts": [{"text": "System"}]}
        assert with_search["tools"] == [{"google_search": {}}]
        assert "tools" not in without_search

    async def test_configured_model(self):
        """The model name comes from settings."""
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json=ok_body())

        async with make_client(handler, GEMINI_MODEL="gemini-2.5-pro") as client:
            await client.generate("Analyze", "System")
        assert paths[0].endswith("/models/gemini-2.5-pro:generateContent")


class TestRetries:
    """Only 503 is retried."""

    async def test_retries_503_then_succeeds(self):
        """A 503 is retried."""
        statuses = iter([503, 503, 200])

        def handler(request: httpx.Request) -> httpx.Response:
            status = next(statuses)
            if status == 503:
                return httpx.Response(503, json={"error": {"message": "overloaded"}})
            return httpx.Response(200, json=ok_body())

        async with make_client(handler) as client:
            result = await client.generate("Analyze", "System")
        assert result.attempts == 3

    async def test_gives_up_after_max_retries(self):
        """Retries stop at GEMINI_MAX_RETRIES."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with make_client(handler) as client:
            with pytest.raises(GeminiOverloadedError) as exc_info:
                await client.generate("Analyze", "System")
        assert len(calls) == 3
        assert exc_info.value.status_code == 503

    async def test_other_errors_are_not_retried(self):
        """Only 503 is retried."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(400, json={"error": {"message": "API key not valid"}})

        async with make_client(handler) as client:
            with pytest.raises(GeminiError) as exc_info:
                await client.generate("Analyze", "System")
        assert len(calls) == 1
        assert exc_info.value.status_code == 400
        assert "API key not valid" in str(exc_info.value)
        assert not isinstance(exc_info.value, GeminiOverloadedError)

    async def test_retry_delays_escalate_then_repeat(self):
        """The last delay repeats once the list runs out."""
        client = GeminiClient("k", Settings(GEMINI_RETRY_DELAYS=[2, 4]))
        assert [client._retry_delay(n) for n in (1, 2, 3)] == [2, 4, 4]


class TestFailures:
    """Responses without usable text and transport errors."""

    async def test_blocked_finish_reason(self):
        """A non-STOP finish without text is an error."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": [{"finishReason": "SAFETY"}]})

        async with make_client(handler) as client:
            with pytest.raises(GeminiError, match="API call failed: SAFETY."):
                await client.generate("Analyze", "System")

    async def test_no_candidates(self):
        """An empty candidate list is an error."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        async with make_client(handler) as client:
            with pytest.raises(GeminiError, match="Invalid response structure"):
                await client.generate("Analyze", "System")

    async def test_timeout(self):
        """Timeouts surface as GeminiError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(GeminiError, match="Request timed out"):
                await client.generate("Analyze", "System")

    async def test_missing_key_makes_no_request(self):
        """No key, no request."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=ok_body())

        async with make_client(handler, api_key="  ") as client:
            with pytest.raises(GeminiError, match="API key not configured"):
                await client.generate("Analyze", "System")
        assert calls == []

    async def test_empty_prompt(self):
        """Blank prompts are rejected."""
        async with make_client(lambda request: httpx.Response(200, json=ok_body())) as client:
            with pytest.raises(GeminiError, match="No content"):
                await client.generate("", "System")
