"""
Google Gemini API client for match profile generation.

One generateContent call per request, with a system instruction and,
optionally, Google Search grounding. Only HTTP 503 (model overloaded) is
retried; every other failure raises GeminiError immediately.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import httpx

from trader.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class GroundingSource:
    uri: str
    title: str


@dataclass
class GeminiResult:
    """Generated text plus grounding sources and usage."""

    text: str
    sources: list[GroundingSource] = field(default_factory=list)
    tokens_in: int = 0
    tokens_out: int = 0
    exec_ms: int = 0
    model_version: str = ""
    finish_reason: Optional[str] = None  # STOP, MAX_TOKENS, SAFETY, RECITATION, OTHER
    attempts: int = 1

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "sources": [{"uri": s.uri, "title": s.title} for s in self.sources],
        }


class GeminiError(Exception):
    """Gemini call failed; status_code is set for HTTP errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GeminiOverloadedError(GeminiError):
    """Still 503 after every retry."""


class GeminiClient:
    """generateContent calls for the profile, team news and side reports."""

    def __init__(
        self,
        api_key: str,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = settings.GEMINI_MODEL or DEFAULT_MODEL
        self.base_url = settings.GEMINI_BASE_URL.rstrip("/")
        self.timeout = settings.GEMINI_TIMEOUT_SECONDS
        self.max_tokens = settings.GEMINI_MAX_TOKENS
        self.temperature = settings.GEMINI_TEMPERATURE
        self.max_retries = max(1, settings.GEMINI_MAX_RETRIES)
        self.retry_delays = list(settings.GEMINI_RETRY_DELAYS)

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazily open the shared AsyncClient."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def _retry_delay(self, attempt: int) -> float:
        """Delay before retry number `attempt` (1-based); the last delay repeats."""
        if not self.retry_delays:
            return 2.0 * attempt
        return self.retry_delays[min(attempt, len(self.retry_delays)) - 1]

    def build_payload(self, prompt: str, system_prompt: str, include_search: bool) -> dict:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "generationConfig": {
                "maxOutputTokens": self.max_tokens,
                "temperature": self.temperature,
            },
        }
        if include_search:
            payload["tools"] = [{"google_search": {}}]
        return payload

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        include_search: bool = True,
    ) -> GeminiResult:
        """
        One generateContent call, retrying 503s.

        Args:
            prompt: The user query.
            system_prompt: Sent as systemInstruction.
            include_search: Enable Google Search grounding.

        Returns:
            GeminiResult with generated text and grounding sources.

        Raises:
            GeminiError: Missing key, non-503 HTTP error, timeout, or a
                response without text.
            GeminiOverloadedError: 503 on every attempt.
        """
        if not self.api_key:
            raise GeminiError("Gemini API key not configured")
        if not prompt:
            raise GeminiError("No content provided for API call")

        client = await self._get_client()
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = self.build_payload(prompt, system_prompt, include_search)

        for attempt in range(1, self.max_retries + 1):
            start_time = time.time()
            try:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
            except httpx.TimeoutException:
                elapsed_ms = int((time.time() - start_time) * 1000)
                logger.error(f"Gemini API timeout after {elapsed_ms}ms")
                raise GeminiError("Request timed out") from None
            except httpx.HTTPError as e:
                logger.error(f"Gemini API transport error: {e}")
                raise GeminiError(f"Gemini request failed: {e}") from e
            elapsed_ms = int((time.time() - start_time) * 1000)

            if response.status_code == 503:
                if attempt < self.max_retries:
                    delay = self._retry_delay(attempt)
                    logger.warning(
                        f"Gemini 503 overloaded, retrying in {delay}s (attempt {attempt}/{self.max_retries})"
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"Gemini 503 overloaded after {self.max_retries} attempts")
                raise GeminiOverloadedError(
                    "The AI model is currently overloaded (503). Please try again in a minute.",
                    status_code=503,
                )

            if response.status_code != 200:
                error_text = self._error_message(response)
                logger.error(f"Gemini API error {response.status_code}: {error_text}")
                raise GeminiError(
                    f"API call failed with status {response.status_code}: {error_text}",
                    status_code=response.status_code,
                )

            result = self._parse_response(response)
            result.exec_ms = elapsed_ms
            result.attempts = attempt
            return result

        raise GeminiError("Gemini retry loop finished without result")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:500] or response.reason_phrase
        if isinstance(body, dict):
            message = (body.get("error") or {}).get("message")
            if message:
                return message
        return response.text[:500]

    def _parse_response(self, response: httpx.Response) -> GeminiResult:
        if not response.content:
            raise GeminiError("Received an empty response from the API.")
        try:
            data = response.json()
        except ValueError as e:
            raise GeminiError(f"Invalid JSON from API: {e}") from e

        text, finish_reason = self._extract_text_and_reason(data)
        if not text:
            if finish_reason and finish_reason != "STOP":
                logger.error(f"Gemini finished without text: finishReason={finish_reason}")
                raise GeminiError(f"API call failed: {finish_reason}.")
            logger.error(f"Invalid Gemini response structure: {str(data)[:500]}")
            raise GeminiError("Invalid response structure from API.")

        usage = data.get("usageMetadata", {})
        return GeminiResult(
            text=text,
            sources=self._extract_sources(data),
            tokens_in=usage.get("promptTokenCount", 0),
            tokens_out=usage.get("candidatesTokenCount", 0),
            model_version=data.get("modelVersion", self.model),
            finish_reason=finish_reason,
        )

    def _extract_text_and_reason(self, response: dict) -> tuple[str, Optional[str]]:
        """Extract text and finishReason from Gemini response."""
        candidates = response.get("candidates", [])
        if not candidates:
            return "", None

        candidate = candidates[0]
        finish_reason = candidate.get("finishReason")

        parts = candidate.get("content", {}).get("parts", [])
        if not parts:
            return "", finish_reason

        return parts[0].get("text", ""), finish_reason

    def _extract_sources(self, response: dict) -> list[GroundingSource]:
        """Grounding attributions with both a URI and a title."""
        candidate = (response.get("candidates") or [{}])[0]
        attributions = candidate.get("groundingMetadata", {}).get("groundingAttributions", [])
        sources = []
        for attribution in attributions:
            web = attribution.get("web") or {}
            uri, title = web.get("uri"), web.get("title")
            if uri and title:
                sources.append(GroundingSource(uri=uri, title=title))
        return sources
