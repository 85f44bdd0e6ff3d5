"""
Gemini API Client

Thin async wrapper around the Gemini ``generateContent`` endpoint.

Reads the API key from the GEMINI_API_KEY environment variable. A single
attempt is made per request; callers fall back to canned lines on failure
instead of retrying, so a slow or exhausted quota never stalls the match.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from kickoff.exceptions import CommentaryAPIError, CommentaryError, CommentaryRateLimitError

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"


@dataclass
class GenerationResult:
    """Result from a generation call."""
    text: str
    model: str
    total_tokens: int
    latency_ms: float


class GeminiClient:
    """
    Async client for the Gemini API.

    Usage:
        async with GeminiClient() as client:
            result = await client.generate(system="You are a commentator.", user="Goal!")
            print(result.text)
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: API key. Defaults to GEMINI_API_KEY env var.
            model: Model to use. Defaults to gemini-2.5-flash.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).

        Raises:
            CommentaryError: If no API key is available.
        """
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        if not self.api_key:
            raise CommentaryError(f"{API_KEY_ENV} environment variable not set")

        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_count = 0

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _build_url(self) -> str:
        return f"{self.BASE_URL}/models/{self.model}:generateContent"

    def _build_request_body(self, system: str, user: str, temperature: float, max_tokens: int) -> dict:
        return {
            "system_instruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

    async def generate(
        self,
        system: str,
        user: str,
        temperature: float = 0.9,
        max_tokens: int = 64,
    ) -> GenerationResult:
        """
        Generate a response from Gemini.

        Raises:
            CommentaryRateLimitError: On HTTP 429 or a RESOURCE_EXHAUSTED body.
            CommentaryAPIError: For any other non-200 response, a body that is not
                the expected JSON, or an empty reply.
            CommentaryError: On timeouts and transport errors.
        """
        client = self._get_client()
        body = self._build_request_body(system, user, temperature, max_tokens)

        try:
            start_time = time.perf_counter()
            response = await client.post(
                self._build_url(), json=body, headers={"x-goog-api-key": self.api_key}
            )
            latency_ms = (time.perf_counter() - start_time) * 1000
        except httpx.TimeoutException as e:
            raise CommentaryError("Request timed out") from e
        except httpx.RequestError as e:
            raise CommentaryError(f"Request error: {e}") from e

        if response.status_code == 429 or "RESOURCE_EXHAUSTED" in response.text:
            raise CommentaryRateLimitError("Rate limited by Gemini API")
        if response.status_code != 200:
            raise CommentaryAPIError(
                f"API error: {response.status_code}", response.status_code, response.text
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CommentaryAPIError("Response is not JSON", 200, response.text) from e

        result = self._parse_response(data, latency_ms)
        self._request_count += 1
        return result

    def _parse_response(self, data: dict, latency_ms: float) -> GenerationResult:
        try:
            candidates = data.get("candidates", [])
            if not candidates:
                raise CommentaryAPIError("No candidates in response", 200, str(data))

            parts = candidates[0].get("content", {}).get("parts", [])
            if not parts:
                raise CommentaryAPIError("No parts in response", 200, str(data))

            text = parts[0].get("text", "")
            total_tokens = data.get("usageMetadata", {}).get("totalTokenCount", 0)
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise CommentaryAPIError(f"Malformed response: {e}", 200, str(data)) from e

        if not isinstance(text, str):
            raise CommentaryAPIError("Response text is not a string", 200, str(data))

        return GenerationResult(
            text=text,
            model=self.model,
            total_tokens=total_tokens,
            latency_ms=latency_ms,
        )

    @property
    def request_count(self) -> int:
        """Total number of successful requests."""
        return self._request_count
