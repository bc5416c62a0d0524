"""Gemini adapter - implements GenerationTransport via :generateContent."""

import logging
from typing import Any

import httpx

from gemini_fallback.domain.errors import InvalidResponseError
from gemini_fallback.domain.ports.config import GeminiConfig

logger = logging.getLogger(__name__)


class GeminiHTTPTransport:
    """Google Generative Language API - one POST per model attempt."""

    def __init__(self, config: GeminiConfig, client: httpx.AsyncClient | None = None) -> None:
        """Initialize with Gemini config; client may be injected (tests, shared pools)."""
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = {"Content-Type": "application/json"}
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create persistent async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(headers=self._headers)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client if this adapter created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def model_url(self, model: str) -> str:
        """Endpoint for a model (API key goes in query params, not here)."""
        return f"{self._base_url}/models/{model}:generateContent"

    async def send(self, model: str, body: dict[str, Any], timeout: float) -> dict[str, Any]:
        """POST body to model; raise on transport error, non-2xx or non-JSON body."""
        client = self._get_client()
        resp = await client.post(
            self.model_url(model),
            params={"key": self._config.api_key},
            json=body,
            headers=self._headers,
            timeout=timeout,
        )
        if resp.status_code >= 400:
            logger.debug("Gemini API error %s for %s: %s", resp.status_code, model, resp.text[:500])
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidResponseError(f"invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise InvalidResponseError(f"unexpected response type: {type(data).__name__}")
        return data
