"""Gemini fallback caller - sequential, exhaustive model fallback.

Tries each model in priority order with the same request. Transport errors,
error statuses and empty responses all count as a failed attempt; the reason
is recorded as '<model>: <reason>' and the next model is tried. Only when every
model has failed is a single AllModelsFailedError raised.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from gemini_fallback.domain.errors import AllModelsFailedError, AttemptFailure, InvalidResponseError
from gemini_fallback.domain.ports.config import DEFAULT_MODELS, GenerationOptions
from gemini_fallback.domain.ports.transport import GenerationTransport

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "empty response"
UNKNOWN_ERROR = "unknown error"

# Failures that move on to the next model. Anything else is a local bug and propagates.
# TimeoutError comes from the whole-attempt asyncio.timeout around send().
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (httpx.HTTPError, InvalidResponseError, TimeoutError)


def build_request_body(prompt: str, options: GenerationOptions) -> dict[str, Any]:
    """Build the generateContent JSON body."""
    return {
        "contents": [
            {
                "parts": [{"text": prompt}],
            },
        ],
        "generationConfig": {
            "temperature": options.temperature,
            "maxOutputTokens": options.max_output_tokens,
        },
    }


def _first(value: Any) -> Any:
    """First element of a non-empty list, else None."""
    if isinstance(value, list) and value:
        return value[0]
    return None


def extract_text(data: Any) -> str:
    """Read candidates[0].content.parts[0].text; any missing link yields ''."""
    if not isinstance(data, Mapping):
        return ""
    candidate = _first(data.get("candidates"))
    if not isinstance(candidate, Mapping):
        return ""
    content = candidate.get("content")
    if not isinstance(content, Mapping):
        return ""
    part = _first(content.get("parts"))
    if not isinstance(part, Mapping):
        return ""
    text = part.get("text")
    return text if isinstance(text, str) else ""


def _remote_error_message(response: httpx.Response) -> str:
    """error.message from a Gemini error body, or '' if absent."""
    try:
        data = response.json()
    except ValueError:
        return ""
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"].strip()
    return ""


def describe_failure(exc: BaseException, timeout_ms: int) -> str:
    """Most specific reason available for a failed attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        # str(exc) would include the request URL, which carries the API key
        return _remote_error_message(exc.response) or f"request failed with status code {exc.response.status_code}"
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return f"timeout of {timeout_ms}ms exceeded"
    return str(exc).strip() or UNKNOWN_ERROR


class GeminiFallbackCaller:
    """Generates text by trying models in order until one returns text.

    Usage:
        caller = GeminiFallbackCaller(GeminiHTTPTransport(config.gemini))
        text = await caller.generate("Summarize...", {"temperature": 0.2})

    State (error log, model index) is local to each generate() call, so one
    caller can serve concurrent requests.
    """

    def __init__(
        self,
        transport: GenerationTransport,
        models: Sequence[str] | None = None,
        default_options: GenerationOptions | None = None,
    ) -> None:
        """Initialize with transport, fallback order and default generation options."""
        self._transport = transport
        self._models = tuple(models) if models is not None else DEFAULT_MODELS
        if not self._models:
            raise ValueError("models must contain at least one model id")
        self._defaults = default_options or GenerationOptions()

    @property
    def models(self) -> tuple[str, ...]:
        """Fallback order (read-only)."""
        return self._models

    @property
    def default_options(self) -> GenerationOptions:
        """Options used for fields a call does not set."""
        return self._defaults

    def resolve_options(self, options: GenerationOptions | Mapping[str, Any] | None) -> GenerationOptions:
        """Merge per-call options over defaults. Mappings may use API or Python names."""
        if options is None:
            return self._defaults
        if isinstance(options, GenerationOptions):
            return options
        explicit = GenerationOptions.model_validate(dict(options)).model_dump(exclude_unset=True)
        return self._defaults.model_copy(update=explicit)

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Return text from the first model that produces any.

        Raises:
            ValueError: If prompt is empty.
            AllModelsFailedError: If every model failed; message joins
                '<model>: <reason>' entries with ' | ' in attempt order.

        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be non-empty")

        opts = self.resolve_options(options)
        body = build_request_body(prompt, opts)
        errors: list[str] = []

        for index, model in enumerate(self._models):
            logger.debug("Gemini attempt %d/%d model=%s", index + 1, len(self._models), model)
            try:
                async with asyncio.timeout(opts.timeout_seconds):
                    data = await self._transport.send(model, body, timeout=opts.timeout_seconds)
            except RETRYABLE_ERRORS as e:
                failure = AttemptFailure(model, describe_failure(e, opts.timeout))
            else:
                text = extract_text(data)
                if text:
                    logger.debug("Gemini model=%s returned %d chars", model, len(text))
                    return text
                failure = AttemptFailure(model, EMPTY_RESPONSE)

            logger.warning("Gemini generate failed with model=%s: %s", model, failure.reason)
            errors.append(failure.entry)

        logger.error("All Gemini models failed: %s", AllModelsFailedError.SEPARATOR.join(errors))
        raise AllModelsFailedError(errors, self._models)

    async def close(self) -> None:
        """Close the transport."""
        await self._transport.close()

    async def __aenter__(self) -> "GeminiFallbackCaller":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
