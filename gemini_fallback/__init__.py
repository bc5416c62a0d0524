"""Gemini text generation with sequential model fallback."""

from gemini_fallback.application.fallback import GeminiFallbackCaller
from gemini_fallback.container import Container, build_caller
from gemini_fallback.domain.errors import (
    AllModelsFailedError,
    AttemptFailure,
    GeminiError,
    InvalidResponseError,
)
from gemini_fallback.domain.ports.config import DEFAULT_MODELS, AppConfig, GeminiConfig, GenerationOptions
from gemini_fallback.infrastructure.llm.gemini import GeminiHTTPTransport

MODELS = DEFAULT_MODELS

__version__ = "0.1.0"

__all__ = [
    "MODELS",
    "AllModelsFailedError",
    "AppConfig",
    "AttemptFailure",
    "Container",
    "GeminiConfig",
    "GeminiError",
    "GeminiFallbackCaller",
    "GeminiHTTPTransport",
    "GenerationOptions",
    "InvalidResponseError",
    "build_caller",
]
