"""Ports - interfaces and configuration models."""

from gemini_fallback.domain.ports.config import (
    DEFAULT_MODELS,
    AppConfig,
    GeminiConfig,
    GenerationOptions,
)
from gemini_fallback.domain.ports.transport import GenerationTransport

__all__ = [
    "DEFAULT_MODELS",
    "AppConfig",
    "GeminiConfig",
    "GenerationOptions",
    "GenerationTransport",
]
