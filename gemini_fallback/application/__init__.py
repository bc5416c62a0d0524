"""Application layer - fallback generation."""

from gemini_fallback.application.fallback import (
    DEFAULT_MODELS,
    GeminiFallbackCaller,
    build_request_body,
    extract_text,
)

__all__ = ["DEFAULT_MODELS", "GeminiFallbackCaller", "build_request_body", "extract_text"]
