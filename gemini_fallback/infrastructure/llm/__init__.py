"""LLM transport adapters - Gemini generateContent over HTTP."""

from gemini_fallback.infrastructure.llm.gemini import GeminiHTTPTransport

__all__ = ["GeminiHTTPTransport"]
