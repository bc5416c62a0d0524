"""Dependency Injection Container - wires config, transport and caller."""

from functools import cached_property

from gemini_fallback.application.fallback import GeminiFallbackCaller
from gemini_fallback.domain.ports.config import AppConfig
from gemini_fallback.domain.ports.transport import GenerationTransport
from gemini_fallback.infrastructure.config import load_config
from gemini_fallback.infrastructure.llm.gemini import GeminiHTTPTransport


def build_caller(config: AppConfig, transport: GenerationTransport | None = None) -> GeminiFallbackCaller:
    """Create a GeminiFallbackCaller from config (HTTP transport unless one is given)."""
    return GeminiFallbackCaller(
        transport or GeminiHTTPTransport(config.gemini),
        models=config.gemini.resolved_models(),
        default_options=config.generation,
    )


class Container:
    """Dependency Injection Container with lazy initialization.

    Usage:
        async with Container() as container:
            text = await container.caller.generate("Hello")
    """

    def __init__(self, config: AppConfig | None = None):
        """Initialize container with optional config override."""
        self._config_override = config

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def transport(self) -> GenerationTransport:
        """HTTP transport to the Gemini API."""
        return GeminiHTTPTransport(self.config.gemini)

    @cached_property
    def caller(self) -> GeminiFallbackCaller:
        """Fallback caller over the configured models."""
        return build_caller(self.config, self.transport)

    async def close(self) -> None:
        """Close network resources if they were created."""
        if "transport" in self.__dict__:
            await self.transport.close()

    async def __aenter__(self) -> "Container":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
