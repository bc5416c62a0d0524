"""Config Port - configuration models."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODELS: tuple[str, ...] = (
    "gemini-robotics-er-1.5-preview",
    "gemini-2.5-flash",
    "gemini-2.5-flash-lite",
)


class GenerationOptions(BaseModel):
    """Per-call generation settings forwarded to every attempt.

    temperature and max_output_tokens are passed through to the API as-is;
    out-of-range values are rejected remotely, not here.
    """

    temperature: float = 0.7
    max_output_tokens: int = Field(default=4096, alias="maxOutputTokens")
    timeout: int = 60000  # Per-attempt timeout, milliseconds

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted for httpx."""
        return self.timeout / 1000


class GeminiConfig(BaseModel):
    """Gemini API connection and fallback order."""

    api_key: str = ""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    # Fallback priority: first entry tried first. Empty = DEFAULT_MODELS.
    models: list[str] = Field(default_factory=lambda: list(DEFAULT_MODELS))

    model_config = ConfigDict(extra="ignore")

    def resolved_models(self) -> tuple[str, ...]:
        """Configured models without blanks, or the defaults when none are set."""
        models = tuple(m.strip() for m in self.models if m and m.strip())
        return models or DEFAULT_MODELS


class AppConfig(BaseModel):
    """Full application configuration."""

    gemini: GeminiConfig = GeminiConfig()
    generation: GenerationOptions = GenerationOptions()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = console (stderr) only. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3
