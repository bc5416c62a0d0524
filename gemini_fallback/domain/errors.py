"""Errors raised by the Gemini fallback client."""


class GeminiError(Exception):
    """Base class for all gemini_fallback errors."""


class InvalidResponseError(GeminiError):
    """Remote returned a success status with a body that is not a JSON object."""


class AttemptFailure(GeminiError):
    """A single model attempt failed (transport error, bad status or empty text).

    Never leaves GeminiFallbackCaller.generate; it is recorded in the error log
    and the next model is tried.
    """

    def __init__(self, model: str, reason: str) -> None:
        """Initialize with model id and failure reason."""
        self.model = model
        self.reason = reason
        super().__init__(self.entry)

    @property
    def entry(self) -> str:
        """Log entry in the form '<model>: <reason>'."""
        return f"{self.model}: {self.reason}"


class AllModelsFailedError(GeminiError):
    """Every candidate model failed. Message lists each attempt in order."""

    SEPARATOR = " | "

    def __init__(self, errors: list[str], models: tuple[str, ...] = ()) -> None:
        """Initialize with the ordered error log and the models that were tried."""
        self.errors = list(errors)
        self.models = tuple(models)
        super().__init__(self.SEPARATOR.join(self.errors))
