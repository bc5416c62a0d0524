"""Transport Port - one generation request against one model."""

from typing import Any, Protocol


class GenerationTransport(Protocol):
    """Sends a generateContent request for a single model.

    Returns the decoded JSON body on a 2xx response. Failures are raised:
    httpx.HTTPError subclasses for transport problems and non-2xx statuses,
    InvalidResponseError for a body that is not a JSON object.
    """

    async def send(self, model: str, body: dict[str, Any], timeout: float) -> dict[str, Any]:
        """POST body for model with a timeout in seconds."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
