"""Error taxonomy shared by the completion client and the backend clients."""
from __future__ import annotations


class NexoError(Exception):
    """Base class for all errors surfaced to callers."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class MissingCredential(NexoError):
    default_message = "Gemini API key is missing. Set GEMINI_API_KEY to enable AI recommendations."


class TransportError(NexoError):
    default_message = "Could not reach the server. Check your connection and try again."


class EmptyCompletion(NexoError):
    default_message = "No content received from Gemini API"


class DecodeError(NexoError):
    default_message = "Failed to decode response"


class UpstreamError(NexoError):
    """Non-2xx response from the completion provider or the backend."""

    def __init__(
        self,
        status_code: int | None,
        message: str | None = None,
        error_type: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        if message is None:
            message = f"Request failed ({status_code})." if status_code else None
        super().__init__(message)


class Unauthenticated(UpstreamError):
    """Raised before any network I/O when an authenticated call has no token."""

    def __init__(self, message: str = "Not authenticated. Please log in.") -> None:
        super().__init__(401, message)
