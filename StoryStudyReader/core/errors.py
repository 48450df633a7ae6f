"""Exception taxonomy.

Story generation failures carry a category and a user-facing message so the
UI can show one notification per category. Lookup failures never reach the
user directly; the resolver turns them into the unavailable placeholder.
"""
from __future__ import annotations


class StoryReaderError(Exception):
    """Base class for application errors."""


class ConfigError(StoryReaderError):
    pass


class MissingInput(StoryReaderError):
    """Raised before any network call when a required field is empty."""


class LookupFailure(StoryReaderError):
    """A definition lookup returned nothing usable."""


class StoryGenerationError(StoryReaderError):
    category = "unknown"
    user_message = "Error generating story. Please try again."

    def __init__(self, detail: str = "", status: int | None = None):
        super().__init__(detail or self.user_message)
        self.detail = detail
        self.status = status


class AuthFailure(StoryGenerationError):
    category = "auth"
    user_message = "Invalid API key. Please check your OpenAI API key."


class RateLimited(StoryGenerationError):
    category = "rate_limit"
    user_message = "API rate limit exceeded. Please wait and try again."


class TransportFailure(StoryGenerationError):
    category = "transport"
    user_message = "Network error. Please check your connection."


class FormatFailure(StoryGenerationError):
    category = "format"
    user_message = "Invalid response format from AI service."


def error_for_status(status: int, detail: str = "") -> StoryGenerationError:
    """Map a non-2xx HTTP status to its error category."""
    if status in (401, 403):
        return AuthFailure(detail, status)
    if status == 429:
        return RateLimited(detail, status)
    return TransportFailure(detail, status)
