"""Errors raised by the LLM-backed collaborators."""


class UpstreamGenerationError(Exception):
    """Planner, generator or explainer could not produce a result."""

    def __init__(self, message: str, role: str | None = None) -> None:
        super().__init__(message)
        self.role = role


class RateLimitError(UpstreamGenerationError):
    """The model provider refused the call for quota reasons (retryable)."""
