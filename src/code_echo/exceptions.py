"""Errors raised by completion model implementations.

Only repositories raise these. The request orchestrator catches them and
applies the retry policy, so they never cross the public boundary of
SuggestionService.
"""


class CompletionError(Exception):
    """Base class for failures talking to the completion model."""


class ModelConnectionError(CompletionError):
    """The model server could not be reached."""


class ModelServerError(CompletionError):
    """The model server answered with a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        message = f"Model server error: {status_code}"
        if body:
            message += f" - {body}"
        super().__init__(message)


class MalformedResponseError(CompletionError):
    """The model server answered with a body we cannot interpret."""
