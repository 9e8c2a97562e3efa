"""Orchestration state and cooperative cancellation."""

from dataclasses import dataclass


@dataclass
class OrchestrationState:
    """Mutable state owned by one RequestOrchestrator.

    Attributes:
        is_processing: True while exactly one model query is outstanding
        retry_count: Consecutive empty/failed attempts, capped at max_retries
    """

    is_processing: bool = False
    retry_count: int = 0


class CancellationToken:
    """Cooperative cancellation signal passed through one request.

    The editor cancels the token when the request is superseded; the
    pipeline checks it at entry, when the debounce timer fires and before
    each model call.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
