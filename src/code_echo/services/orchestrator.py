"""Request orchestrator: single-flight model queries with bounded retries.

One orchestrator exists per editor session. It owns the only mutable
pipeline state (``OrchestrationState``) and guarantees that at most one
model query is outstanding at any time. Overlapping requests are dropped,
never queued.
"""

import logging
import time

from code_echo.config import settings
from code_echo.entities import (
    CancellationToken,
    EditContext,
    OrchestrationState,
    Suggestion,
    SuggestionSource,
)
from code_echo.models import PerformanceMetrics
from code_echo.protocols import CompletionModel, Notifier, SuggestionStore

from .completion_text import build_prompt, normalize_completion

logger = logging.getLogger(__name__)


class RequestOrchestrator:
    """Ask the model for a completion and cache what comes back.

    Retry policy: an empty reply and a failed call are handled alike. While
    ``retry_count < max_retries`` the same prompt is re-sent immediately;
    after that the orchestrator gives up and returns an empty list, leaving
    ``retry_count`` at its ceiling until the next successful reply. Only
    failures (not empty replies) are reported through the notifier.
    """

    def __init__(
        self,
        model: CompletionModel,
        store: SuggestionStore,
        notifier: Notifier,
        max_retries: int | None = None,
        metrics: PerformanceMetrics | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            model: Completion model backend (required).
            store: Suggestion cache written on success (required).
            notifier: Receives user-visible failure messages (required).
            max_retries: Extra attempts after the first. Defaults to settings.
            metrics: Shared pipeline counters. A private instance if None.
        """
        self._model = model
        self._store = store
        self._notifier = notifier
        self._max_retries = settings.max_retries if max_retries is None else max_retries
        self._metrics = metrics or PerformanceMetrics()
        self._state = OrchestrationState()

    @property
    def state(self) -> OrchestrationState:
        return self._state

    @property
    def max_retries(self) -> int:
        return self._max_retries

    async def resolve(
        self,
        context: EditContext,
        token: CancellationToken | None = None,
    ) -> list[Suggestion]:
        """Resolve model suggestions for an edit context.

        Never raises; every failure path yields an empty list.

        Args:
            context: Captured editor state
            token: Cooperative cancellation signal

        Returns:
            A single model suggestion, or an empty list
        """
        if self._state.is_processing:
            logger.debug("Query already in flight, dropping request at %s:%d", context.document_id, context.line)
            self._metrics.dropped_busy += 1
            return []

        self._state.is_processing = True
        try:
            return await self._query(context, token or CancellationToken())
        finally:
            self._state.is_processing = False

    async def _query(self, context: EditContext, token: CancellationToken) -> list[Suggestion]:
        prompt = build_prompt(context)

        while True:
            if token.is_cancelled:
                return []

            failure: Exception | None = None
            text = ""
            start_time = time.perf_counter()
            try:
                raw = await self._model.complete(prompt)
                text = normalize_completion(raw, context.prefix_text)
            except Exception as e:
                failure = e
                self._metrics.model_failures += 1
                logger.warning("Model call failed (attempt %d): %s", self._state.retry_count + 1, e)
            finally:
                self._metrics.record_model_call((time.perf_counter() - start_time) * 1000)

            if text:
                self._state.retry_count = 0
                self._remember(context, text)
                if token.is_cancelled:
                    logger.debug("Request cancelled while the model was answering; result cached only")
                    return []
                return [Suggestion(text=text, line=context.line, column=context.column, source=SuggestionSource.MODEL)]

            if failure is None:
                self._metrics.empty_results += 1
                logger.debug("Model returned no usable text (attempt %d)", self._state.retry_count + 1)

            if self._state.retry_count < self._max_retries:
                self._state.retry_count += 1
                continue

            if failure is not None:
                self._report(f"Error generating suggestions: {failure}")
            return []

    def _remember(self, context: EditContext, text: str) -> None:
        try:
            self._store.put(context.cache_key, [text])
        except Exception as e:
            logger.warning("Failed to cache suggestion for %s:%d: %s", context.document_id, context.line, e)

    def _report(self, message: str) -> None:
        try:
            self._notifier.notify_error(message)
        except Exception as e:
            logger.warning("Failed to deliver error notification: %s", e)
