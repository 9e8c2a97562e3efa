"""Suggestion service for core business logic.

This service runs the whole suggestion pipeline for one editor session:

    heuristic filter -> pattern matcher -> debounce -> cache -> orchestrator

It depends on protocols, not concrete implementations, so the model
server, the cache backend and the notification channel can all be
swapped or mocked.
"""

import logging

from code_echo.config import settings
from code_echo.entities import CancellationToken, EditContext, Suggestion, SuggestionSource
from code_echo.models import PerformanceMetrics
from code_echo.protocols import CompletionModel, Notifier, SuggestionStore

from .debounce import Debouncer
from .heuristics import is_suppressed, is_supported_language
from .orchestrator import RequestOrchestrator
from .patterns import match_static

logger = logging.getLogger(__name__)


class SuggestionService:
    """Core suggestion orchestration service.

    ``provide`` is total: it always returns a list and never raises.

    Example:
        ```python
        from code_echo.repositories import (
            InMemorySuggestionRepository,
            LoggingNotifier,
            OllamaCompletionProvider,
        )
        from code_echo.services import SuggestionService

        service = SuggestionService.create(
            model=OllamaCompletionProvider.create(),
            store=InMemorySuggestionRepository.create(),
            notifier=LoggingNotifier(),
        )

        context = EditContext.from_document("file:///a.py", text, line=3, column=8, radius=10)
        suggestions = await service.provide(context)
        ```
    """

    def __init__(
        self,
        model: CompletionModel,
        store: SuggestionStore,
        notifier: Notifier,
        debounce_ms: int | None = None,
        max_retries: int | None = None,
    ) -> None:
        """Initialize the suggestion service.

        Args:
            model: Completion model backend (required).
            store: Suggestion cache (required). Cleared on construction.
            notifier: User-visible notification channel (required).
            debounce_ms: Settle window for model requests. Defaults to settings.
            max_retries: Extra model attempts on empty/failed replies. Defaults to settings.
        """
        self._model = model
        self._store = store
        self._notifier = notifier
        self._metrics = PerformanceMetrics()
        self._orchestrator = RequestOrchestrator(
            model=model,
            store=store,
            notifier=notifier,
            max_retries=max_retries,
            metrics=self._metrics,
        )
        self._debounced: Debouncer[list[Suggestion]] = Debouncer(
            self._provide_settled,
            delay_ms=settings.debounce_ms if debounce_ms is None else debounce_ms,
            default=list,
        )

        self._store.clear()

    @classmethod
    def create(
        cls,
        model: CompletionModel,
        store: SuggestionStore,
        notifier: Notifier,
        debounce_ms: int | None = None,
        max_retries: int | None = None,
    ) -> "SuggestionService":
        """Factory method to create SuggestionService with sensible defaults.

        Args:
            model: Completion model backend (required).
            store: Suggestion cache (required).
            notifier: Notification channel (required).
            debounce_ms: Settle window in ms. If None, uses settings.
            max_retries: Retry ceiling. If None, uses settings.

        Returns:
            Configured SuggestionService instance
        """
        return cls(
            model=model,
            store=store,
            notifier=notifier,
            debounce_ms=debounce_ms,
            max_retries=max_retries,
        )

    async def provide(
        self,
        context: EditContext,
        token: CancellationToken | None = None,
    ) -> list[Suggestion]:
        """Return inline suggestions for an edit context.

        Business logic:
        1. Drop cancelled requests, unsupported languages and positions
           inside comments or docstrings
        2. Answer shallow syntactic cues from the static pattern table
        3. Debounce, then serve from cache or ask the orchestrator

        Args:
            context: Captured editor state
            token: Cooperative cancellation signal

        Returns:
            Suggestions anchored at the cursor (possibly empty)
        """
        token = token or CancellationToken()
        self._metrics.total_requests += 1

        if token.is_cancelled:
            return []

        if not is_supported_language(context.language_id) or is_suppressed(context.prefix_text):
            logger.debug("Suggestion suppressed at %s:%d", context.document_id, context.line)
            self._metrics.suppressed += 1
            return []

        static = match_static(context.prefix_text, context.previous_line)
        if static is not None:
            logger.debug("Static completion from rule %s", static.kind.value)
            self._metrics.static_hits += 1
            return [
                Suggestion(
                    text=static.text,
                    line=context.line,
                    column=context.column,
                    source=SuggestionSource.STATIC,
                )
            ]

        try:
            return await self._debounced(context, token)
        except Exception as e:
            logger.error("Suggestion pipeline failed at %s:%d: %s", context.document_id, context.line, e)
            return []

    async def trigger(self, context: EditContext) -> list[Suggestion]:
        """Handle the "trigger suggestion now" command.

        Re-runs the normal eligible path with a fresh token.
        """
        suggestions = await self.provide(context, CancellationToken())
        self._notifier.notify_info("Suggestions triggered")
        return suggestions

    async def _provide_settled(self, context: EditContext, token: CancellationToken) -> list[Suggestion]:
        if token.is_cancelled:
            return []

        entry = self._store.get(context.cache_key)
        if entry is not None:
            self._metrics.cache_hits += 1
            return [
                Suggestion(text=text, line=context.line, column=context.column, source=SuggestionSource.CACHE)
                for text in entry.suggestions
            ]

        self._metrics.cache_misses += 1
        return await self._orchestrator.resolve(context, token)

    def clear_cache(self) -> int:
        """Handle the "clear cache" command.

        Returns:
            Number of entries removed
        """
        count = self._store.clear()
        self._notifier.notify_info("Suggestion cache cleared")
        return count

    def get_stats(self) -> dict:
        """Get cache statistics and pipeline counters.

        Returns:
            Dictionary with "cache" and "performance" sections
        """
        cache_stats = self._store.get_stats()
        cache_stats["model"] = self._model.model_name
        return {
            "cache": cache_stats,
            "performance": self._metrics.to_dict(),
        }

    def reset_stats(self) -> None:
        self._metrics.reset()

    async def is_healthy(self) -> bool:
        """Check if the model backend is reachable."""
        return await self._model.is_available()

    async def close(self) -> None:
        """Stop pending and running debounced requests, then release the model client."""
        await self._debounced.shutdown()
        close = getattr(self._model, "close", None)
        if close is not None:
            await close()

    @property
    def metrics(self) -> PerformanceMetrics:
        return self._metrics

    @property
    def orchestrator(self) -> RequestOrchestrator:
        """Get the underlying orchestrator (for testing)."""
        return self._orchestrator

    @property
    def store(self) -> SuggestionStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def model(self) -> CompletionModel:
        """Get the underlying model (for testing)."""
        return self._model
