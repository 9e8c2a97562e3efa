"""HTTP handlers for suggestion operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import time

from fastapi import HTTPException, status

from code_echo.config import settings
from code_echo.dto import (
    ClearCacheResponse,
    HealthCheckResponse,
    StatsResponse,
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
)
from code_echo.entities import EditContext, Suggestion
from code_echo.services import SuggestionService


class SuggestionHandler:
    """HTTP handlers for suggestion operations.

    This handler delegates business logic to SuggestionService
    and handles HTTP-specific concerns like:
    - Building an EditContext from the request body
    - Converting entities to DTOs
    - Setting appropriate status codes
    """

    def __init__(self, suggestion_service: SuggestionService, context_radius: int | None = None) -> None:
        """Initialize the suggestion handler.

        Args:
            suggestion_service: The service for business logic (required).
            context_radius: Lines of context around the cursor. Defaults to settings.
        """
        self._service = suggestion_service
        self._radius = settings.context_radius if context_radius is None else context_radius

    def _to_context(self, request: SuggestionRequest) -> EditContext:
        try:
            return EditContext.from_document(
                document_id=request.document_id,
                text=request.text,
                line=request.line,
                column=request.column,
                radius=self._radius,
                language_id=request.language_id,
            )
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e

    @staticmethod
    def _to_items(suggestions: list[Suggestion]) -> list[SuggestionItem]:
        return [
            SuggestionItem(text=s.text, line=s.line, column=s.column, source=s.source.value)
            for s in suggestions
        ]

    async def suggest(self, request: SuggestionRequest) -> SuggestionResponse:
        """Handle POST /suggestions requests.

        Args:
            request: The suggestion request DTO

        Returns:
            SuggestionResponse with zero or one suggestions
        """
        context = self._to_context(request)
        start_time = time.time()

        suggestions = await self._service.provide(context)

        return SuggestionResponse(
            suggestions=self._to_items(suggestions),
            elapsed_ms=(time.time() - start_time) * 1000,
        )

    async def trigger(self, request: SuggestionRequest) -> SuggestionResponse:
        """Handle POST /suggestions/trigger requests."""
        context = self._to_context(request)
        start_time = time.time()

        suggestions = await self._service.trigger(context)

        return SuggestionResponse(
            suggestions=self._to_items(suggestions),
            elapsed_ms=(time.time() - start_time) * 1000,
            message="Suggestions triggered",
        )

    async def clear_cache(self) -> ClearCacheResponse:
        """Handle DELETE /cache requests.

        Raises:
            HTTPException: If the cache backend fails
        """
        try:
            count = self._service.clear_cache()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return ClearCacheResponse(
            success=True,
            deleted_count=count,
            message="Suggestion cache cleared",
        )

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._service.get_stats()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

        return StatsResponse(cache=stats["cache"], performance=stats["performance"])

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        model = self._service.model
        available = await self._service.is_healthy()

        installed = None
        is_model_installed = getattr(model, "is_model_installed", None)
        if available and is_model_installed is not None:
            installed = await is_model_installed()

        return HealthCheckResponse(
            status="healthy" if available else "unhealthy",
            model_available=available,
            model_installed=installed,
            model=model.model_name,
        )
