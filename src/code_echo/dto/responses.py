"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class SuggestionItem(BaseModel):
    """Single inline suggestion (in suggestions array)."""

    text: str = Field(..., description="Completion text to insert at the anchor")
    line: int = Field(..., description="Anchor line (zero-based)", ge=0)
    column: int = Field(..., description="Anchor column (zero-based)", ge=0)
    source: str = Field(..., description="Origin: 'static', 'cache' or 'model'")


class SuggestionResponse(BaseModel):
    """Response DTO for a suggestion request."""

    suggestions: list[SuggestionItem] = Field(
        default_factory=list,
        description="Suggestions for the cursor position (empty when none apply)",
    )
    elapsed_ms: float = Field(..., description="Time taken to resolve the request in milliseconds")
    message: str | None = Field(None, description="Human-readable status message")


class ClearCacheResponse(BaseModel):
    """Response DTO for the clear cache command."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")


class StatsResponse(BaseModel):
    """Response DTO for cache and pipeline statistics."""

    cache: dict[str, Any] = Field(..., description="Suggestion cache statistics")
    performance: dict[str, Any] = Field(..., description="Pipeline counters")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    model_available: bool = Field(..., description="Whether the model server is reachable")
    model_installed: bool | None = Field(
        None,
        description="Whether the configured model is present on the server",
    )
    model: str = Field(..., description="Configured model name")
