from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from code_echo.api.dependencies import HandlerDep, ServiceDep, lifespan
from code_echo.config import settings
from code_echo.dto import (
    ClearCacheResponse,
    HealthCheckResponse,
    StatsResponse,
    SuggestionRequest,
    SuggestionResponse,
)

app = FastAPI(
    title="CodeEcho API",
    description="Inline code suggestions from a local Ollama model",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "CodeEcho API",
        "version": "0.1.0",
        "description": "Inline code suggestions from a local Ollama model",
        "endpoints": {
            "suggestions": "/suggestions",
            "trigger": "/suggestions/trigger",
            "cache": "/cache",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/suggestions", response_model=SuggestionResponse)
async def suggest(request: SuggestionRequest, handler: HandlerDep) -> SuggestionResponse:
    """
    Get inline suggestions for a cursor position.

    Args:
        request: Document text, cursor position and language.

    Returns:
        Zero or one suggestions and the time taken.
    """
    return await handler.suggest(request)


@app.post("/suggestions/trigger", response_model=SuggestionResponse)
async def trigger(request: SuggestionRequest, handler: HandlerDep) -> SuggestionResponse:
    """Manually trigger a suggestion at a cursor position."""
    return await handler.trigger(request)


@app.delete("/cache", response_model=ClearCacheResponse)
async def clear_cache(handler: HandlerDep) -> ClearCacheResponse:
    """Clear all entries from the suggestion cache."""
    return await handler.clear_cache()


@app.get("/stats", response_model=StatsResponse)
async def get_stats(handler: HandlerDep) -> StatsResponse:
    """Get cache statistics and pipeline counters."""
    return await handler.get_stats()


@app.post("/stats/reset", response_model=dict[str, str])
async def reset_stats(service: ServiceDep) -> dict[str, str]:
    """Reset pipeline counters."""
    service.reset_stats()
    return {"message": "Performance metrics reset"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "code_echo.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
