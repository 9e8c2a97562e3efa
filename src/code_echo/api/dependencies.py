"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from code_echo.config import configure_logging, settings
from code_echo.handlers import SuggestionHandler
from code_echo.repositories import (
    InMemorySuggestionRepository,
    LoggingNotifier,
    OllamaCompletionProvider,
)
from code_echo.services import SuggestionService

logger = logging.getLogger(__name__)


def get_suggestion_service(request: Request) -> SuggestionService:
    """Dependency injection for SuggestionService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SuggestionService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "suggestion_service", None)
    if service is None:
        raise RuntimeError("SuggestionService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> SuggestionHandler:
    """Dependency injection for SuggestionHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SuggestionHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "suggestion_handler", None)
    if handler is None:
        raise RuntimeError("SuggestionHandler not initialized. Check lifespan setup.")
    return handler


def build_service() -> SuggestionService:
    """Wire the default implementations from settings."""
    return SuggestionService.create(
        model=OllamaCompletionProvider.create(),
        store=InMemorySuggestionRepository.create(),
        notifier=LoggingNotifier(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Service (business logic) - stored in app.state.suggestion_service
    2. Handler (HTTP endpoints) - stored in app.state.suggestion_handler

    A service placed in app.state before startup (tests do this) is reused
    instead of building the default wiring.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    configure_logging()

    service = getattr(app.state, "suggestion_service", None) or build_service()
    app.state.suggestion_service = service
    app.state.suggestion_handler = SuggestionHandler(suggestion_service=service)

    logger.info("Suggestion service initialized")
    logger.info("Model: %s at %s", settings.model_name, settings.model_endpoint)
    logger.info("Debounce: %d ms, cache TTL: %d ms", settings.debounce_ms, settings.cache_ttl_ms)

    yield

    await service.close()
    del app.state.suggestion_handler
    del app.state.suggestion_service
    logger.info("Suggestion service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SuggestionHandler, Depends(get_handler)]
ServiceDep = Annotated[SuggestionService, Depends(get_suggestion_service)]
