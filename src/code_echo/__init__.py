"""CodeEcho - inline code suggestions from a local language model.

This package provides a layered architecture for inline suggestions:

Layers:
    - protocols: Interface contracts (CompletionModel, SuggestionStore, Notifier)
    - repositories: Implementations (Ollama client, in-memory cache, log notifier)
    - services: Business logic (filter, patterns, debounce, orchestrator)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts, Ollama wire format)
    - entities: Domain models (internal)

Usage:
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
    ```

For HTTP API:
    ```python
    from code_echo.api.app import app
    ```
"""

from code_echo.config import get_settings, settings
from code_echo.dto import SuggestionRequest, SuggestionResponse
from code_echo.entities import CacheEntry, CancellationToken, EditContext, Suggestion, SuggestionSource
from code_echo.exceptions import CompletionError
from code_echo.handlers import SuggestionHandler
from code_echo.protocols import CompletionModel, Notifier, SuggestionStore
from code_echo.repositories import InMemorySuggestionRepository, LoggingNotifier, OllamaCompletionProvider
from code_echo.services import RequestOrchestrator, SuggestionService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CompletionModel",
    "Notifier",
    "SuggestionStore",
    # Services (business logic)
    "RequestOrchestrator",
    "SuggestionService",
    # Handlers (HTTP)
    "SuggestionHandler",
    # Repositories
    "InMemorySuggestionRepository",
    "LoggingNotifier",
    "OllamaCompletionProvider",
    # Entities (domain models)
    "CacheEntry",
    "CancellationToken",
    "EditContext",
    "Suggestion",
    "SuggestionSource",
    # DTOs (API contracts)
    "SuggestionRequest",
    "SuggestionResponse",
    # Errors
    "CompletionError",
]
