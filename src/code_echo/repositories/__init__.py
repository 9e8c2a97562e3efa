"""Repository layer for data access.

This layer abstracts external dependencies (the model server, the cache
backend, user notifications) behind protocol-based interfaces. This
enables:
- Easy swapping of implementations
- Unit testing with mock implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not
inheritance-based. Any class implementing the required methods will
satisfy the protocol.
"""

from code_echo.protocols import CompletionModel, Notifier, SuggestionStore

from .log_notifier import LoggingNotifier
from .memory_repository import PLACEHOLDER_SUGGESTION, InMemorySuggestionRepository
from .ollama_completion_provider import OllamaCompletionProvider

__all__ = [
    "CompletionModel",
    "Notifier",
    "SuggestionStore",
    "InMemorySuggestionRepository",
    "LoggingNotifier",
    "OllamaCompletionProvider",
    "PLACEHOLDER_SUGGESTION",
]
