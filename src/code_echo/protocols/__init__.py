"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Ollama -> llama.cpp, memory -> shared store)
- Unit testing with mock implementations
- Clear separation of concerns

Usage:
    ```python
    from code_echo.protocols import CompletionModel, SuggestionStore

    model: CompletionModel = OllamaCompletionProvider.create()
    store: SuggestionStore = InMemorySuggestionRepository.create()
    ```
"""

from .completion_model import CompletionModel
from .notifier import Notifier
from .suggestion_store import SuggestionStore

__all__ = [
    "CompletionModel",
    "Notifier",
    "SuggestionStore",
]
