"""Domain entities for internal representation.

These are pure dataclasses used internally by services and repositories.
They are NOT used for API contracts - use DTOs from the dto package for
that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
"""

from .cache_entry import CacheEntry
from .edit_context import CacheKey, EditContext
from .orchestration import CancellationToken, OrchestrationState
from .suggestion import Suggestion, SuggestionSource

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CancellationToken",
    "EditContext",
    "OrchestrationState",
    "Suggestion",
    "SuggestionSource",
]
