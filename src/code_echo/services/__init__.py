"""Service layer for business logic.

This layer contains the suggestion pipeline. Services depend on protocols
(interfaces), not concrete implementations, making them testable and
flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Model server / cache)

Usage:
    ```python
    from code_echo.services import SuggestionService

    service = SuggestionService.create(model=model, store=store, notifier=notifier)
    suggestions = await service.provide(context)
    ```
"""

from .debounce import Debouncer
from .heuristics import is_suppressed, is_supported_language
from .orchestrator import RequestOrchestrator
from .patterns import RULES, PatternKind, PatternRule, StaticMatch, match_static
from .suggestion_service import SuggestionService

__all__ = [
    "Debouncer",
    "PatternKind",
    "PatternRule",
    "RULES",
    "RequestOrchestrator",
    "StaticMatch",
    "SuggestionService",
    "is_suppressed",
    "is_supported_language",
    "match_static",
]
