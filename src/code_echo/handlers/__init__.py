"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Model server / cache)
"""

from .suggestion_handler import SuggestionHandler

__all__ = [
    "SuggestionHandler",
]
