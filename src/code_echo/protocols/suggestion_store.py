"""Suggestion store protocol.

Defines the interface for a time-bounded, size-bounded store of
suggestions keyed by edit position.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from code_echo.entities import CacheEntry, CacheKey


@runtime_checkable
class SuggestionStore(Protocol):
    """Protocol for suggestion cache backends."""

    def get(self, key: CacheKey) -> CacheEntry | None:
        """Return a valid entry for key, or None.

        Expired entries and entries holding the placeholder sentinel are
        treated as absent and evicted.
        """
        ...

    def put(self, key: CacheKey, suggestions: Sequence[str]) -> CacheEntry:
        """Store suggestions for key and run cleanup.

        Returns:
            The entry that was written
        """
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count entries currently held (valid or not yet cleaned up)."""
        ...

    def get_stats(self) -> dict:
        """Get store statistics (implementation-specific)."""
        ...
