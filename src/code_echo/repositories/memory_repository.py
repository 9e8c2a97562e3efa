"""In-memory implementation of SuggestionStore.

Suggestions are short-lived: they describe one cursor position in a buffer
that is changing under the user's fingers. Entries expire after a short TTL
and the store is capped at a fixed number of entries. Cleanup runs eagerly
on every write, so there is no background sweeper.
"""

import logging
import time
from collections.abc import Callable, Sequence

from code_echo.config import settings
from code_echo.entities import CacheEntry, CacheKey

logger = logging.getLogger(__name__)

# Placeholder text left behind by editor integration tests; never served.
PLACEHOLDER_SUGGESTION = "# Static suggestion for testing"


class InMemorySuggestionRepository:
    """Dict-backed suggestion cache with TTL and size bound.

    This class satisfies the SuggestionStore protocol through structural
    typing - no explicit inheritance needed.

    Invariants:
    - An entry is valid while ``now - created_at < ttl``
    - ``count_all() <= max_size`` after every ``put``
    - Overflow evicts the oldest ``created_at`` first (not LRU by access)
    """

    def __init__(
        self,
        ttl_ms: int | None = None,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory repository.

        Args:
            ttl_ms: Entry lifetime in milliseconds. Defaults to settings.
            max_size: Maximum number of entries. Defaults to settings.
            clock: Monotonic clock returning seconds (injectable for tests).

        Raises:
            ValueError: If ttl_ms or max_size is not positive
        """
        self._ttl_ms = settings.cache_ttl_ms if ttl_ms is None else ttl_ms
        self._max_size = settings.cache_max_size if max_size is None else max_size
        if self._ttl_ms <= 0:
            raise ValueError("ttl_ms must be > 0")
        if self._max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def create(
        cls,
        ttl_ms: int | None = None,
        max_size: int | None = None,
    ) -> "InMemorySuggestionRepository":
        """Factory method to create InMemorySuggestionRepository with defaults.

        Args:
            ttl_ms: Entry lifetime in milliseconds. If None, uses settings.
            max_size: Maximum entries. If None, uses settings.

        Returns:
            Configured InMemorySuggestionRepository
        """
        return cls(ttl_ms=ttl_ms, max_size=max_size)

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_ms / 1000

    @property
    def max_size(self) -> int:
        return self._max_size

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return entry.age(now) >= self.ttl_seconds

    def get(self, key: CacheKey) -> CacheEntry | None:
        """Return a valid entry for key, or None.

        Expired entries and entries holding the placeholder sentinel are
        evicted on read.

        Args:
            key: (document_id, line, prefix_text)

        Returns:
            The cached entry if still valid, None otherwise
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._is_expired(entry, self._clock()) or PLACEHOLDER_SUGGESTION in entry.suggestions:
            del self._entries[key]
            self._evictions += 1
            self._misses += 1
            return None

        self._hits += 1
        return entry

    def put(self, key: CacheKey, suggestions: Sequence[str]) -> CacheEntry:
        """Store suggestions for key, then clean up.

        Args:
            key: (document_id, line, prefix_text)
            suggestions: Completion texts, in order

        Returns:
            The entry that was written
        """
        entry = CacheEntry(key=key, suggestions=tuple(suggestions), created_at=self._clock())

        # Re-insert so dict order follows created_at for equal timestamps
        self._entries.pop(key, None)
        self._entries[key] = entry

        self.cleanup()
        return entry

    def cleanup(self) -> int:
        """Drop expired entries, then the oldest entries beyond max_size.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        removed = 0

        for key in [k for k, e in self._entries.items() if self._is_expired(e, now)]:
            del self._entries[key]
            removed += 1

        overflow = len(self._entries) - self._max_size
        if overflow > 0:
            oldest = sorted(self._entries.values(), key=lambda e: e.created_at)[:overflow]
            for entry in oldest:
                del self._entries[entry.key]
            removed += overflow

        if removed:
            self._evictions += removed
            logger.debug("Cache cleanup removed %d entries (%d left)", removed, len(self._entries))

        return removed

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def count_all(self) -> int:
        """Count entries currently held."""
        return len(self._entries)

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with entry count, hit/miss/eviction counters and limits
        """
        lookups = self._hits + self._misses
        return {
            "total_entries": len(self._entries),
            "max_size": self._max_size,
            "ttl_ms": self._ttl_ms,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups else 0.0,
            "evictions": self._evictions,
        }
