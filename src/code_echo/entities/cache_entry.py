"""Cache entry domain entity."""

from dataclasses import dataclass

from .edit_context import CacheKey


@dataclass(frozen=True)
class CacheEntry:
    """Domain entity for cached suggestions at one edit position.

    Attributes:
        key: (document_id, line, prefix_text)
        suggestions: Cached completion texts, in order
        created_at: Clock reading (seconds) when the entry was written
    """

    key: CacheKey
    suggestions: tuple[str, ...]
    created_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was written."""
        return now - self.created_at
