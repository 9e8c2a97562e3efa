"""Suggestion domain entity."""

from dataclasses import dataclass
from enum import Enum


class SuggestionSource(str, Enum):
    """Where a suggestion came from."""

    STATIC = "static"
    CACHE = "cache"
    MODEL = "model"


@dataclass(frozen=True)
class Suggestion:
    """A single inline completion anchored at the triggering position.

    Attributes:
        text: Completion text to insert at the anchor
        line: Anchor line (zero-based)
        column: Anchor column (zero-based)
        source: Pattern matcher, cache or model
    """

    text: str
    line: int
    column: int
    source: SuggestionSource = SuggestionSource.MODEL
