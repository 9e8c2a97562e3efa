"""Static completions for shallow, unambiguous syntactic cues.

The rules live in one ordered table. ``match_static`` walks it top to
bottom and the first rule whose predicate holds supplies the completion,
so precedence is exactly the order of ``RULES``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

INDENT_UNIT = "    "
PLACEHOLDER_STATEMENT = "pass"
MAIN_GUARD_VALUE = "__main__"
BLOCK_KEYWORDS = ("def ", "async def ", "class ")

_MAIN_GUARD = re.compile(r"\bif\s+__name__\s*==\s*(?:(?P<quote>[\"'])(?P<partial>\w*))?$")


class PatternKind(str, Enum):
    MAIN_GUARD = "main_guard"
    IF_CONDITION = "if_condition"
    BLOCK_OPENER = "block_opener"
    BLOCK_BODY = "block_body"


@dataclass(frozen=True)
class PatternRule:
    """One entry of the static completion table.

    Attributes:
        kind: Tag identifying the rule
        description: Human-readable cue, used in logs
        predicate: (prefix, previous_line) -> whether the rule applies
        completion: (prefix, previous_line) -> text to insert at the cursor
    """

    kind: PatternKind
    description: str
    predicate: Callable[[str, str], bool]
    completion: Callable[[str, str], str]


@dataclass(frozen=True)
class StaticMatch:
    """Result of a successful table lookup."""

    kind: PatternKind
    text: str


def _leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


def _is_main_guard(prefix: str, previous_line: str) -> bool:
    match = _MAIN_GUARD.search(prefix)
    if match is None:
        return False
    partial = match.group("partial")
    if partial is None:
        return True
    return partial != MAIN_GUARD_VALUE and MAIN_GUARD_VALUE.startswith(partial)


def _complete_main_guard(prefix: str, previous_line: str) -> str:
    match = _MAIN_GUARD.search(prefix)
    quote = match.group("quote") if match else None
    if quote is None:
        lead = "" if prefix.endswith(" ") else " "
        return f'{lead}"{MAIN_GUARD_VALUE}":'
    return MAIN_GUARD_VALUE[len(match.group("partial")) :] + quote + ":"


def _is_if_statement(prefix: str, previous_line: str) -> bool:
    stripped = prefix.strip()
    return stripped == "if" or stripped.startswith("if ")


def _complete_if_statement(prefix: str, previous_line: str) -> str:
    lead = "" if prefix[-1:].isspace() else " "
    return f"{lead}condition:"


def _ends_with_colon(prefix: str, previous_line: str) -> bool:
    return prefix.endswith(":")


def _complete_block_opener(prefix: str, previous_line: str) -> str:
    return "\n" + _leading_whitespace(prefix) + INDENT_UNIT + PLACEHOLDER_STATEMENT


def _is_empty_block_body(prefix: str, previous_line: str) -> bool:
    if prefix.strip():
        return False
    opener = previous_line.strip()
    return opener.endswith(":") or opener.startswith(BLOCK_KEYWORDS)


def _complete_block_body(prefix: str, previous_line: str) -> str:
    target = _leading_whitespace(previous_line) + INDENT_UNIT
    if target.startswith(prefix):
        return target[len(prefix) :] + PLACEHOLDER_STATEMENT
    return PLACEHOLDER_STATEMENT


RULES: tuple[PatternRule, ...] = (
    PatternRule(
        PatternKind.MAIN_GUARD,
        'After if __name__ == "',
        _is_main_guard,
        _complete_main_guard,
    ),
    PatternRule(
        PatternKind.IF_CONDITION,
        "After if",
        _is_if_statement,
        _complete_if_statement,
    ),
    PatternRule(
        PatternKind.BLOCK_OPENER,
        "After colon",
        _ends_with_colon,
        _complete_block_opener,
    ),
    PatternRule(
        PatternKind.BLOCK_BODY,
        "Empty line after block opener",
        _is_empty_block_body,
        _complete_block_body,
    ),
)


def match_static(prefix: str, previous_line: str = "") -> StaticMatch | None:
    """Look up a static completion for the cursor position.

    Args:
        prefix: Text from the start of the line up to the cursor
        previous_line: Full text of the line above the cursor

    Returns:
        StaticMatch from the first applicable rule, or None
    """
    for rule in RULES:
        if rule.predicate(prefix, previous_line):
            return StaticMatch(kind=rule.kind, text=rule.completion(prefix, previous_line))
    return None
