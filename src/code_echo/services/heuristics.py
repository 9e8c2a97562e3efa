"""Cheap checks that decide whether a cursor position deserves a suggestion.

These run before any cache lookup or network call. A position inside a
comment or a docstring never gets a suggestion.
"""

from code_echo.config import SUPPORTED_LANGUAGES

LINE_COMMENT_MARKERS = ("#", "//")
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
DOCSTRING_DELIMITERS = ('"""', "'''")


def is_in_line_comment(prefix: str) -> bool:
    return prefix.lstrip().startswith(LINE_COMMENT_MARKERS)


def is_in_block_comment(prefix: str) -> bool:
    """True when a block comment is opened after the last one was closed."""
    opened = prefix.rfind(BLOCK_COMMENT_OPEN)
    if opened == -1:
        return False
    return prefix.rfind(BLOCK_COMMENT_CLOSE) < opened


def is_in_docstring(prefix: str) -> bool:
    """True when either triple-quote delimiter appears an odd number of times."""
    return any(prefix.count(delimiter) % 2 for delimiter in DOCSTRING_DELIMITERS)


def is_suppressed(prefix: str) -> bool:
    """Classify the text before the cursor.

    Args:
        prefix: Text from the start of the line up to the cursor

    Returns:
        True if the cursor sits inside a line comment, an unterminated
        block comment or an open docstring
    """
    return is_in_line_comment(prefix) or is_in_block_comment(prefix) or is_in_docstring(prefix)


def is_supported_language(language_id: str | None) -> bool:
    """True for languages the editor integration is registered for.

    A request that does not name its language is treated as supported.
    """
    if language_id is None:
        return True
    return language_id.lower() in SUPPORTED_LANGUAGES
