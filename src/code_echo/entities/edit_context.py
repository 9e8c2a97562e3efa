"""Edit context domain entity."""

from dataclasses import dataclass

CacheKey = tuple[str, int, str]


@dataclass(frozen=True)
class EditContext:
    """Snapshot of the editor state at one trigger event.

    Captured once per trigger and never mutated; the orchestration cycle
    that consumes it works on this copy even if the buffer keeps changing.

    Attributes:
        document_id: Stable identifier of the document (usually its URI)
        line: Zero-based cursor line
        column: Zero-based cursor column
        prefix_text: Text from the start of the line up to the cursor
        surrounding_text: Lines within the context radius of the cursor
        previous_line: Full text of the line above the cursor ("" on line 0)
        language_id: Editor language identifier, if known
    """

    document_id: str
    line: int
    column: int
    prefix_text: str
    surrounding_text: str = ""
    previous_line: str = ""
    language_id: str | None = None

    @property
    def cache_key(self) -> CacheKey:
        """Key under which suggestions for this position are cached."""
        return (self.document_id, self.line, self.prefix_text)

    @property
    def indentation(self) -> str:
        """Leading whitespace of the current line."""
        return self.prefix_text[: len(self.prefix_text) - len(self.prefix_text.lstrip())]

    @classmethod
    def from_document(
        cls,
        document_id: str,
        text: str,
        line: int,
        column: int,
        radius: int,
        language_id: str | None = None,
    ) -> "EditContext":
        """Build a context from full document text and a cursor position.

        Args:
            document_id: Identifier of the document
            text: Full document text
            line: Zero-based cursor line
            column: Zero-based cursor column (clamped to the line length)
            radius: Number of lines above and below the cursor to include
            language_id: Editor language identifier

        Returns:
            The captured EditContext

        Raises:
            ValueError: If line is outside the document or radius is negative
        """
        if radius < 0:
            raise ValueError("radius must be >= 0")

        lines = text.split("\n")
        if not 0 <= line < len(lines):
            raise ValueError(f"line {line} is outside the document ({len(lines)} lines)")

        current = lines[line]
        column = max(0, min(column, len(current)))

        start = max(0, line - radius)
        end = min(len(lines) - 1, line + radius)

        return cls(
            document_id=document_id,
            line=line,
            column=column,
            prefix_text=current[:column],
            surrounding_text="\n".join(lines[start : end + 1]),
            previous_line=lines[line - 1] if line > 0 else "",
            language_id=language_id,
        )
