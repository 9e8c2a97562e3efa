"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SuggestionRequest(BaseModel):
    """Request DTO for an inline suggestion at a cursor position.

    The handler will convert this to an EditContext for the service layer.
    """

    document_id: str = Field(..., description="Document identifier (usually its URI)", min_length=1)
    text: str = Field(..., description="Full document text")
    line: int = Field(..., description="Zero-based cursor line", ge=0)
    column: int = Field(..., description="Zero-based cursor column", ge=0)
    language_id: str | None = Field(
        None,
        description="Editor language identifier (e.g. 'python'); unsupported languages get no suggestions",
    )
