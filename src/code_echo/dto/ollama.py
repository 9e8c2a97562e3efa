"""Wire format of the Ollama chat API (non-streaming)."""

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single chat message."""

    role: str = Field(..., description="Message author: 'system', 'user' or 'assistant'")
    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    """Body of POST /api/chat."""

    model: str = Field(..., description="Model tag, e.g. 'qwen2.5-coder:7b'")
    messages: list[ChatMessage]
    stream: bool = False


class ChatResponse(BaseModel):
    """Body returned by POST /api/chat when stream is false."""

    message: ChatMessage
    model: str | None = None
    done: bool | None = None

    model_config = {"extra": "allow"}


class ModelTag(BaseModel):
    """One entry of GET /api/tags."""

    name: str
    model: str | None = None

    model_config = {"extra": "allow"}


class TagsResponse(BaseModel):
    """Body returned by GET /api/tags."""

    models: list[ModelTag] = Field(default_factory=list)
