"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract and the wire
format of the model server. They are used for request/response
validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .ollama import ChatMessage, ChatRequest, ChatResponse, ModelTag, TagsResponse
from .requests import SuggestionRequest
from .responses import (
    ClearCacheResponse,
    HealthCheckResponse,
    StatsResponse,
    SuggestionItem,
    SuggestionResponse,
)

__all__ = [
    "SuggestionRequest",
    "SuggestionItem",
    "SuggestionResponse",
    "ClearCacheResponse",
    "StatsResponse",
    "HealthCheckResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ModelTag",
    "TagsResponse",
]
