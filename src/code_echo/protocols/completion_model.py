"""Completion model protocol.

Defines the interface for any language-model backend that can turn a
prompt into completion text.

Implementations can include:
- Ollama chat API (local, default)
- llama.cpp server
- Any OpenAI-compatible endpoint
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionModel(Protocol):
    """Protocol for completion model backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.

    Example:
        ```python
        from code_echo.protocols import CompletionModel

        model: CompletionModel = OllamaCompletionProvider.create()
        ```
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def complete(self, prompt: str) -> str:
        """Return the raw completion text for a prompt.

        Args:
            prompt: The full prompt to send

        Returns:
            The model's text, unprocessed

        Raises:
            CompletionError: On network errors, non-success status codes or
                malformed response bodies
        """
        ...

    async def is_available(self) -> bool:
        """Check if the model server is reachable.

        Returns:
            True if available, False otherwise
        """
        ...
