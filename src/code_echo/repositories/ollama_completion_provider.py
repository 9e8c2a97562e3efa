"""Ollama-based completion provider.

Uses Ollama's local chat API to generate code completions. Ollama serves
models locally, so prompts never leave the machine.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull qwen2.5-coder:7b`
    - Ollama running: `ollama serve` (usually runs automatically)

Models that work well:
- qwen2.5-coder:7b (default)
- qwen2.5-coder:1.5b (faster, lower quality)
- codellama:7b
- deepseek-coder:6.7b
"""

import logging

import httpx

from code_echo.config import settings
from code_echo.dto import ChatMessage, ChatRequest, ChatResponse, TagsResponse
from code_echo.exceptions import (
    CompletionError,
    MalformedResponseError,
    ModelConnectionError,
    ModelServerError,
)

logger = logging.getLogger(__name__)


class OllamaCompletionProvider:
    """Ollama-based implementation of CompletionModel protocol.

    This class satisfies the CompletionModel protocol through structural
    typing - no explicit inheritance needed.

    The chat endpoint is http://localhost:11434/api/chat by default. The
    request is sent with stream=false, so the whole completion arrives in a
    single JSON body.

    Example:
        ```python
        provider = OllamaCompletionProvider.create(
            model_name="qwen2.5-coder:7b",
            endpoint="http://localhost:11434/api/chat",
        )

        text = await provider.complete("def square(")
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama completion provider.

        Args:
            model_name: Name of the Ollama model.
                       Defaults to settings.model_name.
            endpoint: Full URL of the chat API.
                     Defaults to settings.model_endpoint.
            timeout: Request timeout in seconds.
                    Defaults to settings.request_timeout.
            client: Pre-built HTTP client (mainly for tests).
        """
        self._model_name = model_name or settings.model_name
        self._endpoint = endpoint or settings.model_endpoint
        self._timeout = timeout or settings.request_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        endpoint: str | None = None,
    ) -> "OllamaCompletionProvider":
        """Factory method to create OllamaCompletionProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            endpoint: Chat API URL. If None, uses settings.

        Returns:
            Configured OllamaCompletionProvider
        """
        return cls(model_name=model_name, endpoint=endpoint)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier.

        Returns:
            Model name (e.g., "qwen2.5-coder:7b")
        """
        return self._model_name

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def tags_url(self) -> str:
        """URL of the model listing API on the same server."""
        return str(httpx.URL(self._endpoint).copy_with(path="/api/tags"))

    async def complete(self, prompt: str) -> str:
        """Send a prompt to the chat API and return the raw reply text.

        Args:
            prompt: The full prompt to send as a single user message

        Returns:
            The content of the assistant message, unprocessed

        Raises:
            ModelConnectionError: If the server cannot be reached
            ModelServerError: If the server answers with a non-success status
            MalformedResponseError: If the body is not a chat response
        """
        payload = ChatRequest(
            model=self._model_name,
            messages=[ChatMessage(role="user", content=prompt)],
            stream=False,
        )

        try:
            response = await self.client.post(self._endpoint, json=payload.model_dump())
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if isinstance(e, httpx.ConnectError) or "connection refused" in str(e).lower():
                error_msg += "\n  → Is Ollama running? Try: ollama serve"
            raise ModelConnectionError(error_msg) from e

        if response.is_error:
            body = response.text
            logger.error("Error response body from %s: %s", self._endpoint, body[:200])
            if response.status_code == 404 and "not found" in body.lower():
                body += f"\n  → Model not found. Try: ollama pull {self._model_name}"
            raise ModelServerError(response.status_code, body)

        try:
            data = ChatResponse.model_validate(response.json())
        except ValueError as e:
            logger.error("Unexpected response format: %s", response.text[:200])
            raise MalformedResponseError("Unexpected response format from model") from e

        return data.message.content

    async def list_models(self) -> list[str]:
        """List model tags installed on the server.

        Raises:
            ModelConnectionError: If the server cannot be reached
            ModelServerError: If the server answers with a non-success status
            MalformedResponseError: If the body is not a tag listing
        """
        try:
            response = await self.client.get(self.tags_url)
        except httpx.HTTPError as e:
            raise ModelConnectionError(f"Ollama API error: {e}") from e

        if response.is_error:
            raise ModelServerError(response.status_code, response.text)

        try:
            tags = TagsResponse.model_validate(response.json())
        except ValueError as e:
            raise MalformedResponseError("Unexpected tag listing format from model server") from e

        return [tag.name for tag in tags.models]

    async def is_available(self) -> bool:
        """Check if the model server is reachable.

        Returns:
            True if Ollama answers the tag listing, False otherwise
        """
        try:
            await self.list_models()
            return True
        except CompletionError:
            return False

    async def is_model_installed(self) -> bool:
        """Check if the configured model has been pulled.

        Matching is case-insensitive and accepts a bare family name
        ("qwen2.5-coder") against a tagged install ("qwen2.5-coder:7b").

        Returns:
            True if the model is listed, False if not or if the server is down
        """
        try:
            names = await self.list_models()
        except CompletionError:
            return False

        wanted = self._model_name.lower()
        return any(wanted in name.lower() for name in names)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
