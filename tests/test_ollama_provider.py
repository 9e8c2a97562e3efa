"""
Tests for the Ollama chat client, using httpx.MockTransport.
"""

import json

import httpx
import pytest

from code_echo.exceptions import (
    CompletionError,
    MalformedResponseError,
    ModelConnectionError,
    ModelServerError,
)
from code_echo.protocols import CompletionModel
from code_echo.repositories import OllamaCompletionProvider

ENDPOINT = "http://localhost:11434/api/chat"


def make_provider(handler) -> OllamaCompletionProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OllamaCompletionProvider(model_name="qwen2.5-coder:7b", endpoint=ENDPOINT, client=client)


def chat_reply(content: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={"model": "qwen2.5-coder:7b", "message": {"role": "assistant", "content": content}, "done": True},
    )


class TestProtocol:
    def test_satisfies_completion_model(self):
        assert isinstance(make_provider(lambda request: chat_reply("")), CompletionModel)

    def test_tags_url_on_same_host(self):
        provider = make_provider(lambda request: chat_reply(""))
        assert provider.tags_url == "http://localhost:11434/api/tags"


class TestComplete:
    @pytest.mark.asyncio
    async def test_sends_non_streaming_chat_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return chat_reply("number): return number ** 2")

        provider = make_provider(handler)

        text = await provider.complete("def square(")

        assert text == "number): return number ** 2"
        assert seen["url"] == ENDPOINT
        assert seen["body"]["model"] == "qwen2.5-coder:7b"
        assert seen["body"]["stream"] is False
        assert seen["body"]["messages"] == [{"role": "user", "content": "def square("}]

    @pytest.mark.asyncio
    async def test_server_error_status(self):
        provider = make_provider(lambda request: httpx.Response(500, text="out of memory"))

        with pytest.raises(ModelServerError) as exc_info:
            await provider.complete("x = ")

        assert exc_info.value.status_code == 500
        assert "out of memory" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_model_hint(self):
        provider = make_provider(
            lambda request: httpx.Response(404, json={"error": "model 'qwen2.5-coder:7b' not found"})
        )

        with pytest.raises(ModelServerError, match="ollama pull qwen2.5-coder:7b"):
            await provider.complete("x = ")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        provider = make_provider(lambda request: httpx.Response(200, text="<html>proxy</html>"))

        with pytest.raises(MalformedResponseError):
            await provider.complete("x = ")

    @pytest.mark.asyncio
    async def test_body_without_message(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"done": True}))

        with pytest.raises(MalformedResponseError):
            await provider.complete("x = ")

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(ModelConnectionError, match="ollama serve"):
            await provider.complete("x = ")

    def test_errors_share_a_base_class(self):
        assert issubclass(ModelConnectionError, CompletionError)
        assert issubclass(ModelServerError, CompletionError)
        assert issubclass(MalformedResponseError, CompletionError)


class TestAvailability:
    @pytest.mark.asyncio
    async def test_model_installed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/tags"
            return httpx.Response(200, json={"models": [{"name": "qwen2.5-coder:7b"}, {"name": "llama3:8b"}]})

        provider = make_provider(handler)

        assert await provider.is_available()
        assert await provider.is_model_installed()
        assert await provider.list_models() == ["qwen2.5-coder:7b", "llama3:8b"]

    @pytest.mark.asyncio
    async def test_model_missing(self):
        provider = make_provider(lambda request: httpx.Response(200, json={"models": [{"name": "llama3:8b"}]}))

        assert await provider.is_available()
        assert not await provider.is_model_installed()

    @pytest.mark.asyncio
    async def test_server_down(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        provider = make_provider(handler)

        assert not await provider.is_available()
        assert not await provider.is_model_installed()

    @pytest.mark.asyncio
    async def test_close(self):
        provider = make_provider(lambda request: chat_reply(""))
        client = provider.client

        await provider.close()

        assert client.is_closed
