"""
Tests for the full suggestion pipeline.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from code_echo.entities import CancellationToken, SuggestionSource
from code_echo.exceptions import ModelConnectionError
from code_echo.services import SuggestionService

from .conftest import make_context


class TestConstruction:
    def test_cache_cleared_on_construction(self, model, store, notifier):
        store.put(("doc", 1, "x"), ["stale"])

        SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=0)

        assert store.count_all() == 0


class TestSuppression:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("prefix", ["    # comment", "// note", '    """Doc', "/* open"])
    async def test_comment_positions_never_reach_the_model(self, service, model, prefix):
        suggestions = await service.provide(make_context(prefix=prefix))

        assert suggestions == []
        model.complete.assert_not_awaited()
        assert service.metrics.suppressed == 1

    @pytest.mark.asyncio
    async def test_unsupported_language(self, service, model):
        assert await service.provide(make_context(language_id="fortran")) == []
        model.complete.assert_not_awaited()


class TestStaticPath:
    @pytest.mark.asyncio
    async def test_if_prefix_answered_without_cache_or_model(self, service, model, store):
        context = make_context(prefix="if ")

        suggestions = await service.provide(context)

        assert len(suggestions) == 1
        assert suggestions[0].source is SuggestionSource.STATIC
        assert suggestions[0].text.endswith(":")
        model.complete.assert_not_awaited()
        assert store.get_stats()["hits"] + store.get_stats()["misses"] == 0

    @pytest.mark.asyncio
    async def test_empty_line_after_def(self, service, model):
        suggestions = await service.provide(make_context(prefix="", previous_line="def run(values):"))

        assert [s.text for s in suggestions] == ["    pass"]
        model.complete.assert_not_awaited()


class TestModelPath:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self, service, model):
        context = make_context()

        first = await service.provide(context)
        second = await service.provide(context)

        assert first[0].source is SuggestionSource.MODEL
        assert second[0].source is SuggestionSource.CACHE
        assert second[0].text == first[0].text
        model.complete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_placeholder_is_ignored(self, service, model, store):
        context = make_context()
        store.put(context.cache_key, ["# Static suggestion for testing"])

        suggestions = await service.provide(context)

        assert suggestions[0].source is SuggestionSource.MODEL
        model.complete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_model_failure_yields_empty_list(self, service, model, notifier):
        model.complete.side_effect = RuntimeError("socket closed")

        assert await service.provide(make_context()) == []
        notifier.notify_error.assert_called_once()


class TestDebounce:
    @pytest.mark.asyncio
    async def test_burst_of_triggers_makes_one_model_call(self, model, store, notifier):
        service = SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=30)
        contexts = [make_context(prefix=f"    total = compute(v{i}", line=3) for i in range(4)]

        results = await asyncio.gather(*(service.provide(c) for c in contexts))

        model.complete.assert_awaited_once()
        assert "compute(v3" in model.complete.await_args.args[0]
        assert results[:3] == [[], [], []]
        assert len(results[3]) == 1

    @pytest.mark.asyncio
    async def test_token_cancelled_during_settle_window(self, model, store, notifier):
        service = SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=30)
        token = CancellationToken()

        pending = asyncio.ensure_future(service.provide(make_context(), token))
        await asyncio.sleep(0)
        token.cancel()

        assert await pending == []
        model.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_token_returns_immediately(self, service, model):
        token = CancellationToken()
        token.cancel()

        assert await service.provide(make_context(prefix="if "), token) == []
        model.complete.assert_not_awaited()


class TestCommands:
    @pytest.mark.asyncio
    async def test_trigger_runs_normal_path(self, service, model, notifier):
        suggestions = await service.trigger(make_context())

        assert suggestions[0].text == "values)"
        notifier.notify_info.assert_called_with("Suggestions triggered")

    @pytest.mark.asyncio
    async def test_clear_cache(self, service, notifier):
        await service.provide(make_context())

        assert service.clear_cache() == 1
        assert service.store.count_all() == 0
        notifier.notify_info.assert_called_with("Suggestion cache cleared")

    @pytest.mark.asyncio
    async def test_stats(self, service):
        await service.provide(make_context(prefix="# c"))
        await service.provide(make_context())

        stats = service.get_stats()

        assert stats["cache"]["model"] == "qwen2.5-coder:7b"
        assert stats["performance"]["total_requests"] == 2
        assert stats["performance"]["suppressed"] == 1
        assert stats["performance"]["model_calls"] == 1

        service.reset_stats()
        assert service.get_stats()["performance"]["total_requests"] == 0

    @pytest.mark.asyncio
    async def test_close_releases_model(self, service, model):
        await service.close()

        model.close.assert_awaited_once()


class TestCollaboratorFailures:
    @pytest.mark.asyncio
    async def test_failing_cache_write_still_returns_suggestion(self, model, store, notifier):
        store.put = Mock(side_effect=MemoryError("store write failed"))
        service = SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=0, max_retries=0)

        suggestions = await service.provide(make_context())

        assert [s.text for s in suggestions] == ["values)"]
        assert service.orchestrator.state.is_processing is False

    @pytest.mark.asyncio
    async def test_failing_notifier_still_returns_empty_list(self, model, store, notifier):
        model.complete.side_effect = ModelConnectionError("Connection refused")
        notifier.notify_error.side_effect = RuntimeError("notification channel closed")
        service = SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=0, max_retries=0)

        assert await service.provide(make_context()) == []
        notifier.notify_error.assert_called_once()

    @pytest.mark.asyncio
    async def test_failing_cache_read_yields_empty_list(self, service, store):
        store.get = Mock(side_effect=RuntimeError("store unavailable"))

        assert await service.provide(make_context()) == []


class TestClose:
    @pytest.mark.asyncio
    async def test_close_stops_in_flight_query(self, model, store, notifier):
        started = asyncio.Event()

        async def slow_complete(prompt):
            started.set()
            await asyncio.sleep(10)
            return "values)"

        model.complete = AsyncMock(side_effect=slow_complete)
        service = SuggestionService(model=model, store=store, notifier=notifier, debounce_ms=0, max_retries=3)

        pending = asyncio.ensure_future(service.provide(make_context()))
        await started.wait()
        await service.close()

        assert await pending == []
        model.complete.assert_awaited_once()
        model.close.assert_awaited_once()
        assert store.count_all() == 0
