"""Shared fixtures for the suggestion pipeline tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from code_echo.entities import EditContext
from code_echo.repositories import InMemorySuggestionRepository
from code_echo.services import SuggestionService


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_context(
    prefix: str = "    total = compute(",
    line: int = 3,
    document_id: str = "file:///project/app.py",
    previous_line: str = "def run(values):",
    surrounding_text: str = "def run(values):\n    total = compute(",
    language_id: str | None = "python",
) -> EditContext:
    return EditContext(
        document_id=document_id,
        line=line,
        column=len(prefix),
        prefix_text=prefix,
        surrounding_text=surrounding_text,
        previous_line=previous_line,
        language_id=language_id,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemorySuggestionRepository(ttl_ms=2000, max_size=50, clock=clock)


@pytest.fixture
def model():
    """Completion model double; complete() returns a usable reply by default."""
    mock = Mock()
    mock.model_name = "qwen2.5-coder:7b"
    mock.complete = AsyncMock(return_value="values)")
    mock.is_available = AsyncMock(return_value=True)
    mock.is_model_installed = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def service(model, store, notifier):
    return SuggestionService(
        model=model,
        store=store,
        notifier=notifier,
        debounce_ms=0,
        max_retries=3,
    )
