"""Trailing-edge debounce for coroutine functions.

Each call re-arms a single timer on the running event loop. When the timer
finally fires, the wrapped coroutine runs once with the arguments of the
last call. Callers whose call was superseded get ``default()`` back
instead of waiting forever.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Coalesce bursts of calls into one execution per settle period.

    Only one execution can be pending per instance. Not thread-safe: all
    calls must come from the same event loop.

    Example:
        ```python
        debounced = Debouncer(fetch_suggestions, delay_ms=100, default=list)

        # Three calls inside 100 ms -> one fetch with the last arguments
        results = await asyncio.gather(
            debounced(ctx1, token1),
            debounced(ctx2, token2),
            debounced(ctx3, token3),
        )
        # results == [[], [], <fetch_suggestions(ctx3, token3)>]
        ```
    """

    def __init__(
        self,
        func: Callable[..., Awaitable[T]],
        delay_ms: int,
        default: Callable[[], T],
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._func = func
        self._delay = delay_ms / 1000
        self._default = default

        self._timer: asyncio.TimerHandle | None = None
        self._waiter: asyncio.Future[T] | None = None
        self._call: tuple[tuple[Any, ...], dict[str, Any]] = ((), {})
        self._running: set[asyncio.Task[None]] = set()

    @property
    def delay_ms(self) -> float:
        return self._delay * 1000

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._timer is not None

    async def __call__(self, *args: Any, **kwargs: Any) -> T:
        loop = asyncio.get_running_loop()
        self.cancel()

        waiter: asyncio.Future[T] = loop.create_future()
        self._waiter = waiter
        self._call = (args, kwargs)
        self._timer = loop.call_later(self._delay, self._fire)

        return await waiter

    def cancel(self) -> None:
        """Drop the pending execution, resolving its caller with default()."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        waiter, self._waiter = self._waiter, None
        if waiter is not None and not waiter.done():
            logger.debug("Debounced call superseded")
            waiter.set_result(self._default())

    async def shutdown(self) -> None:
        """Cancel the pending timer and any execution already running.

        Waiting callers resolve with default().
        """
        self.cancel()
        tasks = list(self._running)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _fire(self) -> None:
        self._timer = None
        waiter, self._waiter = self._waiter, None
        if waiter is None or waiter.done():
            # Caller went away (cancelled) before the timer fired
            return

        args, kwargs = self._call
        task = asyncio.get_running_loop().create_task(self._run(waiter, args, kwargs))
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self, waiter: "asyncio.Future[T]", args: tuple, kwargs: dict) -> None:
        try:
            result = await self._func(*args, **kwargs)
        except asyncio.CancelledError:
            if not waiter.done():
                waiter.set_result(self._default())
            raise
        except Exception as e:
            if not waiter.done():
                waiter.set_exception(e)
            return

        if not waiter.done():
            waiter.set_result(result)
