"""Trailing-edge debounce on the running asyncio loop."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set, Union

logger = logging.getLogger(__name__)

Callback = Callable[[], Union[Awaitable[Any], Any]]


class Debouncer:
    """Run ``callback`` once, ``delay`` seconds after the most recent trigger.

    Every ``trigger()`` resets the timer. Coroutine callbacks are scheduled
    as tasks; their exceptions are logged and never propagate to the caller
    that triggered them.
    """

    def __init__(self, delay: float, callback: Callback, *, name: str = "debounce") -> None:
        self.delay = delay
        self.name = name
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set["asyncio.Task[Any]"] = set()

    @property
    def pending(self) -> bool:
        """Whether a run is scheduled and has not fired yet."""
        return self._handle is not None

    def trigger(self) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run a pending callback now instead of waiting for the timer."""
        if self._handle is not None:
            self.cancel()
            self._fire()

    async def wait_idle(self) -> None:
        """Wait for callback tasks that have already started."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self) -> None:
        self._handle = None
        try:
            result = self._callback()
        except Exception:
            logger.exception("%s callback failed", self.name)
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_done)

    def _on_done(self, task: "asyncio.Task[Any]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s callback failed: %s", self.name, exc, exc_info=exc)


__all__ = ["Debouncer"]
