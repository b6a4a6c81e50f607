"""Search-input debouncing.

Raw keystrokes go to ``push``; the callback only fires after ``delay``
seconds without new input, with the latest value, and never twice in a row
for the same value. ``submit`` bypasses the timer (explicit search submit).
Once the quiet window is over a delivery runs to completion; later input
only schedules the next one.

Usage:
    debouncer = Debouncer(controller.search, delay=settings.search_debounce_ms / 1000)
    debouncer.push("ph")
    debouncer.push("physics")   # only "physics" is searched
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")

_UNSET = object()


class Debouncer(Generic[V]):
    def __init__(self, callback: Callable[[V], Awaitable[None]], delay: float = 0.5):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._callback = callback
        self.delay = delay
        self._timer: asyncio.Task | None = None  # still inside the quiet window
        self._tasks: set[asyncio.Task] = set()
        self._last_emitted = _UNSET
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while input is waiting out the quiet window."""
        return self._timer is not None and not self._timer.done()

    def push(self, value: V) -> None:
        """Record new input and restart the quiescence timer."""
        if self._closed:
            return
        self._cancel_timer()
        task = asyncio.get_running_loop().create_task(self._fire_later(value))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def submit(self, value: V) -> None:
        """Deliver ``value`` now, dropping any input still in the quiet window."""
        if self._closed:
            return
        self._cancel_timer()
        await self._emit(value, distinct=False)

    async def wait(self) -> None:
        """Wait until every scheduled delivery, running ones included, has finished."""
        while True:
            tasks = [task for task in self._tasks if not task.done()]
            if not tasks:
                return
            await asyncio.wait(tasks)
            for task in tasks:
                if not task.cancelled():
                    task.result()

    def close(self) -> None:
        self._closed = True
        self._cancel_timer()

    # ── Internals ────────────────────────────────────────────

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _fire_later(self, value: V) -> None:
        await asyncio.sleep(self.delay)
        # Past the quiet window: new input starts its own timer and never
        # cancels a delivery that is already running.
        if self._timer is asyncio.current_task():
            self._timer = None
        await self._emit(value, distinct=True)

    async def _emit(self, value: V, distinct: bool) -> None:
        if distinct and value == self._last_emitted:
            logger.debug(f"Debouncer skipped unchanged value {value!r}")
            return
        self._last_emitted = value
        try:
            await self._callback(value)
        except BaseException:
            # An unfinished delivery does not count as delivered
            if self._last_emitted == value:
                self._last_emitted = _UNSET
            raise
