"""Recurring asyncio timers for device polling."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[None]]

_ids = itertools.count(1)


@dataclass(slots=True, eq=False)
class TimerHandle:
    """Handle returned by :meth:`PollScheduler.call_on_schedule`."""

    interval: float
    name: str
    timer_id: int = field(default_factory=lambda: next(_ids))
    _task: asyncio.Task[None] | None = field(default=None, repr=False)
    _cancelled: bool = field(default=False, repr=False)
    _in_tick: bool = field(default=False, repr=False)

    @property
    def active(self) -> bool:
        return not self._cancelled and self._task is not None and not self._task.done()


class PollScheduler:
    """Runs callbacks every *interval* seconds on the running loop.

    Every tick awaits the callback before sleeping again, so ticks of one
    timer never overlap.  A failing tick is logged and the timer keeps
    running.  Cancelling a timer interrupts its sleep only: a tick that is
    already running finishes, then the timer stops.
    """

    def __init__(self) -> None:
        self._timers: dict[int, TimerHandle] = {}

    @property
    def active_timers(self) -> list[TimerHandle]:
        return [handle for handle in self._timers.values() if handle.active]

    def call_on_schedule(self, interval: float, callback: TimerCallback, *, name: str = "") -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(interval=float(interval), name=name or getattr(callback, "__name__", "timer"))
        handle._task = asyncio.get_running_loop().create_task(
            self._run(handle, callback),
            name=f"pymiair-timer-{handle.timer_id}",
        )
        self._timers[handle.timer_id] = handle
        _logger.debug("Scheduled timer %s every %.1fs", handle.name, handle.interval)
        return handle

    def cancel_timer(self, handle: TimerHandle | None) -> None:
        if handle is None:
            return
        self._timers.pop(handle.timer_id, None)
        handle._cancelled = True
        task = handle._task
        if task is not None and not task.done() and not handle._in_tick:
            task.cancel()
        _logger.debug("Cancelled timer %s", handle.name)

    def cancel_all(self) -> None:
        for handle in list(self._timers.values()):
            self.cancel_timer(handle)

    async def _run(self, handle: TimerHandle, callback: TimerCallback) -> None:
        while not handle._cancelled:
            await asyncio.sleep(handle.interval)
            handle._in_tick = True
            try:
                await callback()
            except asyncio.CancelledError:
                raise
            except Exception:
                _logger.exception("Timer %s callback failed", handle.name)
            finally:
                handle._in_tick = False
