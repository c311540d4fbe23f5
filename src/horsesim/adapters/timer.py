"""Timer implementations: asyncio-backed and manually driven."""

import asyncio
import inspect
import itertools
import logging
from dataclasses import dataclass

from horsesim.application.ports import TimerCallback, TimerHandle

logger = logging.getLogger(__name__)


async def _invoke(callback: TimerCallback) -> None:
    result = callback()
    if inspect.isawaitable(result):
        await result


class AsyncioTimer:
    """Timer backed by the running asyncio event loop.

    Each handle is served by one task that sleeps, then awaits the
    callback, so firings of the same handle never overlap. Cancelling a
    handle only prevents later firings: a callback that is already
    running, including one that cancels its own handle, runs to
    completion. A callback that raises is logged and the handle keeps
    firing.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._tasks: dict[TimerHandle, asyncio.Task] = {}
        # Handles whose callback is running right now
        self._firing: set[TimerHandle] = set()

    def schedule_repeating(self, callback: TimerCallback, interval_ms: float) -> TimerHandle:
        handle = next(self._ids)
        loop = asyncio.get_running_loop()
        self._tasks[handle] = loop.create_task(self._repeat(handle, callback, interval_ms / 1000))
        return handle

    def cancel_repeating(self, handle: TimerHandle) -> None:
        self._cancel(handle)

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle:
        handle = next(self._ids)
        loop = asyncio.get_running_loop()
        self._tasks[handle] = loop.create_task(self._once(handle, callback, delay_ms / 1000))
        return handle

    def cancel_once(self, handle: TimerHandle) -> None:
        self._cancel(handle)

    def active_count(self) -> int:
        return len(self._tasks)

    def cancel_all(self) -> None:
        for handle in list(self._tasks):
            self._cancel(handle)

    def _cancel(self, handle: TimerHandle) -> None:
        task = self._tasks.pop(handle, None)
        # Mid-firing, the loop sees the handle is gone and exits after the callback
        if task is None or handle in self._firing:
            return
        task.cancel()

    async def _repeat(self, handle: TimerHandle, callback: TimerCallback, interval: float) -> None:
        while handle in self._tasks:
            await asyncio.sleep(interval)
            if handle not in self._tasks:
                break
            self._firing.add(handle)
            try:
                await _invoke(callback)
            except Exception:
                logger.exception("Repeating timer %d callback failed", handle)
            finally:
                self._firing.discard(handle)

    async def _once(self, handle: TimerHandle, callback: TimerCallback, delay: float) -> None:
        await asyncio.sleep(delay)
        if self._tasks.pop(handle, None) is None:
            return
        try:
            await _invoke(callback)
        except Exception:
            logger.exception("One-shot timer %d callback failed", handle)


@dataclass
class _Entry:
    callback: TimerCallback
    interval_ms: float
    repeating: bool


class ManualTimer:
    """Timer whose callbacks only run when ``fire`` is awaited.

    Gives tests and deterministic replays full control over time.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._entries: dict[TimerHandle, _Entry] = {}

    def schedule_repeating(self, callback: TimerCallback, interval_ms: float) -> TimerHandle:
        handle = next(self._ids)
        self._entries[handle] = _Entry(callback, interval_ms, repeating=True)
        return handle

    def cancel_repeating(self, handle: TimerHandle) -> None:
        self._entries.pop(handle, None)

    def schedule_once(self, callback: TimerCallback, delay_ms: float) -> TimerHandle:
        handle = next(self._ids)
        self._entries[handle] = _Entry(callback, delay_ms, repeating=False)
        return handle

    def cancel_once(self, handle: TimerHandle) -> None:
        self._entries.pop(handle, None)

    async def fire(self) -> None:
        """Run every scheduled callback once, in scheduling order.

        Timers scheduled during this call first run on the next one.
        """
        for handle, entry in list(self._entries.items()):
            if handle not in self._entries:
                continue
            if not entry.repeating:
                del self._entries[handle]
            await _invoke(entry.callback)

    async def fire_many(self, count: int) -> None:
        for _ in range(count):
            await self.fire()

    def active_count(self) -> int:
        return len(self._entries)

    def is_active(self, handle: TimerHandle) -> bool:
        return handle in self._entries

    def interval_of(self, handle: TimerHandle) -> float:
        return self._entries[handle].interval_ms

    def reset(self) -> None:
        self._entries.clear()
        self._ids = itertools.count(1)
