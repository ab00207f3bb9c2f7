"""Delayed callbacks for storefront notices and resets."""

import asyncio
from typing import Callable, Optional


class Timers:
    """Schedules callbacks on the running event loop and tracks their handles."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handles: set[asyncio.TimerHandle] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle: Optional[asyncio.TimerHandle] = None

        def run() -> None:
            self._handles.discard(handle)
            callback()

        handle = loop.call_later(delay, run)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()
            self._handles.discard(handle)

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            handle.cancel()
        self._handles.clear()

    @property
    def pending(self) -> int:
        return len(self._handles)
