"""Timer sources that drive the controller's tick callback.

At most one tick runs at a time: a scheduler is stopped before it is started
again, and callbacks never overlap because everything runs on one thread.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

TickCallback = Callable[[], None]


class Scheduler(Protocol):
    """Periodic timer interface consumed by ``SimulationController``."""

    @property
    def running(self) -> bool: ...

    def start(self, callback: TickCallback, interval_s: float) -> None: ...

    def stop(self) -> None: ...


class ManualScheduler:
    """Scheduler that fires only when ``fire()`` is called.

    Used for headless batch runs and tests, where ticks are driven as fast as
    the caller loops instead of on wall-clock time.
    """

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self.interval_s: float | None = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback, interval_s: float) -> None:
        self.stop()
        self._callback = callback
        self.interval_s = interval_s

    def stop(self) -> None:
        self._callback = None

    def fire(self) -> bool:
        """Invoke the callback once; returns False when not running."""
        if self._callback is None:
            return False
        self._callback()
        return True


class AsyncioScheduler:
    """Re-arming ``loop.call_later`` timer on an asyncio event loop.

    The next firing is armed before the callback runs, so a callback that
    stops the scheduler (pause, completion) cancels it. Without an explicit
    ``loop``, ``start()`` must be called from a running event loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, callback: TickCallback, interval_s: float) -> None:
        self.stop()
        loop = self._loop if self._loop is not None else self._running_loop()

        def _fire() -> None:
            self._handle = loop.call_later(interval_s, _fire)
            callback()

        self._handle = loop.call_later(interval_s, _fire)

    @staticmethod
    def _running_loop() -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RuntimeError(
                "AsyncioScheduler.start() needs a running event loop; "
                "pass loop= or use ManualScheduler outside asyncio"
            ) from exc

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
