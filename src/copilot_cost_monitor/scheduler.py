import asyncio
from typing import Awaitable, Callable

import structlog

from copilot_cost_monitor.clock import Clock, SystemClock
from copilot_cost_monitor.config import clamp_interval

logger = structlog.get_logger()


class PollScheduler:
    """
    PollScheduler owns the polling timer. Ticks only refresh while
    the host has focus; skipped ticks are not queued. Regaining
    focus refreshes once the clamped interval has elapsed since the
    last successful update.

    Refreshes run as their own tasks so a slow fetch never holds
    back the timer.
    """

    def __init__(
        self,
        refresh: "Callable[[str], Awaitable[object]]",
        has_focus: "Callable[[], bool]",
        last_update: "Callable[[], float | None]",
        interval_seconds: "float",
        clock: "Clock | None" = None,
        sleep: "Callable[[float], Awaitable[None]]" = asyncio.sleep,
    ) -> "None":
        self._refresh = refresh
        self._has_focus = has_focus
        self._last_update = last_update
        self._interval = clamp_interval(interval_seconds)
        self._clock: "Clock" = clock or SystemClock()
        self._sleep = sleep
        self._timer: "asyncio.Task[None] | None" = None
        self._in_flight: "set[asyncio.Task[object]]" = set()

    @property
    def interval(self) -> "float":
        return self._interval

    @property
    def running(self) -> "bool":
        return self._timer is not None and not self._timer.done()

    def start(self) -> "None":
        if self.running:
            return
        self._timer = asyncio.create_task(self._run(self._interval))
        logger.debug("poll_timer_started", interval=self._interval)

    def stop(self) -> "None":
        """
        releases the timer. In-flight refreshes are left to finish.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def reconfigure(self, interval_seconds: "float") -> "None":
        """
        recreates the timer with a new clamped interval. Time
        already elapsed on the old timer is discarded.
        """
        was_running = self.running
        self.stop()
        self._interval = clamp_interval(interval_seconds)
        logger.info("poll_interval_changed", interval=self._interval)
        if was_running:
            self.start()

    def tick(self) -> "asyncio.Task[object] | None":
        if not self._has_focus():
            logger.debug("poll_skipped_unfocused")
            return None
        return self._spawn("timer")

    def focus_regained(self) -> "asyncio.Task[object] | None":
        last = self._last_update()
        if last is not None:
            elapsed = self._clock.monotonic() - last
            if elapsed <= self._interval:
                return None
            logger.info("focus_refresh", elapsed=round(elapsed, 3))
        return self._spawn("focus")

    def _spawn(self, trigger: "str") -> "asyncio.Task[object]":
        task = asyncio.create_task(self._guarded(trigger))
        # hold a reference until done, the loop only keeps weak ones
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _guarded(self, trigger: "str") -> "object":
        try:
            return await self._refresh(trigger)
        except Exception:
            logger.exception("scheduled_refresh_error", trigger=trigger)
            return None

    async def _run(self, interval: "float") -> "None":
        while True:
            await self._sleep(interval)
            self.tick()
