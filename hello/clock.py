"""
Wall clock for the home view.

ClockTicker runs a daemon thread that reports the current local time
once per interval. Formatting helpers render times the way the home
view displays them.
"""

import threading
from datetime import datetime
from typing import Callable, Optional

from hello.config import CLOCK_TICK_INTERVAL
from hello.logger import logger


class ClockTicker:
    """Invoke a callback with datetime.now() every `interval` seconds."""

    def __init__(
        self,
        on_tick: Callable[[datetime], None],
        interval: float = CLOCK_TICK_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError("Clock interval must be positive")

        self.on_tick = on_tick
        self.interval = interval

        self.stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None

    def start(self):
        """Start ticker thread."""
        if self.is_running():
            logger.warning("Clock ticker already running")
            return

        self.stop_event.clear()
        self.thread = threading.Thread(
            target=self._tick_loop,
            name="ClockTicker",
            daemon=True
        )
        self.thread.start()
        logger.info(f"Clock ticker started (interval={self.interval}s)")

    def stop(self):
        """Stop ticker thread."""
        self.stop_event.set()

        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=2.0)
            if self.thread.is_alive():
                logger.warning("Clock ticker thread did not stop gracefully")

        logger.info("Clock ticker stopped")

    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def _tick_loop(self):
        while not self.stop_event.is_set():
            try:
                self.on_tick(datetime.now())
            except Exception as e:
                logger.error(f"Error in clock tick callback: {e}", exc_info=True)

            self.stop_event.wait(self.interval)


def _clock_12h(dt: datetime) -> tuple[int, str]:
    return (dt.hour % 12 or 12), ("AM" if dt.hour < 12 else "PM")


def format_time(dt: datetime) -> str:
    """Medium time style, e.g. "3:04:05 PM"."""
    hour, meridiem = _clock_12h(dt)
    return f"{hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def format_date_time(dt: datetime) -> str:
    """Medium date with short time, e.g. "Oct 19, 2026 at 3:04 PM"."""
    hour, meridiem = _clock_12h(dt)
    month = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
             "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")[dt.month - 1]
    return f"{month} {dt.day}, {dt.year} at {hour}:{dt.minute:02d} {meridiem}"
