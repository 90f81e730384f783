"""
Clock Capability

Provides the current time and a cancellable recurring callback. Sessions use
it for the per-second elapsed counter; tests swap in ManualClock.
"""

import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from .game_logger import game_logger


class TimerHandle:
    """Cancels a recurring callback registered with a clock."""

    def __init__(self, cancel: Callable[[], None]):
        self._cancel = cancel
        self.cancelled = False

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            self._cancel()


class SystemClock:
    """Wall-clock time with ticks delivered on a daemon thread."""

    def now(self) -> datetime:
        return datetime.now()

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        stop = threading.Event()

        def worker():
            while not stop.wait(interval):
                try:
                    callback()
                except Exception as e:
                    game_logger.logger.error(f"Error in clock tick callback: {e}")

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return TimerHandle(stop.set)


class ManualClock:
    """Fake clock advanced explicitly; callbacks fire synchronously."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2025, 1, 1, 12, 0, 0)
        self._timers: List[dict] = []

    def now(self) -> datetime:
        return self.current

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        timer = {'interval': interval, 'callback': callback, 'waited': 0.0}
        self._timers.append(timer)
        return TimerHandle(lambda: self._timers.remove(timer))

    @property
    def active_timers(self) -> int:
        return len(self._timers)

    def advance(self, seconds: int = 1):
        """Move time forward one second at a time, firing due callbacks."""
        for _ in range(int(seconds)):
            self.current += timedelta(seconds=1)
            for timer in list(self._timers):
                if timer not in self._timers:
                    continue
                timer['waited'] += 1
                if timer['waited'] >= timer['interval']:
                    timer['waited'] = 0.0
                    timer['callback']()
