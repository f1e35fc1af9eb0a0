"""
Monotonic scheduler: deferred calls on wall-clock (monotonic) time.

Single-threaded. The owner's loop calls run_pending() periodically, or
hands control to run_until_idle(), which sleeps between deadlines.
"""

import time
from typing import Callable, Optional

from .scheduler import Scheduler


class MonotonicScheduler(Scheduler):
    """
    Scheduler driven by time.monotonic(), in milliseconds.

    Args:
        timer: Returns seconds; defaults to time.monotonic
        sleep: Blocks for the given seconds; defaults to time.sleep
    """

    def __init__(
        self,
        timer: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self._timer = timer
        self._sleep = sleep

    def now(self) -> float:
        return self._timer() * 1000.0

    def run_until_idle(self, limit: Optional[int] = None) -> int:
        """
        Sleep until each deadline and run due calls until the queue is empty.

        Args:
            limit: Stop after this many calls even if work remains

        Returns:
            Number of calls run
        """
        count = 0
        while limit is None or count < limit:
            deadline = self.next_deadline()
            if deadline is None:
                break
            remaining = deadline - self.now()
            if remaining > 0:
                self._sleep(remaining / 1000.0)
            if self._run_next(self.now()):
                count += 1
        return count
