"""
Virtual scheduler: deferred calls on logical time.

Time only moves when advance() or run_until_idle() is called, which makes
delay()/throttle() behavior exactly reproducible in tests and simulations.
"""

from typing import Optional

from ..core.clock import LogicalClock
from ..core.errors import SchedulerError
from .scheduler import ScheduledCall, Scheduler


class VirtualScheduler(Scheduler):
    """
    Scheduler driven by a LogicalClock.

    Usage:
        scheduler = VirtualScheduler()
        delay(print, 100, "hello", scheduler=scheduler)
        scheduler.advance(100)  # prints "hello"
    """

    def __init__(self, clock: Optional[LogicalClock] = None) -> None:
        super().__init__()
        self._clock = clock or LogicalClock()

    @property
    def clock(self) -> LogicalClock:
        return self._clock

    def now(self) -> float:
        return self._clock.now()

    def advance(self, ms: float) -> int:
        """
        Move time forward by ms, running every call that falls due.

        Each call runs with the clock at its own deadline, so calls it
        schedules are timed from there. Afterwards the clock rests at
        start + ms, also when a call raises; calls still due at that point
        stay queued and run late the next time the scheduler is driven.

        Returns:
            Number of calls run

        Raises:
            ValueError: If ms is negative
        """
        if ms < 0:
            raise ValueError(f"Cannot advance by negative time: {ms}")

        target = self.now() + ms
        count = 0
        try:
            while self._run_next(target):
                count += 1
        finally:
            self._clock = self._clock.at(target)
        return count

    def run_until_idle(self, limit: Optional[int] = None) -> int:
        """
        Jump from deadline to deadline until the queue is empty.

        Args:
            limit: Maximum number of calls to run (None = unbounded)

        Returns:
            Number of calls run

        Raises:
            SchedulerError: If limit calls ran and work is still pending
        """
        count = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None:
                return count
            if limit is not None and count >= limit:
                raise SchedulerError(f"Queue not idle after {limit} calls")
            self._run_next(deadline)
            count += 1

    def _before_run(self, call: ScheduledCall) -> None:
        if call.deadline > self.now():
            self._clock = self._clock.at(call.deadline)
