"""
Scheduler abstract interface.

A scheduler owns a queue of deferred calls ordered by (deadline, seq) and
runs them when its owner drives it. Nothing runs on a background thread.
"""

import heapq
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..metrics import track_deferred_failure

logger = logging.getLogger(__name__)


@dataclass
class ScheduledCall:
    """
    Handle for one deferred call.

    Fields:
        deadline: Scheduler time (ms) at or after which the call runs
        seq: Scheduling order; breaks ties between equal deadlines (FIFO)
        callback: Function to call
        args/kwargs: Arguments for callback
        cancelled: Set by cancel(); cancelled calls are skipped
    """
    deadline: float
    seq: int
    callback: Callable[..., Any]
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> Any:
        return self.callback(*self.args, **self.kwargs)


class Scheduler(ABC):
    """
    Single-threaded deferred-call queue.

    All implementations guarantee:
    - A call never runs before its deadline
    - Earlier deadlines run first; equal deadlines run in scheduling order
    - Each call runs at most once
    """

    def __init__(self) -> None:
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = 0

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in milliseconds."""
        ...

    def call_later(self, wait: float, callback: Callable[..., Any], *args: Any, **kwargs: Any) -> ScheduledCall:
        """
        Schedule callback(*args, **kwargs) at least wait ms from now.

        Raises:
            ValueError: If wait is negative
        """
        if wait < 0:
            raise ValueError(f"wait must be >= 0, got {wait}")

        call = ScheduledCall(
            deadline=self.now() + wait,
            seq=self._seq,
            callback=callback,
            args=args,
            kwargs=kwargs,
        )
        self._seq += 1
        heapq.heappush(self._queue, (call.deadline, call.seq, call))
        logger.debug(f"Scheduled {getattr(callback, '__name__', callback)!r} at t={call.deadline}")
        return call

    def pending(self) -> int:
        """Number of calls still waiting to run."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def next_deadline(self) -> Optional[float]:
        """Deadline of the next call to run, or None when idle."""
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def run_pending(self) -> int:
        """
        Run every call whose deadline has been reached.

        Calls scheduled by callbacks run too if they are already due.

        Returns:
            Number of calls run
        """
        count = 0
        while self._run_next(self.now()):
            count += 1
        return count

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)

    def _pop_due(self, until: float) -> Optional[ScheduledCall]:
        self._drop_cancelled()
        if not self._queue or self._queue[0][0] > until:
            return None
        return heapq.heappop(self._queue)[2]

    def _run_next(self, until: float) -> bool:
        """
        Pop and run the earliest call due by until.

        The call is off the queue before it runs; if it raises, the error
        propagates to whoever is driving the scheduler.
        """
        call = self._pop_due(until)
        if call is None:
            return False
        self._before_run(call)
        try:
            call.run()
        except Exception:
            track_deferred_failure()
            logger.debug(f"Deferred call seq={call.seq} raised", exc_info=True)
            raise
        return True

    def _before_run(self, call: ScheduledCall) -> None:
        """Hook for subclasses that move their clock to the call's deadline."""
        pass
