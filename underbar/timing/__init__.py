"""
Deferred execution on an explicit scheduler.

This module provides:
- Scheduler: Abstract deferred-call queue
- ScheduledCall: Handle for one queued call
- VirtualScheduler: Logical-time scheduler (tests, simulations)
- MonotonicScheduler: Wall-clock scheduler for a single-threaded loop
"""

from .scheduler import Scheduler, ScheduledCall
from .virtual import VirtualScheduler
from .monotonic import MonotonicScheduler

__all__ = [
    "Scheduler",
    "ScheduledCall",
    "VirtualScheduler",
    "MonotonicScheduler",
]
