"""
underbar

Functional utilities for sequences and mappings, plus function combinators
(once, memoize, delay, throttle) driven by an explicit logical scheduler.
"""

__version__ = "0.1.0"

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .timing import Scheduler, ScheduledCall, VirtualScheduler, MonotonicScheduler

__all__ = list(_core_all) + [
    "Scheduler",
    "ScheduledCall",
    "VirtualScheduler",
    "MonotonicScheduler",
]
