"""
Logical clock implementation.

Provides a millisecond time source with no system time dependency.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LogicalClock:
    """
    Logical time source, in milliseconds.

    Immutable: advance() returns a new clock. VirtualScheduler swaps its
    clock on every step so that deferred calls see their own deadline
    as "now" while they run.
    """
    current: float = 0

    def now(self) -> float:
        """Get current time without advancing."""
        return self.current

    def advance(self, step: float) -> "LogicalClock":
        """
        Advance clock by step and return new clock instance.

        Raises:
            ValueError: If step is negative (time never runs backwards)
        """
        if step < 0:
            raise ValueError(f"Cannot advance clock by negative step: {step}")
        return LogicalClock(self.current + step)

    def at(self, instant: float) -> "LogicalClock":
        """Return a clock positioned at instant (which must not be in the past)."""
        return self.advance(instant - self.current)
