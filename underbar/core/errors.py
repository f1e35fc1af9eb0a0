"""
Exception types for underbar.
"""


class UnderbarError(Exception):
    """Base class for all library errors."""
    pass


class CycleError(UnderbarError, ValueError):
    """Raised when a nested structure contains itself."""
    pass


class UnserializableArgumentError(UnderbarError, TypeError):
    """Raised when a value has no canonical (deterministic) serialization."""
    pass


class SchedulerError(UnderbarError, RuntimeError):
    """Raised when a scheduler cannot drain its queue within the given limit."""
    pass
