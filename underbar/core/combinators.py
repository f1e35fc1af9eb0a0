"""
Function combinators.

Each combinator wraps a function and returns a new callable with different
calling semantics. Wrappers are instances of small classes that own their
state privately (called flag, result cache, throttling window); no state is
shared between wrappers.

delay() and throttle() never touch real time directly: they schedule work
on the Scheduler passed to them.
"""

import functools
import logging
import types
import weakref
from typing import Any, Callable, Dict

from ..metrics import track_delay_scheduled, track_memoize_lookup, track_throttle_call
from ..timing.scheduler import Scheduler
from .canonical import canonical_call_key

logger = logging.getLogger(__name__)


def _check_wait(wait: float) -> None:
    if wait < 0:
        raise ValueError(f"wait must be >= 0, got {wait}")


class _Wrapper:
    """Base for stateful wrappers: copies metadata, binds like a function."""

    def __init__(self, func: Callable[..., Any]) -> None:
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self._func = func
        # updated=() keeps a wrapped wrapper's private state out of self.__dict__
        functools.update_wrapper(self, func, updated=())

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)


class _Once(_Wrapper):

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__(func)
        self._called = False
        self._result: Any = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self._called:
            return self._result
        # Set before calling so reentrant calls see it.
        self._called = True
        try:
            self._result = self._func(*args, **kwargs)
        except BaseException:
            self._called = False
            raise
        return self._result


def once(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Return a function that calls func at most once.

    The first call's result is cached and returned by every later call,
    whatever arguments they pass. A reentrant call made while the first
    call is still running returns None. If the first call raises, nothing
    is cached and the next call tries again.

    Example:
        init = once(connect)
        init("a")  # calls connect("a")
        init("b")  # returns the same result, connect not called
    """
    return _Once(func)


class _Memoized(_Wrapper):

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__(func)
        self._cache: Dict[str, Any] = {}
        # id(receiver) -> cache, for use as a method decorator
        self._instance_caches: Dict[int, Dict[str, Any]] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._lookup(self._cache, self._func, args, kwargs)

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self._call_bound, instance)

    def _call_bound(self, instance: Any, *args: Any, **kwargs: Any) -> Any:
        """Receiver stays out of the key; each receiver gets its own cache."""
        marker = id(instance)
        cache = self._instance_caches.get(marker)
        if cache is None:
            cache = self._instance_caches[marker] = {}
            weakref.finalize(instance, self._instance_caches.pop, marker, None)
        return self._lookup(cache, functools.partial(self._func, instance), args, kwargs)

    @staticmethod
    def _lookup(cache: Dict[str, Any], func: Callable[..., Any], args: Any, kwargs: Dict[str, Any]) -> Any:
        key = canonical_call_key(args, kwargs)
        if key in cache:
            track_memoize_lookup(hit=True)
            return cache[key]

        track_memoize_lookup(hit=False)
        result = func(*args, **kwargs)
        cache[key] = result
        return result


def memoize(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Return a function that caches func's result per distinct argument list.

    Argument lists are keyed by their canonical JSON serialization, so
    arguments must be plain JSON-representable values (numbers, strings,
    bools, None, and lists/tuples/dicts of them, without cycles). Lists and
    tuples with the same items share a key; 1, 1.0, "1" and True do not.
    Dict arguments must have str keys.

    As a method decorator the receiver is not part of the key: each
    instance gets its own cache, dropped when the instance is collected
    (the instance must support weak references).

    Raises (from the wrapper):
        UnserializableArgumentError: If an argument has no canonical form
    """
    return _Memoized(func)


def delay(func: Callable[..., Any], wait: float, *args: Any, scheduler: Scheduler, **kwargs: Any) -> None:
    """
    Call func(*args, **kwargs) once, at least wait ms from now.

    Returns immediately. func runs when scheduler is driven past the
    deadline; its return value is discarded and its exceptions surface
    there. Calls with equal deadlines run in the order they were delayed.

    Example:
        delay(notify, 500, "a", "b", scheduler=scheduler)
    """
    _check_wait(wait)
    scheduler.call_later(wait, func, *args, **kwargs)
    track_delay_scheduled()


class _Throttled(_Wrapper):

    def __init__(self, func: Callable[..., Any], wait: float, scheduler: Scheduler) -> None:
        super().__init__(func)
        self._wait = wait
        self._scheduler = scheduler
        self._in_window = False
        self._result: Any = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self._in_window:
            track_throttle_call(invoked=False)
            logger.debug(f"Throttled call to {getattr(self, '__name__', self._func)!r} suppressed")
            return self._result

        # The window opens even if func raises.
        self._in_window = True
        self._scheduler.call_later(self._wait, self._close_window)
        track_throttle_call(invoked=True)
        self._result = self._func(*args, **kwargs)
        return self._result

    def _close_window(self) -> None:
        self._in_window = False


def throttle(func: Callable[..., Any], wait: float, *, scheduler: Scheduler) -> Callable[..., Any]:
    """
    Return a function that calls func at most once per wait ms.

    Leading edge: a call outside a window invokes func immediately and
    opens a window that closes wait ms later on scheduler. Calls inside the
    window are dropped, not queued, and return the latest result; they do
    not extend the window.
    """
    _check_wait(wait)
    return _Throttled(func, wait, scheduler)
