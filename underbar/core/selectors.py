"""
Selectors: tagged variants for "look something up by name" vs "call a function".

sort_by() and pluck() read values through a Selector; invoke() calls
through an Invocation. A plain str or callable is resolved once, up front,
with as_selector() / as_invocation().
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union


def read_field(item: Any, name: str) -> Any:
    """Mapping items are indexed; any other object is read by attribute."""
    if isinstance(item, Mapping):
        return item[name]
    return getattr(item, name)


class Selector(ABC):
    """Extracts one value from an element."""

    @abstractmethod
    def select(self, item: Any) -> Any:
        ...

    def __call__(self, item: Any) -> Any:
        return self.select(item)


@dataclass(frozen=True)
class FieldSelector(Selector):
    name: str

    def select(self, item: Any) -> Any:
        return read_field(item, self.name)


@dataclass(frozen=True)
class CallableSelector(Selector):
    func: Callable[[Any], Any]

    def select(self, item: Any) -> Any:
        return self.func(item)


def as_selector(criterion: Union[Selector, str, Callable[[Any], Any]]) -> Selector:
    """
    Resolve a sort/pluck criterion.

    Raises:
        TypeError: If criterion is neither a field name nor callable
    """
    if isinstance(criterion, Selector):
        return criterion
    if isinstance(criterion, str):
        return FieldSelector(criterion)
    if callable(criterion):
        return CallableSelector(criterion)
    raise TypeError(f"Expected a field name or callable, got {type(criterion).__name__}")


class Invocation(ABC):
    """Calls something on an element with extra positional arguments."""

    @abstractmethod
    def invoke(self, item: Any, args: Sequence[Any]) -> Any:
        ...


@dataclass(frozen=True)
class MethodInvocation(Invocation):
    name: str

    def invoke(self, item: Any, args: Sequence[Any]) -> Any:
        return getattr(item, self.name)(*args)


@dataclass(frozen=True)
class FunctionInvocation(Invocation):
    # element is passed first, as the receiver
    func: Callable[..., Any]

    def invoke(self, item: Any, args: Sequence[Any]) -> Any:
        return self.func(item, *args)


def as_invocation(method: Union[Invocation, str, Callable[..., Any]]) -> Invocation:
    """
    Resolve invoke()'s method argument.

    Raises:
        TypeError: If method is neither a method name nor callable
    """
    if isinstance(method, Invocation):
        return method
    if isinstance(method, str):
        return MethodInvocation(method)
    if callable(method):
        return FunctionInvocation(method)
    raise TypeError(f"Expected a method name or callable, got {type(method).__name__}")
