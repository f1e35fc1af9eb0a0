"""
Iteration primitives.

A collection is either a sequence (list/tuple) or a Mapping. Mappings are
iterated in insertion order and the primitives operate on their values;
each() also hands the key to its iterator.

Everything in transforms.py is built on these.
"""

from collections.abc import Mapping
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .selectors import as_selector

Predicate = Callable[[Any], Any]

# reduce_() default; distinguishes "no initial value" from initial=None
_NO_INITIAL = object()


def _same(a: Any, b: Any) -> bool:
    # 1, 1.0 and True are distinct values
    return type(a) is type(b) and a == b


def _items(collection: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(collection, Mapping):
        return iter(collection.items())
    return enumerate(collection)


def _values(collection: Any) -> Iterator[Any]:
    if isinstance(collection, Mapping):
        return iter(collection.values())
    return iter(collection)


def identity(value: Any) -> Any:
    """Return value unchanged. Default iterator/predicate everywhere."""
    return value


def negate(predicate: Predicate) -> Predicate:
    """Predicate that is true exactly where predicate is false."""
    def negated(value: Any) -> bool:
        return not predicate(value)
    return negated


def first(array: Any, n: Optional[int] = None) -> Any:
    """
    First element, or a list of the first n elements.

    Returns None (absent) for an empty array when n is not given.
    """
    if n is None:
        return array[0] if len(array) else None
    return list(array[:n])


def last(array: Any, n: Optional[int] = None) -> Any:
    """
    Last element, or a list of the last n elements.

    Returns None (absent) for an empty array when n is not given.
    """
    if n is None:
        return array[-1] if len(array) else None
    return list(array[max(len(array) - n, 0):])


def each(collection: Any, iterator: Callable[[Any, Any, Any], Any]) -> None:
    """
    Call iterator(value, key, collection) for each element.

    key is the index for sequences and the mapping key for mappings.
    """
    for key, value in _items(collection):
        iterator(value, key, collection)


def index_of(array: Any, target: Any) -> int:
    """Index of the first element of target's type equal to it, or -1."""
    for index, item in enumerate(array):
        if _same(item, target):
            return index
    return -1


def map_(collection: Any, iterator: Callable[[Any], Any]) -> List[Any]:
    return [iterator(value) for value in _values(collection)]


def pluck(collection: Any, key: str) -> List[Any]:
    """Read the field named key from every element."""
    return map_(collection, as_selector(key))


def filter_(collection: Any, predicate: Predicate) -> List[Any]:
    return [value for value in _values(collection) if predicate(value)]


def reject(collection: Any, predicate: Predicate) -> List[Any]:
    """
    Elements for which predicate is false.

    Each element is tested once, by position, so filter_() and reject()
    partition the input even when it holds duplicate values.
    """
    return filter_(collection, negate(predicate))


def reduce_(
    collection: Any,
    iterator: Callable[[Any, Any], Any],
    initial: Any = _NO_INITIAL,
) -> Any:
    """
    Left fold: accumulator = iterator(accumulator, item) for each item.

    If initial is not passed, the first element seeds the accumulator and
    is never passed to iterator; iteration starts at the second element.
    An empty collection without initial yields None and calls nothing.
    Passing initial=None counts as an initial value.

    Example:
        reduce_([1, 2, 3], lambda total, n: total + n, 0)  # 6
        reduce_([5], lambda total, n: total + n * n)      # 5, iterator unused
    """
    values = _values(collection)
    if initial is _NO_INITIAL:
        try:
            accumulator = next(values)
        except StopIteration:
            return None
    else:
        accumulator = initial

    for value in values:
        accumulator = iterator(accumulator, value)
    return accumulator


def contains(collection: Any, target: Any) -> bool:
    """Whether any element has target's type and equals it."""
    return bool(reduce_(
        collection,
        lambda found, item: found or _same(item, target),
        False,
    ))


def every(collection: Any, predicate: Optional[Predicate] = None) -> bool:
    """
    Whether all elements pass predicate (truthiness when omitted).

    Stops at the first failing element; predicate is not called past it.
    """
    test = predicate if predicate is not None else identity
    for value in _values(collection):
        if not test(value):
            return False
    return True


def some(collection: Any, predicate: Optional[Predicate] = None) -> bool:
    """
    Whether any element passes predicate (truthiness when omitted).

    Stops at the first passing element.
    """
    test = predicate if predicate is not None else identity
    return not every(collection, negate(test))
