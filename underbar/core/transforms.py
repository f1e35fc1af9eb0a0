"""
Structural transforms built on the iteration primitives.

Membership is strict value equality: same type and ==, never object
identity, so 1, 1.0 and True are three distinct values. Hashable values
are tracked in a set keyed by (type, value); unhashable ones fall back to a
linear scan. Only the outer type is checked: [1] and [True] are equal.
"""

import random
from collections.abc import Hashable
from itertools import zip_longest
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import CycleError
from .iteration import _same, _values, every, filter_, identity, map_
from .selectors import as_invocation, as_selector


class _Seen:
    """Membership set that tolerates unhashable members."""

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._hashable = set()
        self._unhashable: List[Any] = []
        for value in values:
            self.add(value)

    def add(self, value: Any) -> None:
        if isinstance(value, Hashable):
            try:
                self._hashable.add((type(value), value))
                return
            except TypeError:
                # e.g. a tuple holding a list
                pass
        self._unhashable.append(value)

    def __contains__(self, value: Any) -> bool:
        if isinstance(value, Hashable):
            try:
                if (type(value), value) in self._hashable:
                    return True
            except TypeError:
                pass
        return any(_same(value, member) for member in self._unhashable)


def uniq(
    array: Sequence[Any],
    is_sorted: bool = False,
    key: Optional[Callable[[Any], Any]] = None,
) -> List[Any]:
    """
    Duplicate-free copy of array, keeping first occurrences in order.

    With is_sorted=True the input is assumed grouped by key(element) and
    only consecutive runs of equal keys collapse (single linear pass).
    """
    key_of = key if key is not None else identity
    result = []

    if is_sorted:
        previous = None
        for index, item in enumerate(array):
            current = key_of(item)
            if index == 0 or not _same(current, previous):
                result.append(item)
            previous = current
        return result

    seen = _Seen()
    for item in array:
        current = key_of(item)
        if current not in seen:
            seen.add(current)
            result.append(item)
    return result


def sort_by(collection: Any, criterion: Any) -> List[Any]:
    """
    Stable ascending sort by criterion.

    criterion is a callable applied to each element or the name of a
    field to read from it. The input is not modified.

    Example:
        sort_by(people, "age")
        sort_by(words, len)
    """
    return sorted(_values(collection), key=as_selector(criterion))


def zip_(*arrays: Sequence[Any], fillvalue: Any = None) -> List[Tuple[Any, ...]]:
    """
    Group elements sharing an index into tuples.

    The result is as long as the longest input; shorter inputs are padded
    with fillvalue (None, the absent marker, by default).

    Example:
        zip_(["a", "b", "c", "d"], [1, 2, 3])
        # [("a", 1), ("b", 2), ("c", 3), ("d", None)]
    """
    return list(zip_longest(*arrays, fillvalue=fillvalue))


def _is_nested(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def flatten(nested: Sequence[Any]) -> List[Any]:
    """
    Flatten lists/tuples nested to any depth, depth-first, left to right.

    Strings, bytes and mappings are leaves. An explicit stack replaces
    recursion, so depth is bounded only by memory.

    Raises:
        CycleError: If a container (directly or indirectly) contains itself
    """
    result = []
    stack: List[Tuple[int, Iterator[Any]]] = [(id(nested), iter(nested))]
    active = {id(nested)}

    while stack:
        marker, items = stack[-1]
        for item in items:
            if _is_nested(item):
                if id(item) in active:
                    raise CycleError(f"Cannot flatten a {type(item).__name__} that contains itself")
                active.add(id(item))
                stack.append((id(item), iter(item)))
                break
            result.append(item)
        else:
            stack.pop()
            active.discard(marker)

    return result


def intersection(*arrays: Sequence[Any]) -> List[Any]:
    """
    Elements of the first array present in every other array.

    Order and duplicate occurrences follow the first array.
    """
    if not arrays:
        return []
    head, rest = arrays[0], [_Seen(other) for other in arrays[1:]]
    return filter_(head, lambda item: every(rest, lambda other: item in other))


def difference(array: Sequence[Any], *others: Sequence[Any]) -> List[Any]:
    """
    Elements of array found in none of the others.

    Order and duplicates of array are preserved; array is not modified.
    """
    excluded = _Seen(item for other in others for item in other)
    return filter_(array, lambda item: item not in excluded)


def invoke(collection: Any, method: Any, args: Sequence[Any] = ()) -> List[Any]:
    """
    Call method on every element and collect the results.

    method is either the name of a method each element has, or a function
    called as method(element, *args).
    """
    invocation = as_invocation(method)
    return map_(collection, lambda item: invocation.invoke(item, args))


def shuffle(array: Sequence[Any], rng: Optional[random.Random] = None) -> List[Any]:
    """
    Uniformly random permutation of array, as a new list.

    Pass a seeded random.Random as rng for reproducible output.
    """
    shuffled = list(array)
    (rng or random).shuffle(shuffled)
    return shuffled
