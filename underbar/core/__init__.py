"""
Core functional primitives.

This module provides:
- Iteration: each, map_, filter_, reject, reduce_, contains, every, some, ...
- Transforms: uniq, flatten, zip_, intersection, difference, sort_by, shuffle, invoke
- Combinators: once, memoize, delay, throttle
- Objects: extend, defaults
- Canonical: Deterministic serialization (memoize keys)
- Clock: Logical time source
"""

from .iteration import (
    identity,
    negate,
    first,
    last,
    each,
    index_of,
    map_,
    pluck,
    filter_,
    reject,
    reduce_,
    contains,
    every,
    some,
)
from .transforms import (
    uniq,
    sort_by,
    zip_,
    flatten,
    intersection,
    difference,
    invoke,
    shuffle,
)
from .combinators import once, memoize, delay, throttle
from .objects import extend, defaults
from .selectors import (
    Selector,
    FieldSelector,
    CallableSelector,
    as_selector,
    Invocation,
    MethodInvocation,
    FunctionInvocation,
    as_invocation,
)
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, canonical_call_key
from .clock import LogicalClock
from .errors import UnderbarError, CycleError, UnserializableArgumentError, SchedulerError

__all__ = [
    "identity",
    "negate",
    "first",
    "last",
    "each",
    "index_of",
    "map_",
    "pluck",
    "filter_",
    "reject",
    "reduce_",
    "contains",
    "every",
    "some",
    "uniq",
    "sort_by",
    "zip_",
    "flatten",
    "intersection",
    "difference",
    "invoke",
    "shuffle",
    "once",
    "memoize",
    "delay",
    "throttle",
    "extend",
    "defaults",
    "Selector",
    "FieldSelector",
    "CallableSelector",
    "as_selector",
    "Invocation",
    "MethodInvocation",
    "FunctionInvocation",
    "as_invocation",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "canonical_call_key",
    "LogicalClock",
    "UnderbarError",
    "CycleError",
    "UnserializableArgumentError",
    "SchedulerError",
]
