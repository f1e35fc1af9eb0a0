"""
Tests for canonical serialization.

Critical: memoize keys depend on these guarantees.
"""

import pytest

from underbar.core.canonical import (
    canonical_call_key,
    canonical_json_bytes,
    canonical_json_str,
    canonicalize,
)
from underbar.core.errors import UnserializableArgumentError


def test_canonicalize_dict_key_order():
    """Dict key order must not affect canonical output."""
    d1 = {"z": 1, "a": 2, "m": 3}
    d2 = {"a": 2, "m": 3, "z": 1}

    assert canonicalize(d1) == canonicalize(d2)
    assert list(canonicalize(d1).keys()) == ["a", "m", "z"]


def test_canonicalize_tuples_become_lists():
    """Tuples and lists share a canonical form."""
    assert canonicalize((1, (2, 3))) == [1, [2, 3]]


def test_canonical_json_str_compact_and_sorted():
    """Keys sorted, no whitespace."""
    assert canonical_json_str({"b": 2, "a": 1}) == '{"a":1,"b":2}'


def test_canonical_json_bytes_matches_str():
    """Bytes are the UTF-8 encoding of the string form."""
    obj = {"key": "日本語"}
    assert canonical_json_bytes(obj) == canonical_json_str(obj).encode("utf-8")
    assert "日本語" in canonical_json_str(obj)


def test_call_key_distinguishes_values_types_and_count():
    """Different argument lists never collide."""
    keys = {
        canonical_call_key((1, 2), {}),
        canonical_call_key((1, 3), {}),
        canonical_call_key((1,), {}),
        canonical_call_key((1, 2, None), {}),
        canonical_call_key(("1", 2), {}),
        canonical_call_key((True, 2), {}),
        canonical_call_key((1.5, 2), {}),
        canonical_call_key((1,), {"b": 2}),
    }
    assert len(keys) == 8


def test_call_key_ignores_kwarg_order():
    """Keyword order does not matter."""
    assert canonical_call_key((), {"a": 1, "b": 2}) == canonical_call_key((), {"b": 2, "a": 1})


def test_cyclic_value_is_rejected():
    """Cycles have no canonical form."""
    loop = []
    loop.append(loop)

    with pytest.raises(UnserializableArgumentError):
        canonical_json_str(loop)


def test_non_json_value_is_rejected():
    """Sets and arbitrary objects are not serializable."""
    with pytest.raises(UnserializableArgumentError):
        canonical_json_str({1, 2})
    with pytest.raises(TypeError):
        canonical_json_str(object())


def test_repeated_reference_is_not_a_cycle():
    """The same list twice, side by side, serializes fine."""
    shared = [1]
    assert canonical_json_str([shared, shared]) == "[[1],[1]]"


def test_non_str_dict_keys_are_rejected():
    """json.dumps would turn 1 and True into "1" and "true"; refuse instead."""
    with pytest.raises(UnserializableArgumentError):
        canonical_json_str({1: "a"})
    with pytest.raises(UnserializableArgumentError):
        canonical_json_str({True: 1})
    with pytest.raises(UnserializableArgumentError):
        canonical_call_key(({"ok": {None: 1}},), {})
    assert canonical_json_str({"1": "a"}) == '{"1":"a"}'
