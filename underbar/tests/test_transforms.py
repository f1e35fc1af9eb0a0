"""
Tests for structural transforms.
"""

import random

import pytest

from underbar.core.errors import CycleError
from underbar.core.transforms import (
    difference,
    flatten,
    intersection,
    invoke,
    shuffle,
    sort_by,
    uniq,
    zip_,
)


def test_uniq_sorted_collapses_consecutive_runs():
    """Sorted mode drops only runs of equal keys."""
    assert uniq([1, 1, 2, 2, 3], True, lambda x: x) == [1, 2, 3]


def test_uniq_sorted_keeps_non_adjacent_repeats():
    """Sorted mode trusts the caller's grouping."""
    assert uniq([1, 1, 2, 1], True) == [1, 2, 1]


def test_uniq_sorted_uses_key():
    """Runs are detected on key(element)."""
    words = ["apple", "avocado", "banana", "blueberry", "cherry"]
    assert uniq(words, True, lambda w: w[0]) == ["apple", "banana", "cherry"]


def test_uniq_sorted_first_element_kept_even_if_key_is_none():
    """The first element is always kept."""
    assert uniq([None, None, 1], True) == [None, 1]


def test_uniq_unsorted_keeps_first_occurrences():
    """Duplicates anywhere collapse to their first occurrence."""
    assert uniq([3, 1, 1, 2]) == [3, 1, 2]


def test_uniq_unhashable_elements():
    """Lists and dicts are compared by equality."""
    assert uniq([[1], [2], [1], {"a": 1}, {"a": 1}]) == [[1], [2], {"a": 1}]


def test_uniq_does_not_mutate_input():
    """A new list is returned."""
    data = [1, 1, 2]
    uniq(data)
    assert data == [1, 1, 2]


def test_sort_by_callable():
    """Ascending order of criterion(element)."""
    assert sort_by(["ccc", "a", "bb"], len) == ["a", "bb", "ccc"]


def test_sort_by_field_name():
    """A string criterion reads that field."""
    people = [{"name": "b", "age": 30}, {"name": "a", "age": 20}]
    assert [p["name"] for p in sort_by(people, "age")] == ["a", "b"]


def test_sort_by_is_stable():
    """Equal keys keep their input order."""
    items = [{"k": 1, "id": "a"}, {"k": 0, "id": "z"}, {"k": 1, "id": "b"}]
    assert [i["id"] for i in sort_by(items, "k")] == ["z", "a", "b"]


def test_sort_by_does_not_mutate_input():
    """The input list order is untouched."""
    data = [3, 1, 2]
    assert sort_by(data, lambda x: x) == [1, 2, 3]
    assert data == [3, 1, 2]


def test_sort_by_rejects_bad_criterion():
    """Neither a name nor a callable."""
    with pytest.raises(TypeError):
        sort_by([1, 2], 42)


def test_zip_pads_shorter_inputs():
    """Length follows the longest input; gaps get the absent marker."""
    assert zip_(["a", "b", "c", "d"], [1, 2, 3]) == [
        ("a", 1),
        ("b", 2),
        ("c", 3),
        ("d", None),
    ]


def test_zip_custom_fillvalue_and_three_inputs():
    """Tuple width follows the number of inputs."""
    assert zip_([1], [2, 3], [4], fillvalue="-") == [(1, 2, 4), ("-", 3, "-")]


def test_zip_no_inputs():
    """Nothing to zip."""
    assert zip_() == []


def test_flatten_nested():
    """Arbitrary depth collapses depth-first, left to right."""
    assert flatten([1, [2], [3, [[4]]]]) == [1, 2, 3, 4]


def test_flatten_mixed_tuples_and_leaves():
    """Strings and mappings are leaves; tuples nest."""
    assert flatten([("a", ["bc"]), {"k": 1}, []]) == ["a", "bc", {"k": 1}]


def test_flatten_very_deep_structure():
    """No recursion limit on depth."""
    nested = [0]
    for i in range(1, 5000):
        nested = [nested, i]

    assert flatten(nested) == list(range(5000))


def test_flatten_shared_substructure_is_not_a_cycle():
    """The same list appearing twice side by side is fine."""
    shared = [1, 2]
    assert flatten([shared, shared]) == [1, 2, 1, 2]


def test_flatten_cycle_raises():
    """A list that contains itself is rejected."""
    loop = [1]
    loop.append([2, loop])

    with pytest.raises(CycleError):
        flatten(loop)


def test_intersection_follows_first_array():
    """Order and duplicate count come from the first array."""
    assert intersection([1, 2, 2, 3], [2, 2, 3, 4]) == [2, 2, 3]


def test_intersection_many_arrays():
    """An element must be present in every array."""
    assert intersection([1, 2, 3, 4], [2, 3, 4], [4, 3], [3, 4, 5]) == [3, 4]


def test_intersection_edge_cases():
    """No arrays or a single array."""
    assert intersection() == []
    assert intersection([1, 1, 2]) == [1, 1, 2]


def test_difference():
    """Elements of the first array found in no other array."""
    assert difference([1, 2, 3, 4], [2, 4]) == [1, 3]


def test_difference_keeps_duplicates_and_input():
    """Duplicates survive; the input is not modified."""
    data = [1, 1, 2, 3, 3]
    assert difference(data, [2], [5]) == [1, 1, 3, 3]
    assert data == [1, 1, 2, 3, 3]


def test_invoke_method_name():
    """Named methods are called on each element with args."""
    assert invoke(["a-b", "c-d"], "split", ["-"]) == [["a", "b"], ["c", "d"]]


def test_invoke_function_receives_element_first():
    """A function gets the element as receiver."""
    assert invoke([1, 2], lambda x, k: x * k, [10]) == [10, 20]


def test_invoke_method_without_args():
    """args defaults to no arguments."""
    data = [[3, 1], [2, 0]]
    invoke(data, "sort")
    assert data == [[1, 3], [0, 2]]


def test_shuffle_is_a_permutation():
    """Every element appears exactly once; input untouched."""
    data = list(range(50))
    result = shuffle(data)

    assert sorted(result) == data
    assert data == list(range(50))
    assert result is not data


def test_shuffle_is_reproducible_with_seeded_rng():
    """Same seed, same permutation."""
    data = list(range(20))
    assert shuffle(data, random.Random(7)) == shuffle(data, random.Random(7))


def test_shuffle_reaches_every_permutation():
    """All 6 orderings of three elements turn up."""
    rng = random.Random(0)
    seen = {tuple(shuffle([1, 2, 3], rng)) for _ in range(500)}
    assert len(seen) == 6


def test_membership_keeps_numeric_types_apart():
    """1, True and 1.0 are distinct values, as they are for memoize keys."""
    assert uniq([1, True, 1.0, 1]) == [1, True, 1.0]
    assert uniq([1, True, True, 1.0], True) == [1, True, 1.0]
    assert intersection([1, True, 2], [True, 2.0]) == [True]
    assert difference([0, False, 0.0], [False]) == [0, 0.0]
