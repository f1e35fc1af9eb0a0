"""
Helpers for merging mappings into a target, in place.
"""

from typing import Any, Mapping, MutableMapping


def extend(target: MutableMapping[str, Any], *sources: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Copy every key of each source into target; later sources win.

    Example:
        extend({"a": 1}, {"b": 2}, {"a": 3})  # {"a": 3, "b": 2}
    """
    for source in sources:
        for key in source:
            target[key] = source[key]
    return target


def defaults(target: MutableMapping[str, Any], *sources: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Like extend(), but never overwrite a key target already has.

    Keys added by an earlier source count as present, so the first
    source to supply a key wins.
    """
    for source in sources:
        for key in source:
            if key not in target:
                target[key] = source[key]
    return target
