"""
Canonical serialization for deterministic cache keys.

memoize() derives its cache keys here, so two argument lists map to the
same key exactly when their canonical JSON is identical.
"""

import json
from typing import Any, Dict, Optional, Sequence, Set

from .errors import UnserializableArgumentError


def canonicalize(obj: Any, _active: Optional[Set[int]] = None) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys must be str; sorted alphabetically
    - tuples converted to lists
    - recursive normalization

    Raises:
        UnserializableArgumentError: If a container contains itself or a dict key is not a str
    """
    if not isinstance(obj, (dict, list, tuple)):
        return obj

    active = _active if _active is not None else set()
    marker = id(obj)
    if marker in active:
        raise UnserializableArgumentError(
            f"Cyclic {type(obj).__name__} has no canonical form"
        )
    active.add(marker)
    try:
        if isinstance(obj, dict):
            for k in obj:
                if not isinstance(k, str):
                    raise UnserializableArgumentError(
                        f"Dict key {k!r} is a {type(k).__name__}, only str keys have a canonical form"
                    )
            keys = sorted(obj.keys())
            return {k: canonicalize(obj[k], active) for k in keys}
        return [canonicalize(x, active) for x in obj]
    finally:
        active.discard(marker)


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()

    Raises:
        UnserializableArgumentError: If obj (or anything inside it) is not JSON-representable
    """
    canon = canonicalize(obj)
    try:
        return json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise UnserializableArgumentError(str(e)) from e


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes.

    Same guarantees as canonical_json_str but returns UTF-8 bytes.
    """
    return canonical_json_str(obj).encode("utf-8")


def canonical_call_key(args: Sequence[Any], kwargs: Dict[str, Any]) -> str:
    """
    Canonical key for one call's argument list.

    Positional arguments keep their order; keyword arguments are sorted,
    so f(a=1, b=2) and f(b=2, a=1) share a key.
    """
    return canonical_json_str({"args": list(args), "kwargs": dict(kwargs)})
