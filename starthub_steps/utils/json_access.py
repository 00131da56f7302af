"""Tolerant accessors for loosely typed JSON values.

Every helper returns ``None`` (or drops the offending entry) instead of
raising when a value has the wrong type.
"""

import math
from typing import Any, Dict, List, Optional


def get_dict(obj: Any, key: str) -> Optional[Dict[str, Any]]:
    if not isinstance(obj, dict):
        return None
    value = obj.get(key)
    return value if isinstance(value, dict) else None


def get_str(obj: Any, key: str) -> Optional[str]:
    if not isinstance(obj, dict):
        return None
    value = obj.get(key)
    return value if isinstance(value, str) else None


def non_empty_str(obj: Any, key: str) -> Optional[str]:
    value = get_str(obj, key)
    if value is None or not value.strip():
        return None
    return value.strip()


def int_list(values: Any) -> Optional[List[int]]:
    """Keep integers and digit-only strings; bools and everything else are dropped."""
    if not isinstance(values, list):
        return None
    out = []
    for v in values:
        if isinstance(v, bool):
            continue
        if isinstance(v, int):
            out.append(v)
        elif isinstance(v, str) and v.strip().isdigit():
            out.append(int(v.strip()))
    return out


def str_list(values: Any) -> Optional[List[str]]:
    if not isinstance(values, list):
        return None
    return [v for v in values if isinstance(v, str) and v]


def dict_list(values: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(values, list):
        return None
    return [v for v in values if isinstance(v, dict)]


def finite_json(value: Any) -> Any:
    """Replace NaN and infinities with None so the value stays strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: finite_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [finite_json(v) for v in value]
    return value
