"""
Field maps: field name -> dynamically typed value.

Allowed value kinds are a closed set: float, bool, str, and (in the `fields`
role only) a nested-search descriptor. Numbers are 64-bit floats, matching what
a JSON decoder yields for request bodies; `normalize_numbers` folds Python ints
into floats so hand-built maps behave the same as decoded ones.

Comparisons are strict: values must share a type to be equal, so `1.0`,
`"1"` and `True` are pairwise unequal.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping, Union

SCALAR_TYPES = (float, bool, str)

Scalar = Union[float, bool, str]


def is_scalar(value: Any) -> bool:
    return type(value) in SCALAR_TYPES


def values_equal(left: Any, right: Any) -> bool:
    """
    Strict equality: same type and equal value.

    Maps compare by content whatever their concrete class; NaN equals NaN so
    that map equality stays reflexive.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return FieldMap(left).equal(right)
    if type(left) is not type(right):
        return False
    if isinstance(left, float) and math.isnan(left) and math.isnan(right):
        return True
    return left == right


def normalize_numbers(value: Any) -> Any:
    """
    Convert ints (but not bools) to floats, recursing through maps.

    Mapping values come back as plain dicts; everything else is returned as-is.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return float(value)
    if isinstance(value, Mapping):
        return {k: normalize_numbers(v) for k, v in value.items()}
    return value


def format_value(value: Any) -> str:
    """String form of a field value as used in staging key strings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


class FieldMap(dict):
    """
    Mapping from field name to value with strict comparison helpers.

    Key order is irrelevant to both comparisons.
    """

    def equal(self, other: Mapping[str, Any]) -> bool:
        """Same key set, every value strictly equal."""
        if len(self) != len(other):
            return False
        return self.exist_in(other)

    def exist_in(self, other: Mapping[str, Any]) -> bool:
        """Every key of this map is present in `other` with a strictly equal value."""
        for key, value in self.items():
            if key not in other:
                return False
            if not values_equal(value, other[key]):
                return False
        return True

    def sorted_keys(self) -> list[str]:
        return sorted(self.keys())


__all__ = [
    "SCALAR_TYPES",
    "Scalar",
    "FieldMap",
    "is_scalar",
    "values_equal",
    "normalize_numbers",
    "format_value",
]
