"""Type-aware equality for rendered values."""

from __future__ import annotations

import collections.abc as cabc


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def values_equal(actual: object, expected: object) -> bool:
    """Compare two configuration trees.

    Numbers compare by value regardless of ``int``/``float`` representation,
    booleans only equal booleans, mappings compare by key set and value, and
    sequences (lists or tuples) compare item by item.

    Examples
    --------
    >>> values_equal(10, 10.0)
    True
    >>> values_equal(True, 1)
    False
    >>> values_equal({"a": [1, 2.0]}, {"a": (1.0, 2)})
    True

    """
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    if isinstance(actual, cabc.Mapping) and isinstance(expected, cabc.Mapping):
        if set(actual) != set(expected):
            return False
        return all(values_equal(actual[key], expected[key]) for key in actual)
    if isinstance(actual, list | tuple) and isinstance(expected, list | tuple):
        if len(actual) != len(expected):
            return False
        return all(values_equal(a, e) for a, e in zip(actual, expected, strict=True))
    if isinstance(actual, cabc.Mapping | list | tuple) or isinstance(
        expected, cabc.Mapping | list | tuple
    ):
        return False
    return actual == expected


__all__ = ["values_equal"]
