"""Configuration value composition.

A case renders against its suite's harness values with the case fragment
layered on top, then any ``set`` overrides applied, the same order Helm uses
for ``values.yaml``, ``--values`` files and ``--set`` flags. Every helper
returns a new tree and leaves its inputs untouched.
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from chartharness.errors import MalformedConfigurationError, describe_type
from chartharness.paths import IndexStep, KeyStep, format_path, parse_path

ConfigValue = typ.Any
ConfigMapping = dict[str, typ.Any]


def deep_merge(
    base: cabc.Mapping[str, typ.Any] | None,
    overlay: cabc.Mapping[str, typ.Any] | None,
) -> ConfigMapping:
    """Merge ``overlay`` into a copy of ``base``.

    Mappings merge recursively; any other overlay value replaces the base
    value. An overlay value of ``None`` removes the key, matching Helm's
    handling of ``null`` in user-supplied values.

    Examples
    --------
    >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": None, "d": 3}})
    {'a': {'b': 1, 'd': 3}}

    """
    merged: ConfigMapping = copy.deepcopy(dict(base or {}))
    for key, value in (overlay or {}).items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, cabc.Mapping) and isinstance(
            merged.get(key), cabc.Mapping
        ):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def set_value(
    values: cabc.Mapping[str, typ.Any], path: str, value: ConfigValue
) -> ConfigMapping:
    """Return a copy of ``values`` with ``path`` set to ``value``.

    Intermediate mappings are created as needed and sequences are padded
    with ``None`` up to the requested index, like ``helm --set
    'list[2]=x'``.

    Raises
    ------
    PathSyntaxError
        If ``path`` is malformed.
    MalformedConfigurationError
        If an intermediate node has the wrong container type.

    """
    steps = parse_path(path)
    if not steps:
        raise MalformedConfigurationError(path, "a non-empty path", "root path")

    result: ConfigMapping = copy.deepcopy(dict(values))
    node: typ.Any = result
    for position, step in enumerate(steps):
        last = position == len(steps) - 1
        nxt = None if last else steps[position + 1]
        fresh: typ.Any = [] if isinstance(nxt, IndexStep) else {}
        where = format_path(steps[:position]) or "<root>"
        if isinstance(step, KeyStep):
            if not isinstance(node, dict):
                raise MalformedConfigurationError(where, "mapping", describe_type(node))
            if last:
                node[step.key] = copy.deepcopy(value)
            else:
                child = node.get(step.key)
                if child is None:
                    child = node[step.key] = fresh
                node = child
        else:
            if not isinstance(node, list):
                raise MalformedConfigurationError(where, "sequence", describe_type(node))
            node.extend([None] * (step.index + 1 - len(node)))
            if last:
                node[step.index] = copy.deepcopy(value)
            else:
                if node[step.index] is None:
                    node[step.index] = fresh
                node = node[step.index]
    return result


def compose_values(
    base: cabc.Mapping[str, typ.Any] | None,
    overlay: cabc.Mapping[str, typ.Any] | None,
    overrides: cabc.Mapping[str, ConfigValue] | None = None,
) -> ConfigMapping:
    """Layer ``overlay`` and then each ``overrides`` entry over ``base``."""
    values = deep_merge(base, overlay)
    for path, value in (overrides or {}).items():
        values = set_value(values, path, value)
    return values


def is_truthy(value: ConfigValue) -> bool:
    """Apply Helm's ``if`` truthiness to a configuration value.

    ``None``, ``False``, zero, and empty strings, mappings and sequences are
    false; everything else is true.
    """
    if value is None or value is False:
        return False
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str | cabc.Mapping | list | tuple):
        return len(value) > 0
    return True


def drop_nulls(value: ConfigValue) -> ConfigValue:
    """Return a deep copy of ``value`` without mapping entries set to ``None``.

    Helm coalesces ``null`` values away before a chart renders, so a ``null``
    reads the same as an absent key. Sequence items are kept as they are.

    Examples
    --------
    >>> drop_nulls({"a": None, "b": {"c": None, "d": [None, 1]}})
    {'b': {'d': [None, 1]}}

    """
    if isinstance(value, cabc.Mapping):
        return {k: drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list | tuple):
        return [drop_nulls(item) for item in value]
    return copy.deepcopy(value)


__all__ = [
    "ConfigMapping",
    "ConfigValue",
    "compose_values",
    "deep_merge",
    "drop_nulls",
    "is_truthy",
    "set_value",
]
