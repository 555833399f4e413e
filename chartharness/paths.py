"""Document path parsing and resolution.

Paths address a node inside a rendered document or a configuration tree:

* ``spec.tracing[0].randomSamplingPercentage`` - dotted keys and indices.
* ``metadata.labels["app.kubernetes.io/name"]`` - quoted keys may contain
  dots.

A path string is parsed once into a tuple of steps and memoised, so
assertions that share a path share the parsed accessor. Resolution never
raises: a missing key, an out of range index, or stepping into a scalar is
reported as an absent ``Resolution``.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import functools
import re
import typing as typ

from chartharness.errors import PathSyntaxError

_KEY_PATTERN = re.compile(r"[^.\[\]\"']+")
_INDEX_PATTERN = re.compile(r"\[(\d+)\]")
_QUOTED_PATTERN = re.compile(r"""\[(?:"([^"]*)"|'([^']*)')\]""")


@dc.dataclass(frozen=True, slots=True)
class KeyStep:
    """Select a key from a mapping."""

    key: str


@dc.dataclass(frozen=True, slots=True)
class IndexStep:
    """Select an item from a sequence."""

    index: int


PathStep = KeyStep | IndexStep


@dc.dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving a path against a tree.

    Attributes
    ----------
    found
        Whether every step of the path resolved.
    value
        The resolved node, or ``None`` when ``found`` is false.

    """

    found: bool
    value: typ.Any = None


ABSENT = Resolution(found=False)


@functools.lru_cache(maxsize=1024)
def parse_path(path: str) -> tuple[PathStep, ...]:
    """Parse a path string into key and index steps.

    Parameters
    ----------
    path
        Path such as ``spec.selector.matchLabels.app`` or ``items[2].name``.

    Returns
    -------
    tuple[PathStep, ...]
        The parsed steps. The empty string parses to the root (no steps).

    Raises
    ------
    PathSyntaxError
        If the path is malformed.

    """
    steps: list[PathStep] = []
    pos = 0
    expect_key = True
    while pos < len(path):
        char = path[pos]
        if char == "[":
            quoted = _QUOTED_PATTERN.match(path, pos)
            if quoted is not None:
                key = quoted.group(1) if quoted.group(1) is not None else quoted.group(2)
                steps.append(KeyStep(key))
                pos = quoted.end()
                expect_key = False
                continue
            index = _INDEX_PATTERN.match(path, pos)
            if index is None:
                raise PathSyntaxError(path, f"bad index at offset {pos}")
            steps.append(IndexStep(int(index.group(1))))
            pos = index.end()
            expect_key = False
            continue
        if char == ".":
            if expect_key:
                raise PathSyntaxError(path, f"empty key at offset {pos}")
            pos += 1
            expect_key = True
            if pos == len(path):
                raise PathSyntaxError(path, "trailing dot")
            continue
        if not expect_key:
            raise PathSyntaxError(path, f"expected '.' or '[' at offset {pos}")
        key_match = _KEY_PATTERN.match(path, pos)
        if key_match is None:
            raise PathSyntaxError(path, f"unexpected {char!r} at offset {pos}")
        steps.append(KeyStep(key_match.group(0)))
        pos = key_match.end()
        expect_key = False
    return tuple(steps)


def format_path(steps: cabc.Iterable[PathStep]) -> str:
    """Render steps back into their canonical path string.

    Keys that need quoting use double quotes, or single quotes when the key
    itself holds a double quote. A key holding both cannot be written as a
    path and raises ``PathSyntaxError``.
    """
    parts: list[str] = []
    for step in steps:
        if isinstance(step, IndexStep):
            parts.append(f"[{step.index}]")
        elif not _KEY_PATTERN.fullmatch(step.key):
            parts.append(_quote_key(step.key))
        elif parts:
            parts.append(f".{step.key}")
        else:
            parts.append(step.key)
    return "".join(parts)


def _quote_key(key: str) -> str:
    if '"' not in key:
        return f'["{key}"]'
    if "'" not in key:
        return f"['{key}']"
    raise PathSyntaxError(key, "key contains both quote characters")


def resolve_path(tree: object, steps: cabc.Iterable[PathStep]) -> Resolution:
    """Walk ``steps`` from ``tree`` without raising on missing nodes."""
    node = tree
    for step in steps:
        if isinstance(step, KeyStep):
            if not isinstance(node, cabc.Mapping) or step.key not in node:
                return ABSENT
            node = node[step.key]
        else:
            if not isinstance(node, list | tuple) or step.index >= len(node):
                return ABSENT
            node = node[step.index]
    return Resolution(found=True, value=node)


def lookup(tree: object, path: str) -> Resolution:
    """Parse ``path`` (memoised) and resolve it against ``tree``."""
    return resolve_path(tree, parse_path(path))


__all__ = [
    "ABSENT",
    "IndexStep",
    "KeyStep",
    "PathStep",
    "Resolution",
    "format_path",
    "lookup",
    "parse_path",
    "resolve_path",
]
