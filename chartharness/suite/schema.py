"""JSON Schema generation for suite files."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path  # noqa: TC003

import msgspec

from chartharness.suite.models import Suite

SCHEMA_ID = "https://chartharness.example/schemas/suite.json"


def build_suite_schema() -> dict[str, typ.Any]:
    """Build the JSON Schema describing a single-suite file.

    Returns
    -------
    dict[str, Any]
        JSON Schema with ``$id`` set to ``SCHEMA_ID``.

    """
    schema = msgspec.json.schema(Suite)
    schema["$id"] = SCHEMA_ID
    return schema


def write_suite_schema(path: Path) -> Path:
    """Persist the generated JSON Schema to disk, creating parent directories."""
    schema = build_suite_schema()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return path


__all__ = ["SCHEMA_ID", "build_suite_schema", "write_suite_schema"]
