"""YAML loaders for suite and template definition files."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from chartharness.errors import SuiteValidationError
from chartharness.suite.models import Suite, SuiteFile
from chartharness.suite.validation import validate_suite
from chartharness.templates.models import TemplateDefinition, TemplateLibrary

YAML_VERSION = (1, 2)


def load_suites(
    path: Path | str, known_templates: cabc.Container[str] | None = None
) -> list[Suite]:
    """Parse a suite file holding one suite or a ``suites:`` list.

    Raises
    ------
    SuiteValidationError
        If the file cannot be parsed or any suite fails validation.

    """
    loaded = _load_yaml(Path(path))
    if not isinstance(loaded, cabc.Mapping):
        raise SuiteValidationError([f"{path}: expected a mapping at the top level"])

    try:
        if "suites" in loaded:
            suites = list(msgspec.convert(loaded, type=SuiteFile).suites)
        else:
            suites = [msgspec.convert(loaded, type=Suite)]
    except msgspec.ValidationError as exc:
        raise SuiteValidationError([f"{path}: schema validation failed: {exc}"]) from exc

    issues: list[str] = []
    for suite in suites:
        try:
            validate_suite(suite, known_templates)
        except SuiteValidationError as exc:
            issues.extend(exc.issues)
    if issues:
        raise SuiteValidationError(issues)
    return suites


def load_suite(
    path: Path | str, known_templates: cabc.Container[str] | None = None
) -> Suite:
    """Parse a file that holds exactly one suite."""
    suites = load_suites(path, known_templates)
    if len(suites) != 1:
        raise SuiteValidationError([f"{path}: expected one suite, found {len(suites)}"])
    return suites[0]


def load_template_definitions(path: Path | str) -> list[TemplateDefinition]:
    """Parse a file with a top-level ``templates:`` list of definitions."""
    loaded = _load_yaml(Path(path))
    try:
        library = msgspec.convert(loaded, type=TemplateLibrary)
    except msgspec.ValidationError as exc:
        raise SuiteValidationError([f"{path}: schema validation failed: {exc}"]) from exc
    return list(library.templates)


def _load_yaml(path: Path) -> typ.Any:
    """Read ``path`` with a YAML 1.2 safe loader that rejects duplicate keys."""
    yaml = _yaml()
    try:
        loaded = yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise SuiteValidationError([f"{path}: failed to parse YAML: {exc}"]) from exc

    if loaded is None:
        raise SuiteValidationError([f"{path}: file is empty"])
    return loaded


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    yaml.default_flow_style = False
    return yaml


__all__ = ["load_suite", "load_suites", "load_template_definitions"]
