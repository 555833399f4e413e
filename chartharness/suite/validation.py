"""Semantic validation rules for test suites."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from chartharness.errors import PathSyntaxError, SuiteValidationError
from chartharness.paths import parse_path

if typ.TYPE_CHECKING:
    from chartharness.suite.models import Case, Suite


def validate_suite(
    suite: Suite, known_templates: cabc.Container[str] | None = None
) -> Suite:
    """Validate a suite, returning it when all checks pass.

    Parameters
    ----------
    suite
        Suite to check.
    known_templates
        Registered template names. When given, every referenced template
        must be present.

    Raises
    ------
    SuiteValidationError
        Listing every issue found.

    """
    issues: list[str] = []
    label = suite.name.strip() or "<unnamed>"

    if not suite.name.strip():
        issues.append("suite is missing a name")
    if not suite.templates:
        issues.append(f"suite {label} must list at least one template")
    if not suite.cases:
        issues.append(f"suite {label} must declare at least one case")

    seen: set[str] = set()
    for case in suite.cases:
        _validate_case(label, case, seen, issues)

    if known_templates is not None:
        referenced = list(suite.templates)
        referenced.extend(name for case in suite.cases for name in case.templates)
        for name in dict.fromkeys(referenced):
            if name not in known_templates:
                issues.append(f"suite {label} references unknown template '{name}'")

    if issues:
        raise SuiteValidationError(issues)
    return suite


def _validate_case(label: str, case: Case, seen: set[str], issues: list[str]) -> None:
    if not case.name.strip():
        issues.append(f"suite {label} has a case without a name")
    elif case.name in seen:
        issues.append(f"suite {label} has duplicate case name '{case.name}'")
    else:
        seen.add(case.name)

    if not case.asserts:
        issues.append(f"case {case.name} in suite {label} has no assertions")

    for path in case.set:
        try:
            parse_path(path)
        except PathSyntaxError as exc:
            issues.append(f"case {case.name} in suite {label}: set {exc}")


__all__ = ["validate_suite"]
