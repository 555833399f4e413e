"""Errors raised by the chartharness engines, loaders and runner.

Only conditions that stop a render call or a load are raised. Assertion
outcomes (value mismatches and targets that cannot be resolved) are reported
as failed ``AssertionResult`` values labelled with a ``FailureCode`` instead.
"""

from __future__ import annotations

import collections.abc as cabc
import enum


class FailureCode(enum.StrEnum):
    """Machine-readable label attached to a failed assertion result."""

    ASSERTION_MISMATCH = "assertion_mismatch"
    PATH_RESOLUTION_AMBIGUOUS = "path_resolution_ambiguous"


class ChartHarnessError(Exception):
    """Base class for chartharness errors."""


class RenderError(ChartHarnessError):
    """Base class for failures of a single render call."""

    code = "render_error"


class TemplateNotFoundError(RenderError):
    """Raised when a template name is not present in the registry."""

    code = "template_not_found"

    def __init__(self, name: str) -> None:
        """Initialise with the missing template name."""
        self.name = name
        super().__init__(f"Template not found: {name}")


class MalformedConfigurationError(RenderError):
    """Raised when a configuration value violates a template's expectation.

    Attributes
    ----------
    path
        Configuration path that held the offending value.
    expected
        Description of the expected type or condition.
    actual
        Description of what was found instead.

    """

    code = "malformed_configuration"

    def __init__(self, path: str, expected: str, actual: str) -> None:
        """Initialise with the offending path and a type description."""
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Malformed configuration at {path or '<root>'}: "
            f"expected {expected}, got {actual}"
        )


class TemplateRenderError(RenderError):
    """Raised when a template fails while rendering or emits invalid YAML."""

    code = "template_render_error"

    def __init__(self, name: str, reason: str) -> None:
        """Initialise with the template name and the failure reason."""
        self.name = name
        self.reason = reason
        super().__init__(f"Template {name} failed to render: {reason}")


class TemplateDefinitionError(ChartHarnessError):
    """Raised when a template definition cannot be compiled or registered."""


class PathSyntaxError(ChartHarnessError, ValueError):
    """Raised when a document path string cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialise with the raw path and the parse failure reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class SuiteValidationError(ChartHarnessError, ValueError):
    """Raised when a suite or template file fails parsing or validation."""

    def __init__(self, issues: list[str]) -> None:
        """Capture validation issues whilst preserving the aggregated message."""
        message = "\n".join(issues)
        super().__init__(message)
        self.issues = issues


def describe_type(value: object) -> str:
    """Return the configuration-level type name of ``value``."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case cabc.Mapping():
            return "mapping"
        case list() | tuple():
            return "sequence"
        case _:
            return type(value).__name__


__all__ = [
    "ChartHarnessError",
    "FailureCode",
    "MalformedConfigurationError",
    "PathSyntaxError",
    "RenderError",
    "SuiteValidationError",
    "TemplateDefinitionError",
    "TemplateNotFoundError",
    "TemplateRenderError",
    "describe_type",
]
