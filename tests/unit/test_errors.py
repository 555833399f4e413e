"""Unit tests for the error hierarchy."""

from __future__ import annotations

import pytest

from chartharness.errors import (
    ChartHarnessError,
    FailureCode,
    MalformedConfigurationError,
    RenderError,
    SuiteValidationError,
    TemplateNotFoundError,
    TemplateRenderError,
    describe_type,
)


def test_render_errors_share_a_base() -> None:
    """Render failures can be caught as RenderError and ChartHarnessError."""
    for exc in (
        TemplateNotFoundError("istiolib.sidecar"),
        MalformedConfigurationError("selector", "mapping", "string"),
        TemplateRenderError("mesh.gateway", "bad YAML"),
    ):
        assert isinstance(exc, RenderError)
        assert isinstance(exc, ChartHarnessError)


def test_template_not_found_names_template() -> None:
    """The message and attribute carry the missing name."""
    exc = TemplateNotFoundError("istiolib.sidecar")
    assert exc.name == "istiolib.sidecar"
    assert str(exc) == "Template not found: istiolib.sidecar"
    assert exc.code == "template_not_found"


def test_template_render_error_message() -> None:
    """The message carries the template name and the reason."""
    exc = TemplateRenderError("mesh.gateway", "rendered invalid YAML")
    assert str(exc) == "Template mesh.gateway failed to render: rendered invalid YAML"
    assert exc.code == "template_render_error"


def test_malformed_configuration_message() -> None:
    """The message names the path and both type descriptions."""
    exc = MalformedConfigurationError("selector", "mapping", "string")
    assert str(exc) == (
        "Malformed configuration at selector: expected mapping, got string"
    )
    assert exc.code == "malformed_configuration"


def test_malformed_configuration_at_root() -> None:
    """An empty path is reported as the root."""
    exc = MalformedConfigurationError("", "mapping", "sequence")
    assert "<root>" in str(exc)


def test_suite_validation_error_keeps_issues() -> None:
    """Issues are kept as a list and joined into the message."""
    exc = SuiteValidationError(["first", "second"])
    assert exc.issues == ["first", "second"]
    assert str(exc) == "first\nsecond"
    assert isinstance(exc, ValueError)


def test_failure_codes_are_strings() -> None:
    """Failure codes serialise as their snake_case labels."""
    assert str(FailureCode.ASSERTION_MISMATCH) == "assertion_mismatch"
    assert FailureCode("path_resolution_ambiguous") is (
        FailureCode.PATH_RESOLUTION_AMBIGUOUS
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param(None, "null", id="null"),
        pytest.param(True, "boolean", id="boolean"),
        pytest.param(3, "number", id="int"),
        pytest.param(2.5, "number", id="float"),
        pytest.param("x", "string", id="string"),
        pytest.param({}, "mapping", id="mapping"),
        pytest.param([], "sequence", id="list"),
        pytest.param((), "sequence", id="tuple"),
        pytest.param(object(), "object", id="other"),
    ],
)
def test_describe_type(value: object, expected: str) -> None:
    """Values are described with configuration-level type names."""
    assert describe_type(value) == expected
