"""Unit-test library templates by rendering them through a harness.

A library template cannot be rendered on its own. chartharness supplies the
harness context (base values and release metadata), layers each test case's
configuration over it, renders the template and checks the rendered
documents with declarative structural assertions.

Example
-------
>>> from chartharness import Assertion, AssertionKind, default_engine, evaluate
>>> docs = default_engine().render("istiolib.telemetry", {"selector": {"app": "demo"}})
>>> check = Assertion(
...     kind=AssertionKind.PATH_EQUALS,
...     path="spec.selector.matchLabels.app",
...     value="demo",
... )
>>> evaluate(docs, [check])[0].passed
True

"""

from __future__ import annotations

__version__ = "0.1.0"

from .assertions import (
    Assertion,
    AssertionKind,
    AssertionResult,
    evaluate,
    values_equal,
)
from .errors import (
    ChartHarnessError,
    FailureCode,
    MalformedConfigurationError,
    PathSyntaxError,
    RenderError,
    SuiteValidationError,
    TemplateDefinitionError,
    TemplateNotFoundError,
)
from .suite import Case, CaseResult, Suite, SuiteResult, SuiteRunner
from .templates import (
    DeclarativeTemplate,
    FunctionTemplate,
    Release,
    TemplateDefinition,
    TemplateEngine,
    default_engine,
)

__all__ = [
    "Assertion",
    "AssertionKind",
    "AssertionResult",
    "Case",
    "CaseResult",
    "ChartHarnessError",
    "DeclarativeTemplate",
    "FailureCode",
    "FunctionTemplate",
    "MalformedConfigurationError",
    "PathSyntaxError",
    "Release",
    "RenderError",
    "Suite",
    "SuiteResult",
    "SuiteRunner",
    "SuiteValidationError",
    "TemplateDefinition",
    "TemplateEngine",
    "TemplateNotFoundError",
    "__version__",
    "default_engine",
    "evaluate",
    "values_equal",
]
