"""Suite definitions, loading, execution and reporting.

Quick examples
--------------

Run the bundled example suite::

    >>> from chartharness.suite import SuiteRunner, load_suite
    >>> from chartharness.templates import default_engine
    >>> engine = default_engine()
    >>> suite = load_suite("examples/telemetry-suite.yaml", engine)
    >>> SuiteRunner(engine).run(suite).passed
    True

Export the suite file schema::

    >>> from chartharness.suite import build_suite_schema
    >>> schema = build_suite_schema()
"""

from __future__ import annotations

from .loader import load_suite, load_suites, load_template_definitions
from .models import Case, Suite, SuiteFile
from .report import format_suite_result, format_summary, results_to_json
from .runner import CaseResult, Evaluator, Renderer, SuiteResult, SuiteRunner
from .schema import build_suite_schema, write_suite_schema
from .validation import validate_suite

__all__ = [
    "Case",
    "CaseResult",
    "Evaluator",
    "Renderer",
    "Suite",
    "SuiteFile",
    "SuiteResult",
    "SuiteRunner",
    "build_suite_schema",
    "format_suite_result",
    "format_summary",
    "load_suite",
    "load_suites",
    "load_template_definitions",
    "results_to_json",
    "validate_suite",
    "write_suite_schema",
]
