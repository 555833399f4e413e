"""Human and machine readable reports for suite results.

The engines never print; the CLI formats results through this module.
Every failing assertion is listed with its resolved path and its expected
and actual values so a failure can be diagnosed without re-running.
"""

from __future__ import annotations

import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from chartharness.assertions import AssertionResult
    from chartharness.suite.runner import CaseResult, SuiteResult

_INDENT = "        "


def _render_failure(lines: list[str], result: AssertionResult) -> None:
    """Append the diagnostic block for one failed assertion."""
    lines.append(f"{_INDENT}- {result.assertion.describe()}")
    if result.path is not None:
        lines.append(f"{_INDENT}  path:     {result.path}")
    lines.append(f"{_INDENT}  expected: {result.expected!r}")
    lines.append(f"{_INDENT}  actual:   {result.actual!r}")
    if result.failure_detail:
        lines.append(f"{_INDENT}  detail:   {result.failure_detail}")


def _render_case(lines: list[str], case: CaseResult) -> None:
    """Append the status line and any diagnostics for one case."""
    if case.error is not None:
        lines.append(f"  ERROR {case.name}")
        lines.append(f"{_INDENT}{case.error_code}: {case.error}")
        return
    lines.append(f"  {'PASS ' if case.passed else 'FAIL '} {case.name}")
    for failure in case.failures:
        _render_failure(lines, failure)


def format_suite_result(result: SuiteResult) -> str:
    """Render one suite result as indented text."""
    lines = [f"Suite: {result.name}"]
    for case in result.case_results:
        _render_case(lines, case)
    return "\n".join(lines)


def _tally(label: str, passed: int, total: int) -> str:
    return f"{label} {passed} passed, {total - passed} failed, {total} total"


def format_summary(results: cabc.Sequence[SuiteResult]) -> str:
    """Render every suite followed by suite, case and assertion totals."""
    blocks = [format_suite_result(result) for result in results]
    cases = [case for result in results for case in result.case_results]
    assertions = [r for case in cases for r in case.assertion_results]
    totals = [
        _tally("Suites:    ", sum(r.passed for r in results), len(results)),
        _tally("Cases:     ", sum(c.passed for c in cases), len(cases)),
        _tally("Assertions:", sum(a.passed for a in assertions), len(assertions)),
    ]
    return "\n\n".join([*blocks, "\n".join(totals)])


def _assertion_payload(result: AssertionResult) -> dict[str, typ.Any]:
    return {
        "assertion": result.assertion.describe(),
        "passed": result.passed,
        "path": result.path,
        "expected": result.expected,
        "actual": result.actual,
        "code": None if result.code is None else str(result.code),
        "detail": result.failure_detail,
    }


def results_to_dict(results: cabc.Sequence[SuiteResult]) -> dict[str, typ.Any]:
    """Convert suite results to JSON-compatible data."""
    return {
        "passed": all(result.passed for result in results),
        "suites": [
            {
                "name": result.name,
                "passed": result.passed,
                "cases": [
                    {
                        "name": case.name,
                        "passed": case.passed,
                        "error": case.error,
                        "errorCode": case.error_code,
                        "documentCount": case.document_count,
                        "assertions": [
                            _assertion_payload(r) for r in case.assertion_results
                        ],
                    }
                    for case in result.case_results
                ],
            }
            for result in results
        ],
    }


def results_to_json(results: cabc.Sequence[SuiteResult]) -> bytes:
    """Encode suite results as JSON bytes."""
    return msgspec.json.encode(results_to_dict(results))


__all__ = [
    "format_suite_result",
    "format_summary",
    "results_to_dict",
    "results_to_json",
]
