"""Evaluation of assertions against rendered documents.

``evaluate`` is a pure function: it reads the documents, never mutates
them, and returns one ``AssertionResult`` per assertion in declaration
order. A failing assertion never suppresses or alters a sibling's verdict,
and a target document that does not exist is reported as a failed result
rather than raised.
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

from chartharness.assertions.compare import values_equal
from chartharness.assertions.models import Assertion, AssertionKind, AssertionResult
from chartharness.errors import FailureCode, describe_type
from chartharness.logging import get_logger, log_debug
from chartharness.paths import format_path, resolve_path

if typ.TYPE_CHECKING:
    from chartharness.paths import Resolution

logger = get_logger(__name__)

_Documents = cabc.Sequence[typ.Any]


def _display_path(index: int, assertion: Assertion) -> str:
    suffix = format_path(assertion.steps)
    if not suffix:
        return f"documents[{index}]"
    if suffix.startswith("["):
        return f"documents[{index}]{suffix}"
    return f"documents[{index}].{suffix}"


def _passed(
    assertion: Assertion, expected: object, actual: object, path: str | None
) -> AssertionResult:
    return AssertionResult(
        assertion=assertion, passed=True, expected=expected, actual=actual, path=path
    )


def _mismatch(
    assertion: Assertion,
    expected: object,
    actual: object,
    detail: str,
    path: str | None = None,
) -> AssertionResult:
    return AssertionResult(
        assertion=assertion,
        passed=False,
        expected=expected,
        actual=actual,
        failure_detail=detail,
        code=FailureCode.ASSERTION_MISMATCH,
        path=path,
    )


def _check_document_count(
    documents: _Documents, assertion: Assertion
) -> AssertionResult:
    actual = len(documents)
    if actual == assertion.value:
        return _passed(assertion, assertion.value, actual, None)
    return _mismatch(
        assertion,
        assertion.value,
        actual,
        f"expected {assertion.value} document(s), rendered {actual}",
    )


def _check_kind(document: object, index: int, assertion: Assertion) -> AssertionResult:
    path = f"documents[{index}].kind"
    if not isinstance(document, cabc.Mapping) or "kind" not in document:
        return _mismatch(assertion, assertion.value, None, "document has no kind", path)
    actual = document["kind"]
    if actual == assertion.value:
        return _passed(assertion, assertion.value, actual, path)
    return _mismatch(
        assertion,
        assertion.value,
        actual,
        f"expected kind {assertion.value!r}, got {actual!r}",
        path,
    )


def _check_presence(
    resolution: Resolution, assertion: Assertion, path: str
) -> AssertionResult:
    want_present = assertion.kind == AssertionKind.PATH_EXISTS
    actual = resolution.value if resolution.found else None
    if resolution.found == want_present:
        return _passed(assertion, want_present, resolution.found, path)
    if want_present:
        detail = f"expected {path} to exist"
    else:
        detail = f"expected {path} to be absent, found {actual!r}"
    return _mismatch(assertion, want_present, actual, detail, path)


def _check_value(  # noqa: PLR0911 - one return per assertion kind
    resolution: Resolution, assertion: Assertion, path: str
) -> AssertionResult:
    expected = assertion.value
    if not resolution.found:
        return _mismatch(assertion, expected, None, f"{path} is absent", path)
    actual = resolution.value

    match assertion.kind:
        case AssertionKind.PATH_EQUALS:
            if values_equal(actual, expected):
                return _passed(assertion, expected, actual, path)
            detail = f"expected {path} to equal {expected!r}, got {actual!r}"
        case AssertionKind.PATH_NOT_EQUALS:
            if not values_equal(actual, expected):
                return _passed(assertion, expected, actual, path)
            detail = f"expected {path} to differ from {expected!r}"
        case AssertionKind.PATH_MATCHES:
            if isinstance(actual, str) and re.search(expected, actual):
                return _passed(assertion, expected, actual, path)
            detail = f"expected {path} to match /{expected}/, got {actual!r}"
        case AssertionKind.PATH_CONTAINS:
            if isinstance(actual, list | tuple) and any(
                values_equal(item, expected) for item in actual
            ):
                return _passed(assertion, expected, actual, path)
            detail = f"expected {path} to contain {expected!r}, got {actual!r}"
        case _:
            if isinstance(actual, str | cabc.Mapping | list | tuple):
                if len(actual) == expected:
                    return _passed(assertion, expected, len(actual), path)
                return _mismatch(
                    assertion,
                    expected,
                    len(actual),
                    f"expected {path} to have length {expected}, got {len(actual)}",
                    path,
                )
            detail = f"expected {path} to have a length, got {describe_type(actual)}"
    return _mismatch(assertion, expected, actual, detail, path)


def evaluate_one(documents: _Documents, assertion: Assertion) -> AssertionResult:
    """Evaluate a single assertion against ``documents``."""
    if assertion.kind == AssertionKind.DOCUMENT_COUNT:
        return _check_document_count(documents, assertion)

    index = assertion.document_index or 0
    if index >= len(documents):
        return AssertionResult(
            assertion=assertion,
            passed=False,
            expected=assertion.value,
            failure_detail=(
                f"document index {index} does not exist "
                f"({len(documents)} document(s) rendered)"
            ),
            code=FailureCode.PATH_RESOLUTION_AMBIGUOUS,
            path=f"documents[{index}]",
        )
    document = documents[index]

    if assertion.kind == AssertionKind.KIND_MATCHES:
        return _check_kind(document, index, assertion)

    resolution = resolve_path(document, assertion.steps)
    path = _display_path(index, assertion)
    if assertion.kind in {AssertionKind.PATH_EXISTS, AssertionKind.PATH_ABSENT}:
        return _check_presence(resolution, assertion, path)
    return _check_value(resolution, assertion, path)


def evaluate(
    documents: _Documents, assertions: cabc.Iterable[Assertion]
) -> list[AssertionResult]:
    """Evaluate ``assertions`` in order and return one result per assertion.

    Parameters
    ----------
    documents
        Rendered documents; left untouched.
    assertions
        Assertions to evaluate independently of each other.

    Returns
    -------
    list[AssertionResult]
        Results in the same order as ``assertions``.

    """
    results = [evaluate_one(documents, assertion) for assertion in assertions]
    log_debug(
        logger,
        "Evaluated %d assertion(s), %d failed",
        len(results),
        sum(1 for result in results if not result.passed),
    )
    return results


__all__ = ["evaluate", "evaluate_one"]
