"""Assertion and assertion result structures."""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

import msgspec

from chartharness.errors import FailureCode, PathSyntaxError
from chartharness.paths import PathStep, parse_path


class AssertionKind(enum.StrEnum):
    """Supported assertion kinds."""

    DOCUMENT_COUNT = "document-count"
    KIND_MATCHES = "kind-matches"
    PATH_EXISTS = "path-exists"
    PATH_ABSENT = "path-absent"
    PATH_EQUALS = "path-equals"
    PATH_NOT_EQUALS = "path-not-equals"
    PATH_MATCHES = "path-matches"
    PATH_CONTAINS = "path-contains"
    LENGTH_EQUALS = "length-equals"


PATH_KINDS = frozenset(
    {
        AssertionKind.PATH_EXISTS,
        AssertionKind.PATH_ABSENT,
        AssertionKind.PATH_EQUALS,
        AssertionKind.PATH_NOT_EQUALS,
        AssertionKind.PATH_MATCHES,
        AssertionKind.PATH_CONTAINS,
        AssertionKind.LENGTH_EQUALS,
    }
)


class Assertion(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Declarative check against rendered documents.

    Attributes
    ----------
    kind
        What to check.
    path
        Document path for the path kinds, e.g.
        ``spec.tracing[0].randomSamplingPercentage``.
    value
        Expected value: the document count, the ``kind`` string, the value
        to compare, the pattern to match, the item to find, or the length.
    document_index
        Target document (``documentIndex`` in suite files). Defaults to the
        first document.

    """

    kind: AssertionKind
    path: str | None = None
    value: typ.Any = None
    document_index: int | None = None

    def __post_init__(self) -> None:
        """Reject assertions that could never be evaluated."""
        if self.kind in PATH_KINDS:
            if self.path is None:
                msg = f"{self.kind} assertion requires a path"
                raise ValueError(msg)
            try:
                parse_path(self.path)
            except PathSyntaxError as exc:
                raise ValueError(str(exc)) from exc
        if self.kind in {AssertionKind.DOCUMENT_COUNT, AssertionKind.LENGTH_EQUALS}:
            if not _is_count(self.value):
                msg = f"{self.kind} assertion requires a non-negative integer value"
                raise ValueError(msg)
        if self.kind == AssertionKind.KIND_MATCHES and not isinstance(
            self.value, str
        ):
            msg = "kind-matches assertion requires a string value"
            raise ValueError(msg)
        if self.kind == AssertionKind.PATH_MATCHES:
            if not isinstance(self.value, str):
                msg = "path-matches assertion requires a pattern string"
                raise ValueError(msg)
            try:
                re.compile(self.value)
            except re.error as exc:
                msg = f"invalid pattern {self.value!r}: {exc}"
                raise ValueError(msg) from exc
        if self.document_index is not None and self.document_index < 0:
            msg = "documentIndex must be >= 0"
            raise ValueError(msg)

    @property
    def steps(self) -> tuple[PathStep, ...]:
        """Return the parsed path (memoised by ``parse_path``)."""
        return parse_path(self.path or "")

    def describe(self) -> str:
        """Return a one-line label such as ``path-equals spec.kind``."""
        if self.path is None:
            return str(self.kind)
        return f"{self.kind} {self.path}"


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dc.dataclass(frozen=True, slots=True)
class AssertionResult:
    """Verdict for a single assertion.

    Attributes
    ----------
    assertion
        The evaluated assertion.
    passed
        Whether the assertion held.
    expected
        Expected value as evaluated.
    actual
        Observed value, or ``None`` when nothing could be resolved.
    failure_detail
        Human-readable explanation of a failure; ``None`` when passed.
    code
        Failure classification; ``None`` when passed.
    path
        Display path of the inspected node, including the document index.

    """

    assertion: Assertion
    passed: bool
    expected: typ.Any = None
    actual: typ.Any = None
    failure_detail: str | None = None
    code: FailureCode | None = None
    path: str | None = None


__all__ = ["PATH_KINDS", "Assertion", "AssertionKind", "AssertionResult"]
