"""Typed test suite structures."""

from __future__ import annotations

import typing as typ

import msgspec

from chartharness.assertions.models import Assertion  # noqa: TC001
from chartharness.templates.models import Release


class Case(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """One named test case.

    Attributes
    ----------
    name
        Case name, unique within its suite.
    values
        Configuration fragment merged over the suite's harness values.
    set
        Dotted path overrides applied after merging, like ``helm --set``.
    templates
        Templates to render for this case; empty means the suite's list.
    release
        Release override for this case.
    asserts
        Assertions evaluated against the rendered documents.

    """

    name: str
    asserts: tuple[Assertion, ...]
    values: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    set: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    templates: tuple[str, ...] = ()
    release: Release | None = None


class Suite(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A named group of cases exercising one or more templates.

    Attributes
    ----------
    name
        Suite name used in reports.
    templates
        Template names rendered for each case, in order.
    values
        Harness values every case starts from.
    release
        Release metadata supplied to the templates.
    cases
        Cases in declaration order.

    """

    name: str
    templates: tuple[str, ...]
    cases: tuple[Case, ...]
    values: dict[str, typ.Any] = msgspec.field(default_factory=dict)
    release: Release | None = None

    def templates_for(self, case: Case) -> tuple[str, ...]:
        """Return the templates ``case`` renders."""
        return case.templates or self.templates

    def release_for(self, case: Case, default: Release | None = None) -> Release:
        """Return the release ``case`` renders with.

        Precedence is the case release, the suite release, ``default``, then
        ``Release()``.
        """
        return case.release or self.release or default or Release()


class SuiteFile(msgspec.Struct, kw_only=True, frozen=True):
    """Top-level structure of a suite file holding several suites."""

    suites: tuple[Suite, ...]


__all__ = ["Case", "Suite", "SuiteFile"]
