"""Shared fixtures for BDD feature tests."""

from __future__ import annotations

import pytest

from chartharness.suite import SuiteRunner
from chartharness.templates import TemplateEngine  # noqa: TC001


@pytest.fixture
def runner(engine: TemplateEngine) -> SuiteRunner:
    """Return a sequential runner over the built-in engine."""
    return SuiteRunner(engine, max_workers=1)
