"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from chartharness.templates import TemplateEngine, default_engine

REPO_ROOT = Path(__file__).resolve().parent.parent
FIXTURES_DIR = REPO_ROOT / "tests" / "fixtures"
EXAMPLES_DIR = REPO_ROOT / "examples"


@pytest.fixture
def engine() -> TemplateEngine:
    """Return a fresh engine holding only the built-in templates."""
    return default_engine()


@pytest.fixture
def suites_dir() -> Path:
    """Return the directory holding suite fixtures."""
    return FIXTURES_DIR / "suites"


@pytest.fixture
def templates_dir() -> Path:
    """Return the directory holding template definition fixtures."""
    return FIXTURES_DIR / "templates"


@pytest.fixture
def examples_dir() -> Path:
    """Return the directory holding the bundled example suites."""
    return EXAMPLES_DIR
