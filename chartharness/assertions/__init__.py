"""Structural assertion engine."""

from __future__ import annotations

from .compare import values_equal
from .engine import evaluate, evaluate_one
from .models import Assertion, AssertionKind, AssertionResult

__all__ = [
    "Assertion",
    "AssertionKind",
    "AssertionResult",
    "evaluate",
    "evaluate_one",
    "values_equal",
]
