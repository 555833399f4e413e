"""Manifest template engine.

* ``TemplateEngine`` - registry plus ``render(name, config)``.
* ``DeclarativeTemplate`` / ``TemplateDefinition`` - templates whose
  documents are Jinja2 sources rendering to YAML.
* ``FunctionTemplate`` - templates written as Python callables.
* ``default_engine`` - an engine preloaded with the built-in library
  templates.
"""

from __future__ import annotations

from .engine import (
    DeclarativeTemplate,
    Document,
    FunctionTemplate,
    Template,
    TemplateEngine,
    TemplateFunction,
)
from .models import DocumentDefinition, Release, TemplateDefinition, TemplateLibrary
from .telemetry import BUILTIN_DEFINITIONS, TELEMETRY_TEMPLATE_NAME


def default_engine() -> TemplateEngine:
    """Return a fresh engine with the built-in templates registered."""
    return TemplateEngine(DeclarativeTemplate(d) for d in BUILTIN_DEFINITIONS)


__all__ = [
    "TELEMETRY_TEMPLATE_NAME",
    "DeclarativeTemplate",
    "Document",
    "DocumentDefinition",
    "FunctionTemplate",
    "Release",
    "Template",
    "TemplateDefinition",
    "TemplateEngine",
    "TemplateFunction",
    "TemplateLibrary",
    "default_engine",
]
