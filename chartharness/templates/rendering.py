"""Jinja2 rendering of declarative document templates.

Each document of a declarative template is a Jinja2 template that produces
YAML text. The top-level configuration keys are template variables,
alongside ``values`` (the whole mapping, for keys that are not identifiers)
and ``release``. The rendered text is read back with the YAML 1.2 safe
loader; a document that renders to nothing is not emitted.

Absent values are false in ``{% if %}`` tests, accept the ``default`` filter
and yield another absent value on attribute lookup; printing or iterating
one fails the render. Mapping entries holding ``null`` are dropped before
rendering, so ``default`` covers explicit nulls too. A ``default`` never
changes what an ``{% if %}`` on the same name sees.

Filters added to the environment:

``required(path)``
    Reject an absent value with ``MalformedConfigurationError``.
``expect(type, path)``
    Check a present value is a ``string``, ``number``, ``boolean``,
    ``mapping``, ``sequence`` or ``scalar``. Absent values pass through.

Emit configuration values with the built-in ``tojson`` filter; JSON is read
back by YAML unchanged and mapping keys keep their declared order.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import jinja2
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from chartharness.errors import (
    MalformedConfigurationError,
    TemplateDefinitionError,
    TemplateRenderError,
    describe_type,
)

if typ.TYPE_CHECKING:
    from chartharness.templates.models import Release

VALUE_TYPES = frozenset(
    {"string", "number", "boolean", "mapping", "sequence", "scalar"}
)
_SCALAR_TYPES = frozenset({"string", "number", "boolean"})


class AbsentValue(jinja2.ChainableUndefined, jinja2.StrictUndefined):
    """Strict undefined that chains lookups and tests false."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False


def _required(value: object, path: str) -> object:
    if isinstance(value, jinja2.Undefined) or value is None:
        raise MalformedConfigurationError(path, "a value", "nothing")
    return value


def _expect(value: object, value_type: str, path: str) -> object:
    if value_type not in VALUE_TYPES:
        msg = f"unknown type {value_type!r} passed to expect"
        raise jinja2.TemplateRuntimeError(msg)
    if isinstance(value, jinja2.Undefined):
        return value
    actual = describe_type(value)
    allowed = _SCALAR_TYPES if value_type == "scalar" else {value_type}
    if actual not in allowed:
        raise MalformedConfigurationError(path, value_type, actual)
    return value


def build_environment() -> jinja2.Environment:
    """Return the environment every declarative document compiles against."""
    env = jinja2.Environment(
        undefined=AbsentValue,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["required"] = _required
    env.filters["expect"] = _expect
    env.policies["json.dumps_kwargs"] = {"sort_keys": False}
    return env


ENVIRONMENT = build_environment()


def compile_document(source: str, *, template_name: str) -> jinja2.Template:
    """Compile one document source.

    Raises
    ------
    TemplateDefinitionError
        If ``source`` is not valid Jinja2.

    """
    try:
        return ENVIRONMENT.from_string(source)
    except jinja2.TemplateSyntaxError as exc:
        msg = f"template {template_name}: line {exc.lineno}: {exc.message}"
        raise TemplateDefinitionError(msg) from exc


def render_document(
    template: jinja2.Template,
    values: cabc.Mapping[str, typ.Any],
    release: Release,
    *,
    template_name: str,
) -> list[typ.Any]:
    """Render ``template`` and parse the text into documents.

    ``values`` must already have its nulls dropped. Configuration type
    errors raised by filters propagate as ``MalformedConfigurationError``.

    Raises
    ------
    MalformedConfigurationError
        If a value is missing or has the wrong type.
    TemplateRenderError
        If the template fails for another reason or emits invalid YAML.

    """
    context = {**values, "values": values, "release": release}
    try:
        text = template.render(context)
    except TypeError as exc:
        msg = str(exc)
        raise MalformedConfigurationError("", "a usable value", msg) from exc
    except jinja2.TemplateError as exc:
        raise TemplateRenderError(template_name, exc.message or str(exc)) from exc

    try:
        return [doc for doc in _yaml().load_all(text) if doc is not None]
    except YAMLError as exc:
        msg = f"rendered invalid YAML: {exc}"
        raise TemplateRenderError(template_name, msg) from exc


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = (1, 2)
    yaml.allow_duplicate_keys = False
    return yaml


__all__ = [
    "ENVIRONMENT",
    "VALUE_TYPES",
    "AbsentValue",
    "build_environment",
    "compile_document",
    "render_document",
]
