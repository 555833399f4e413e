"""Template registry and renderer.

``TemplateEngine`` maps template names to templates and renders them
against a configuration value. Rendering is a pure function of the
template, the configuration and the release: output documents never alias
the input and repeated calls return equal documents.

Usage
-----
>>> from chartharness.templates import default_engine
>>> engine = default_engine()
>>> [doc["kind"] for doc in engine.render("istiolib.telemetry", {})]
['Telemetry']

"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

import msgspec

from chartharness.errors import (
    MalformedConfigurationError,
    PathSyntaxError,
    TemplateDefinitionError,
    TemplateNotFoundError,
    describe_type,
)
from chartharness.logging import get_logger, log_debug
from chartharness.paths import PathStep, parse_path, resolve_path
from chartharness.templates.models import Release, TemplateDefinition
from chartharness.templates.rendering import compile_document, render_document
from chartharness.values import drop_nulls, is_truthy

if typ.TYPE_CHECKING:
    import jinja2

Document = typ.Any
TemplateFunction = cabc.Callable[
    [cabc.Mapping[str, typ.Any], Release], cabc.Sequence[Document]
]

logger = get_logger(__name__)


class Template(typ.Protocol):
    """A named, pure function from configuration to documents."""

    @property
    def name(self) -> str: ...

    def render(
        self, values: cabc.Mapping[str, typ.Any], release: Release
    ) -> list[Document]: ...


class DeclarativeTemplate:
    """Template built from a ``TemplateDefinition`` of Jinja2 documents."""

    def __init__(self, definition: TemplateDefinition) -> None:
        """Compile every document source and gate of ``definition``."""
        if not definition.name.strip():
            msg = "template name must not be empty"
            raise TemplateDefinitionError(msg)
        self.definition = definition
        self._documents: tuple[
            tuple[tuple[PathStep, ...] | None, jinja2.Template], ...
        ] = tuple(
            (
                self._compile_gate(document.when),
                compile_document(document.source, template_name=definition.name),
            )
            for document in definition.documents
        )

    def _compile_gate(self, when: str | None) -> tuple[PathStep, ...] | None:
        if when is None:
            return None
        try:
            return parse_path(when)
        except PathSyntaxError as exc:
            msg = f"template {self.definition.name}: when: {exc}"
            raise TemplateDefinitionError(msg) from exc

    @classmethod
    def from_mapping(cls, data: cabc.Mapping[str, typ.Any]) -> DeclarativeTemplate:
        """Build a template from an already-parsed definition mapping."""
        try:
            definition = msgspec.convert(data, type=TemplateDefinition)
        except msgspec.ValidationError as exc:
            msg = f"invalid template definition: {exc}"
            raise TemplateDefinitionError(msg) from exc
        return cls(definition)

    @property
    def name(self) -> str:
        """Return the registry name."""
        return self.definition.name

    def render(
        self, values: cabc.Mapping[str, typ.Any], release: Release
    ) -> list[Document]:
        """Render each document whose gate is open and whose text is not empty."""
        present = drop_nulls(values)
        documents: list[Document] = []
        for gate, template in self._documents:
            if gate is not None:
                resolution = resolve_path(present, gate)
                if not (resolution.found and is_truthy(resolution.value)):
                    continue
            documents.extend(
                render_document(template, present, release, template_name=self.name)
            )
        return documents


class FunctionTemplate:
    """Template backed by a plain Python callable.

    The callable receives a private copy of the values, and its documents
    are copied before they are returned.
    """

    def __init__(self, name: str, function: TemplateFunction) -> None:
        """Wrap ``function`` under ``name``."""
        self._name = name
        self._function = function

    @property
    def name(self) -> str:
        """Return the registry name."""
        return self._name

    def render(
        self, values: cabc.Mapping[str, typ.Any], release: Release
    ) -> list[Document]:
        """Call the wrapped function and return its documents as a list."""
        documents = self._function(copy.deepcopy(dict(values)), release)
        return copy.deepcopy(list(documents))


class TemplateEngine:
    """Registry of templates and the ``render`` entry point."""

    def __init__(self, templates: cabc.Iterable[Template] = ()) -> None:
        """Register ``templates`` in order."""
        self._templates: dict[str, Template] = {}
        for template in templates:
            self.register(template)

    def register(self, template: Template) -> None:
        """Add ``template``; names must be unique within the engine."""
        if template.name in self._templates:
            msg = f"template {template.name!r} is already registered"
            raise TemplateDefinitionError(msg)
        self._templates[template.name] = template

    def register_definition(self, definition: TemplateDefinition) -> None:
        """Compile and register a declarative definition."""
        self.register(DeclarativeTemplate(definition))

    def register_function(self, name: str, function: TemplateFunction) -> None:
        """Register a Python callable as a template."""
        self.register(FunctionTemplate(name, function))

    def get(self, name: str) -> Template:
        """Return the template registered as ``name``.

        Raises
        ------
        TemplateNotFoundError
            If no template has that name.

        """
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def names(self) -> tuple[str, ...]:
        """Return registered names in registration order."""
        return tuple(self._templates)

    def __contains__(self, name: object) -> bool:
        """Return whether ``name`` is registered."""
        return name in self._templates

    def render(
        self,
        template_name: str,
        config: cabc.Mapping[str, typ.Any] | None,
        *,
        release: Release | None = None,
    ) -> list[Document]:
        """Render ``template_name`` against ``config``.

        Parameters
        ----------
        template_name
            Registered template name.
        config
            Configuration mapping; ``None`` is treated as empty.
        release
            Release metadata; defaults to ``Release()``.

        Returns
        -------
        list[Document]
            Zero or more rendered documents.

        Raises
        ------
        TemplateNotFoundError
            If ``template_name`` is not registered.
        MalformedConfigurationError
            If ``config`` is not a mapping or violates a template expectation.

        """
        template = self.get(template_name)
        values = {} if config is None else config
        if not isinstance(values, cabc.Mapping):
            raise MalformedConfigurationError("", "mapping", describe_type(values))
        documents = template.render(values, release or Release())
        log_debug(
            logger, "Rendered %s into %d document(s)", template_name, len(documents)
        )
        return documents


__all__ = [
    "DeclarativeTemplate",
    "Document",
    "FunctionTemplate",
    "Template",
    "TemplateEngine",
    "TemplateFunction",
]
