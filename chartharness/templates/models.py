"""Typed template definition structures."""

from __future__ import annotations

import msgspec


class Release(msgspec.Struct, kw_only=True, frozen=True):
    """Release metadata a harness supplies to library templates.

    Attributes
    ----------
    name
        Release name, ``release-name`` by default as with ``helm template``.
    namespace
        Target namespace of the release.

    """

    name: str = "release-name"
    namespace: str = "default"


class DocumentDefinition(msgspec.Struct, kw_only=True, frozen=True):
    """One manifest a template may emit.

    Attributes
    ----------
    source
        Jinja2 template producing the YAML text of the document. See
        ``chartharness.templates.rendering`` for the variables and filters
        it may use.
    when
        Optional configuration path gating the whole document on the raw
        presence of that key.

    """

    source: str
    when: str | None = None


class TemplateDefinition(msgspec.Struct, kw_only=True, frozen=True):
    """Declarative template: a name plus the documents it renders.

    Attributes
    ----------
    name
        Registry name, conventionally ``<library>.<template>``.
    description
        Optional free-form description.
    documents
        Documents emitted in order when rendering.

    """

    name: str
    documents: tuple[DocumentDefinition, ...]
    description: str | None = None


class TemplateLibrary(msgspec.Struct, kw_only=True, frozen=True):
    """Top-level structure of a template definitions file."""

    templates: tuple[TemplateDefinition, ...]


__all__ = [
    "DocumentDefinition",
    "Release",
    "TemplateDefinition",
    "TemplateLibrary",
]
