"""Unit tests for document path parsing and resolution."""

from __future__ import annotations

import pytest

from chartharness.errors import PathSyntaxError
from chartharness.paths import (
    ABSENT,
    IndexStep,
    KeyStep,
    Resolution,
    format_path,
    lookup,
    parse_path,
    resolve_path,
)

DOCUMENT = {
    "metadata": {"labels": {"app.kubernetes.io/name": "shop", "tier": None}},
    "spec": {"tracing": [{"randomSamplingPercentage": 10.0}], "empty": []},
}


class TestParsePath:
    """Tests for parse_path."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            pytest.param("", (), id="root"),
            pytest.param("kind", (KeyStep("kind"),), id="single-key"),
            pytest.param(
                "spec.tracing[0].randomSamplingPercentage",
                (
                    KeyStep("spec"),
                    KeyStep("tracing"),
                    IndexStep(0),
                    KeyStep("randomSamplingPercentage"),
                ),
                id="keys-and-index",
            ),
            pytest.param(
                'metadata.labels["app.kubernetes.io/name"]',
                (
                    KeyStep("metadata"),
                    KeyStep("labels"),
                    KeyStep("app.kubernetes.io/name"),
                ),
                id="double-quoted-key",
            ),
            pytest.param(
                "items[1][2]",
                (KeyStep("items"), IndexStep(1), IndexStep(2)),
                id="nested-index",
            ),
            pytest.param(
                "['a.b'].c", (KeyStep("a.b"), KeyStep("c")), id="single-quoted"
            ),
            pytest.param("[3]", (IndexStep(3),), id="leading-index"),
        ],
    )
    def test_parses_valid_paths(self, path: str, expected: tuple[object, ...]) -> None:
        """Valid paths parse into key and index steps."""
        assert parse_path(path) == expected, f"Unexpected steps for {path!r}"

    @pytest.mark.parametrize(
        "path",
        [
            pytest.param(".spec", id="leading-dot"),
            pytest.param("spec..kind", id="double-dot"),
            pytest.param("spec.", id="trailing-dot"),
            pytest.param("spec[x]", id="non-numeric-index"),
            pytest.param("spec[-1]", id="negative-index"),
            pytest.param("spec[0]kind", id="missing-separator"),
        ],
    )
    def test_rejects_malformed_paths(self, path: str) -> None:
        """Malformed paths raise PathSyntaxError naming the path."""
        with pytest.raises(PathSyntaxError) as excinfo:
            parse_path(path)
        assert excinfo.value.path == path, "Expected the raw path on the error"

    def test_path_syntax_error_is_value_error(self) -> None:
        """PathSyntaxError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Invalid path"):
            parse_path("a..b")

    def test_parsing_is_memoised(self) -> None:
        """Repeated parses return the same tuple object."""
        first = parse_path("spec.selector.matchLabels.app")
        second = parse_path("spec.selector.matchLabels.app")
        assert first is second, "Expected the cached parse to be reused"


class TestFormatPath:
    """Tests for format_path."""

    @pytest.mark.parametrize(
        "path",
        [
            "spec.tracing[0].randomSamplingPercentage",
            'metadata.labels["app.kubernetes.io/name"]',
            "items[2]",
            "",
        ],
    )
    def test_format_inverts_parse(self, path: str) -> None:
        """Formatting parsed steps yields the canonical path."""
        assert format_path(parse_path(path)) == path

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            pytest.param('say "hi"', """['say "hi"']""", id="double-quote"),
            pytest.param("it's", """["it's"]""", id="single-quote"),
            pytest.param("", '[""]', id="empty"),
        ],
    )
    def test_quoted_keys_parse_back(self, key: str, expected: str) -> None:
        """Keys needing quotes pick a quote character the key does not use."""
        steps = (KeyStep("data"), KeyStep(key))
        assert format_path(steps) == f"data{expected}"
        assert parse_path(format_path(steps)) == steps

    def test_key_with_both_quotes_cannot_be_formatted(self) -> None:
        """No path string can express a key holding both quote characters."""
        with pytest.raises(PathSyntaxError, match="both quote"):
            format_path((KeyStep("""a"b'c"""),))


class TestResolvePath:
    """Tests for resolve_path and lookup."""

    def test_resolves_nested_value(self) -> None:
        """A full path returns the node it addresses."""
        result = lookup(DOCUMENT, "spec.tracing[0].randomSamplingPercentage")
        assert result == Resolution(found=True, value=10.0)

    def test_resolves_quoted_key(self) -> None:
        """Quoted keys containing dots resolve as one key."""
        result = lookup(DOCUMENT, 'metadata.labels["app.kubernetes.io/name"]')
        assert result.value == "shop"

    def test_root_path_returns_tree(self) -> None:
        """The empty path resolves to the tree itself."""
        assert resolve_path(DOCUMENT, ()).value is DOCUMENT

    def test_explicit_null_is_found(self) -> None:
        """A key holding null is present, unlike a missing key."""
        assert lookup(DOCUMENT, "metadata.labels.tier") == Resolution(found=True)
        assert lookup(DOCUMENT, "metadata.labels.missing") is ABSENT

    @pytest.mark.parametrize(
        "path",
        [
            pytest.param("spec.selector", id="missing-key"),
            pytest.param("spec.tracing[5]", id="index-out-of-range"),
            pytest.param("spec.empty[0]", id="empty-sequence"),
            pytest.param("spec.tracing.name", id="key-on-sequence"),
            pytest.param("metadata[0]", id="index-on-mapping"),
            pytest.param(
                "spec.tracing[0].randomSamplingPercentage.value", id="into-scalar"
            ),
        ],
    )
    def test_unresolvable_paths_are_absent(self, path: str) -> None:
        """Resolution never raises for paths that do not exist."""
        assert lookup(DOCUMENT, path).found is False, f"{path} should be absent"
