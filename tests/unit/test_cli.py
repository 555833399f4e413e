"""Unit tests for the chartharness command line."""
# ruff: noqa: D103

from __future__ import annotations

import json
import subprocess
import sys
import typing as typ

import msgspec
import pytest
from ruamel.yaml import YAML

from chartharness import __version__, cli

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests from reconfiguring femtologging globally."""
    monkeypatch.setattr(
        cli, "configure_logging", lambda level, **_: (level.upper(), False)
    )
    for name in (
        "CHARTHARNESS_MAX_WORKERS",
        "CHARTHARNESS_RELEASE_NAME",
        "CHARTHARNESS_RELEASE_NAMESPACE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestCliStructure:
    """Tests for CLI structure and subcommands."""

    def test_app_name_and_version(self) -> None:
        assert cli.app.name == ("chartharness",)
        assert cli.app.version == __version__

    @pytest.mark.parametrize("command", ["test", "render", "schema"])
    def test_app_has_command(self, command: str) -> None:
        assert command in cli.app._commands


class TestParseSetArgument:
    """Tests for --set parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            pytest.param(
                "samplingPercentage=22.2", ("samplingPercentage", 22.2), id="float"
            ),
            pytest.param("selector.app=demo", ("selector.app", "demo"), id="string"),
            pytest.param("enabled=true", ("enabled", True), id="bool"),
            pytest.param("a=", ("a", ""), id="empty"),
            pytest.param("a=x=y", ("a", "x=y"), id="equals-in-value"),
            pytest.param("a=null", ("a", None), id="null"),
        ],
    )
    def test_parses(self, raw: str, expected: tuple[str, object]) -> None:
        assert cli.parse_set_argument(raw) == expected

    @pytest.mark.parametrize("raw", ["novalue", "=1"])
    def test_rejects(self, raw: str) -> None:
        with pytest.raises(ValueError, match="KEY=VALUE"):
            cli.parse_set_argument(raw)


class TestTestCommand:
    """Tests for `chartharness test`."""

    def test_passing_suite(
        self, examples_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.run_tests([examples_dir / "telemetry-suite.yaml"])
        out = capsys.readouterr().out
        assert code == cli.EXIT_OK, out
        assert "PASS  renders defaults without a selector" in out
        assert "Suites:     1 passed, 0 failed, 1 total" in out

    def test_extra_templates(
        self, examples_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.run_tests(
            [examples_dir / "workload-suite.yaml"],
            templates=[examples_dir / "workload-templates.yaml"],
        )
        assert code == cli.EXIT_OK, capsys.readouterr().out

    def test_failing_suite(
        self, suites_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.run_tests([suites_dir / "telemetry-failing.yaml"])
        out = capsys.readouterr().out
        assert code == cli.EXIT_FAILED
        assert "FAIL  wrong sampling expectation" in out
        assert "ERROR sampling given as text" in out
        assert "PASS  defaults still render" in out

    def test_json_output(
        self, suites_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.run_tests([suites_dir / "telemetry-failing.yaml"], output="json")
        data = msgspec.json.decode(capsys.readouterr().out)
        assert code == cli.EXIT_FAILED
        codes = [
            assertion["code"]
            for assertion in data["suites"][0]["cases"][0]["assertions"]
        ]
        assert codes == ["assertion_mismatch", None, "path_resolution_ambiguous"]

    def test_invalid_suite(
        self, suites_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.run_tests([suites_dir / "unknown-template.yaml"])
        err = capsys.readouterr().err
        assert code == cli.EXIT_INVALID
        assert "unknown template 'istiolib.sidecar'" in err

    def test_invalid_environment(
        self,
        suites_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("CHARTHARNESS_MAX_WORKERS", "zero")
        code = cli.run_tests([suites_dir / "multiple.yaml"])
        assert code == cli.EXIT_INVALID
        assert "CHARTHARNESS_MAX_WORKERS" in capsys.readouterr().err

    def test_duplicate_template_definition(
        self, templates_dir: Path, suites_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        gateway = templates_dir / "gateway.yaml"
        code = cli.run_tests(
            [suites_dir / "multiple.yaml"], templates=[gateway, gateway]
        )
        assert code == cli.EXIT_INVALID
        assert "already registered" in capsys.readouterr().err


def _render_documents(capsys: pytest.CaptureFixture[str]) -> list[typ.Any]:
    return list(YAML(typ="safe").load_all(capsys.readouterr().out))


class TestRenderCommand:
    """Tests for `chartharness render`."""

    def test_renders_defaults(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.render("istiolib.telemetry") == cli.EXIT_OK
        (document,) = _render_documents(capsys)
        assert document["spec"]["tracing"] == [{"randomSamplingPercentage": 10.0}]
        assert document["metadata"]["name"] == "release-name"

    def test_values_file_and_set(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        values = tmp_path / "values.yaml"
        values.write_text(
            "samplingPercentage: 5\nselector:\n  app: demo\n", encoding="utf-8"
        )
        code = cli.render(
            "istiolib.telemetry",
            values=values,
            set_values=["samplingPercentage=22.2", "selector.tier=web"],
            release_name="mesh",
            namespace="istio-system",
        )
        assert code == cli.EXIT_OK
        (document,) = _render_documents(capsys)
        assert document["metadata"] == {"name": "mesh", "namespace": "istio-system"}
        assert document["spec"]["selector"]["matchLabels"] == {
            "app": "demo",
            "tier": "web",
        }
        assert document["spec"]["tracing"][0]["randomSamplingPercentage"] == 22.2

    def test_multi_document_template(
        self, templates_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = cli.render(
            "mesh.gateway",
            templates=[templates_dir / "gateway.yaml"],
            set_values=["hostname=shop.example.com", "routing.enabled=true"],
        )
        assert code == cli.EXIT_OK
        kinds = [document["kind"] for document in _render_documents(capsys)]
        assert kinds == ["Gateway", "VirtualService"]

    def test_render_failure(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.render("istiolib.telemetry", set_values=["samplingPercentage=high"])
        assert code == cli.EXIT_FAILED
        assert "Render failed: Malformed configuration" in capsys.readouterr().err

    def test_unknown_template(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.render("istiolib.sidecar") == cli.EXIT_FAILED
        assert "Template not found" in capsys.readouterr().err

    def test_bad_set_argument(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.render("istiolib.telemetry", set_values=["oops"]) == cli.EXIT_INVALID
        assert "Invalid input" in capsys.readouterr().err


def test_schema_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "schema.json"
    assert cli.schema(out) == cli.EXIT_OK
    assert "wrote suite schema" in capsys.readouterr().out
    assert "$defs" in json.loads(out.read_text(encoding="utf-8"))


def test_module_entry_point(examples_dir: Path, tmp_path: Path) -> None:
    result = subprocess.run(  # noqa: S603 - fixed argv
        [
            sys.executable,
            "-m",
            "chartharness.cli",
            "test",
            str(examples_dir / "telemetry-suite.yaml"),
        ],
        cwd=tmp_path,
        text=True,
        capture_output=True,
        check=False,
    )
    assert result.returncode == 0, result.stderr
    assert "Cases:      4 passed, 0 failed, 4 total" in result.stdout
