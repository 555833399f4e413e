"""Command line for running suites and rendering templates.

Usage:
    chartharness test examples/telemetry-suite.yaml
    chartharness test suite.yaml --templates library.yaml --output json
    chartharness render istiolib.telemetry --set samplingPercentage=22.2
    chartharness schema build/suite.schema.json

Environment variables:
    CHARTHARNESS_LOG_LEVEL         - femtologging level (default: INFO)
    CHARTHARNESS_MAX_WORKERS       - worker threads for running cases
    CHARTHARNESS_RELEASE_NAME      - release name when a suite omits one
    CHARTHARNESS_RELEASE_NAMESPACE - release namespace when a suite omits one
"""

from __future__ import annotations

import collections.abc as cabc
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from chartharness import __version__
from chartharness.config import HarnessConfig
from chartharness.errors import (
    ChartHarnessError,
    RenderError,
    SuiteValidationError,
    TemplateDefinitionError,
)
from chartharness.logging import configure_logging, get_logger, log_warning
from chartharness.suite import (
    SuiteRunner,
    format_summary,
    load_suites,
    load_template_definitions,
    results_to_json,
    write_suite_schema,
)
from chartharness.templates import Release, TemplateEngine, default_engine
from chartharness.values import compose_values, deep_merge

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

app = App(
    name="chartharness",
    help="Unit-test library templates by rendering them through a harness.",
    version=__version__,
)


def _configure(config: HarnessConfig, log_level: str | None) -> None:
    level = log_level or config.log_level
    normalized, invalid = configure_logging(level)
    if invalid:
        log_warning(logger, "Invalid log level %r, using %s", level, normalized)


def build_engine(template_files: typ.Iterable[Path] = ()) -> TemplateEngine:
    """Return the built-in engine extended with definitions from files.

    Raises
    ------
    SuiteValidationError
        If a definitions file cannot be parsed.
    TemplateDefinitionError
        If a definition is invalid or its name is already registered.

    """
    engine = default_engine()
    for path in template_files:
        for definition in load_template_definitions(path):
            engine.register_definition(definition)
    return engine


def parse_set_argument(raw: str) -> tuple[str, typ.Any]:
    """Split ``KEY=VALUE`` and type the value as a YAML scalar.

    Examples
    --------
    >>> parse_set_argument("samplingPercentage=22.2")
    ('samplingPercentage', 22.2)

    """
    key, sep, value = raw.partition("=")
    if not sep or not key:
        msg = f"--set expects KEY=VALUE, got {raw!r}"
        raise ValueError(msg)
    try:
        parsed = YAML(typ="safe").load(value) if value else ""
    except YAMLError as exc:
        msg = f"--set value for {key} is not valid YAML: {exc}"
        raise ValueError(msg) from exc
    return key, parsed


def load_values_file(path: Path) -> dict[str, typ.Any]:
    """Read a Helm-style values file; an empty file yields no values."""
    try:
        loaded = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
    except YAMLError as exc:
        msg = f"{path}: failed to parse YAML: {exc}"
        raise ValueError(msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, cabc.Mapping):
        msg = f"{path}: expected a mapping at the top level"
        raise ValueError(msg)
    return deep_merge({}, loaded)


def _report_issues(header: str, exc: SuiteValidationError) -> None:
    print(header, file=sys.stderr)
    for issue in exc.issues:
        print(f"  - {issue}", file=sys.stderr)


@app.command(name="test")
def run_tests(
    suites: list[Path],
    /,
    *,
    templates: list[Path] | None = None,
    output: typ.Literal["text", "json"] = "text",
    max_workers: int | None = None,
    log_level: str | None = None,
) -> int:
    """Run suite files and print a report.

    Args:
        suites: Suite YAML files to run.
        templates: Extra template definition files to register.
        output: Report format.
        max_workers: Worker threads for running cases.
        log_level: femtologging level name.

    Returns:
        0 when every suite is green, 1 on failures, 2 on invalid input.

    """
    try:
        config = HarnessConfig.from_env()
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID
    _configure(config, log_level)

    try:
        engine = build_engine(templates or ())
        loaded = [suite for path in suites for suite in load_suites(path, engine)]
    except SuiteValidationError as exc:
        _report_issues("Suite validation failed:", exc)
        return EXIT_INVALID
    except TemplateDefinitionError as exc:
        print(f"Template definition invalid: {exc}", file=sys.stderr)
        return EXIT_INVALID

    runner = SuiteRunner(
        engine,
        max_workers=max_workers or config.max_workers,
        release=config.release,
    )
    results = runner.run_suites(loaded)

    if output == "json":
        print(results_to_json(results).decode("utf-8"))
    else:
        print(format_summary(results))
    return EXIT_OK if all(result.passed for result in results) else EXIT_FAILED


@app.command
def render(
    template: str,
    /,
    *,
    values: Path | None = None,
    set_values: typ.Annotated[list[str] | None, Parameter(name="--set")] = None,
    templates: list[Path] | None = None,
    release_name: str | None = None,
    namespace: str | None = None,
    log_level: str | None = None,
) -> int:
    """Render one template and print the documents as a YAML stream.

    Args:
        template: Registered template name.
        values: YAML values file.
        set_values: KEY=VALUE overrides applied after the values file.
        templates: Extra template definition files to register.
        release_name: Release name.
        namespace: Release namespace.
        log_level: femtologging level name.

    Returns:
        0 on success, 1 when rendering fails, 2 on invalid input.

    """
    try:
        config = HarnessConfig.from_env()
        _configure(config, log_level)
        engine = build_engine(templates or ())
        base = {} if values is None else load_values_file(values)
        overrides = dict(parse_set_argument(raw) for raw in set_values or ())
        config_values = compose_values(base, None, overrides)
    except SuiteValidationError as exc:
        _report_issues("Template definitions invalid:", exc)
        return EXIT_INVALID
    except (ChartHarnessError, OSError, ValueError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID

    release = Release(
        name=release_name or config.release_name,
        namespace=namespace or config.release_namespace,
    )
    try:
        documents = engine.render(template, config_values, release=release)
    except RenderError as exc:
        print(f"Render failed: {exc}", file=sys.stderr)
        return EXIT_FAILED

    yaml = YAML()
    yaml.default_flow_style = False
    yaml.explicit_start = True
    yaml.dump_all(documents, sys.stdout)
    return EXIT_OK


@app.command
def schema(out: Path, /) -> int:
    """Write the JSON Schema for suite files.

    Args:
        out: Destination path.

    Returns:
        0 on success.

    """
    path = write_suite_schema(out)
    print(f"wrote suite schema to {path}")
    return EXIT_OK


def main() -> int:
    """Entry point for the CLI."""
    return app()


if __name__ == "__main__":
    sys.exit(main())
