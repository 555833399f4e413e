"""Suite execution with per-case isolation.

Each case composes its own configuration, renders fresh documents and
evaluates its assertions; nothing is shared between cases, so cases run
concurrently on a thread pool. Results are always reported in declaration
order regardless of completion order.

The runner depends only on a ``Renderer`` and an ``Evaluator``; the default
pair is a ``TemplateEngine`` and ``chartharness.assertions.evaluate``.

Usage
-----
>>> from chartharness.suite import SuiteRunner, load_suite
>>> from chartharness.templates import default_engine
>>> runner = SuiteRunner(default_engine())
>>> result = runner.run(load_suite("examples/telemetry-suite.yaml"))
>>> result.passed
True

"""

from __future__ import annotations

import collections.abc as cabc
import concurrent.futures as cf
import dataclasses as dc
import typing as typ

from chartharness.assertions import AssertionResult, evaluate
from chartharness.errors import PathSyntaxError, RenderError
from chartharness.logging import get_logger, log_debug, log_info, log_warning
from chartharness.values import compose_values

if typ.TYPE_CHECKING:
    from chartharness.assertions import Assertion
    from chartharness.suite.models import Case, Suite
    from chartharness.templates import Document, Release

logger = get_logger(__name__)


class Renderer(typ.Protocol):
    """Capability that renders a named template."""

    def render(
        self,
        template_name: str,
        config: cabc.Mapping[str, typ.Any] | None,
        *,
        release: Release | None = None,
    ) -> list[Document]: ...


class Evaluator(typ.Protocol):
    """Capability that evaluates assertions against documents."""

    def __call__(
        self, documents: cabc.Sequence[Document], assertions: cabc.Iterable[Assertion]
    ) -> list[AssertionResult]: ...


@dc.dataclass(frozen=True, slots=True)
class CaseResult:
    """Outcome of one case.

    Attributes
    ----------
    name
        Case name.
    assertion_results
        Results in assertion order; empty when rendering failed.
    error
        Render failure message, when rendering failed.
    error_code
        Machine-readable render failure code, when rendering failed.
    document_count
        Number of documents rendered.

    """

    name: str
    assertion_results: tuple[AssertionResult, ...] = ()
    error: str | None = None
    error_code: str | None = None
    document_count: int = 0

    @property
    def passed(self) -> bool:
        """Return ``True`` when rendering succeeded and every assertion held."""
        return self.error is None and all(r.passed for r in self.assertion_results)

    @property
    def failures(self) -> tuple[AssertionResult, ...]:
        """Return the failed assertion results."""
        return tuple(r for r in self.assertion_results if not r.passed)


@dc.dataclass(frozen=True, slots=True)
class SuiteResult:
    """Outcome of a suite, with case results in declaration order."""

    name: str
    case_results: tuple[CaseResult, ...] = ()

    @property
    def passed(self) -> bool:
        """Return ``True`` when the suite is green."""
        return all(case.passed for case in self.case_results)

    @property
    def failed_cases(self) -> tuple[CaseResult, ...]:
        """Return the cases that failed or errored."""
        return tuple(case for case in self.case_results if not case.passed)

    @property
    def assertion_count(self) -> int:
        """Return the number of evaluated assertions."""
        return sum(len(case.assertion_results) for case in self.case_results)


class SuiteRunner:
    """Run suites against an injected renderer and evaluator."""

    def __init__(
        self,
        renderer: Renderer,
        evaluator: Evaluator = evaluate,
        *,
        max_workers: int | None = None,
        release: Release | None = None,
    ) -> None:
        """Store the capability pair, the worker limit and the default release."""
        self._renderer = renderer
        self._evaluator = evaluator
        self._max_workers = max_workers
        self._release = release

    def render_case(self, suite: Suite, case: Case) -> list[Document]:
        """Compose the case configuration and render its templates in order.

        Raises
        ------
        RenderError
            If a template is unknown or rejects the configuration.

        """
        values = compose_values(suite.values, case.values, case.set)
        release = suite.release_for(case, self._release)
        documents: list[Document] = []
        for template_name in suite.templates_for(case):
            documents.extend(
                self._renderer.render(template_name, values, release=release)
            )
        return documents

    def run_case(self, suite: Suite, case: Case) -> CaseResult:
        """Render and evaluate one case; render failures fail only this case."""
        try:
            documents = self.render_case(suite, case)
        except (RenderError, PathSyntaxError) as exc:
            log_warning(
                logger,
                "Case %r in suite %r failed to render: %s",
                case.name,
                suite.name,
                exc,
            )
            return CaseResult(
                name=case.name,
                error=str(exc),
                error_code=getattr(exc, "code", "path_syntax_error"),
            )
        results = self._evaluator(documents, case.asserts)
        log_debug(
            logger, "Case %r rendered %d document(s)", case.name, len(documents)
        )
        return CaseResult(
            name=case.name,
            assertion_results=tuple(results),
            document_count=len(documents),
        )

    def run(self, suite: Suite) -> SuiteResult:
        """Run every case of ``suite`` and collect results in declared order."""
        if self._max_workers == 1 or len(suite.cases) <= 1:
            case_results = [self.run_case(suite, case) for case in suite.cases]
        else:
            with cf.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                case_results = list(
                    executor.map(lambda case: self.run_case(suite, case), suite.cases)
                )
        result = SuiteResult(name=suite.name, case_results=tuple(case_results))
        log_info(
            logger,
            "Suite %r: %d/%d case(s) passed",
            suite.name,
            len(case_results) - len(result.failed_cases),
            len(case_results),
        )
        return result

    def run_suites(self, suites: cabc.Iterable[Suite]) -> list[SuiteResult]:
        """Run ``suites`` one after another, returning results in order."""
        return [self.run(suite) for suite in suites]


__all__ = ["CaseResult", "Evaluator", "Renderer", "SuiteResult", "SuiteRunner"]
