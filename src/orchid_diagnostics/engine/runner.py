"""Sequential check execution with break-on-failure policy."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Protocol, runtime_checkable
from uuid import uuid4

from orchid_diagnostics.engine.check import Check
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.result import Outcome, Result, classify_result, coerce_result
from orchid_diagnostics.errors import DuplicateCheckError, InvalidCheckTypeError
from orchid_diagnostics.observability.logging import diagnostics_scope
from orchid_diagnostics.observability.metrics import MetricsRecorder, get_metrics_recorder

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Policy applied to one run."""

    break_on_failure: bool = False


class RunState(str, Enum):
    """Lifecycle of a runner."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED_EARLY = "stopped_early"


@runtime_checkable
class Reporter(Protocol):
    """Observer notified about run progress.

    Reporters are presentation only: they must not mutate checks or results and
    have no influence on control flow.
    """

    def on_start(self, checks: Sequence[Check], config: RunConfig) -> None: ...

    def on_check_start(self, check: Check) -> None: ...

    def on_check_finish(self, check: Check, result: Result) -> None: ...

    def on_stop(self, results: ResultCollection) -> None: ...

    def on_finish(self, results: ResultCollection) -> None: ...


class BaseReporter:
    """Reporter with no-op notifications; subclasses override what they need."""

    def on_start(self, checks: Sequence[Check], config: RunConfig) -> None:
        del checks, config

    def on_check_start(self, check: Check) -> None:
        del check

    def on_check_finish(self, check: Check, result: Result) -> None:
        del check, result

    def on_stop(self, results: ResultCollection) -> None:
        del results

    def on_finish(self, results: ResultCollection) -> None:
        del results


class Runner:
    """Executes checks strictly in the order they were added.

    Example usage::

        runner = Runner(config=RunConfig(break_on_failure=True))
        runner.add_checks(resolver.resolve_all(config))
        runner.add_reporter(BasicConsoleReporter(sys.stdout))

        results = runner.run()
        sys.exit(exit_code(results))
    """

    def __init__(
        self,
        checks: Iterable[Check] = (),
        *,
        config: RunConfig | None = None,
        reporters: Iterable[Reporter] = (),
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._checks: list[Check] = []
        self._reporters: list[Reporter] = []
        self._config = config or RunConfig()
        self._metrics = metrics
        self._state = RunState.IDLE
        self.add_checks(checks)
        for reporter in reporters:
            self.add_reporter(reporter)

    @property
    def checks(self) -> tuple[Check, ...]:
        return tuple(self._checks)

    @property
    def reporters(self) -> tuple[Reporter, ...]:
        return tuple(self._reporters)

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def config(self) -> RunConfig:
        return self._config

    @config.setter
    def config(self, config: RunConfig) -> None:
        self._ensure_not_running()
        self._config = config

    def add_check(self, check: Check) -> None:
        """Append a check; the order of addition is the order of execution.

        Raises:
            InvalidCheckTypeError: If ``check`` is a class or does not satisfy :class:`Check`.
            DuplicateCheckError: If this very instance was already added.
        """
        self._ensure_not_running()
        if inspect.isclass(check) or not isinstance(check, Check):
            raise InvalidCheckTypeError(check)
        if not check.label:
            raise ValueError(f"Check {check!r} has an empty label")
        if any(existing is check for existing in self._checks):
            raise DuplicateCheckError(check.label)
        self._checks.append(check)

    def add_checks(self, checks: Iterable[Check]) -> None:
        for check in checks:
            self.add_check(check)

    def add_reporter(self, reporter: Reporter) -> None:
        if not isinstance(reporter, Reporter):
            raise TypeError(f"{type(reporter).__name__} does not implement the Reporter protocol")
        self._reporters.append(reporter)

    def run(self) -> ResultCollection:
        """Run all checks and return their results.

        Exceptions raised by a check are recorded as failures. With
        ``break_on_failure`` set, the first failure ends the run and the remaining
        checks are neither executed nor present in the returned collection.
        """
        self._ensure_not_running()
        self._state = RunState.RUNNING
        config = self._config
        results = ResultCollection()
        run_id = uuid4().hex
        started = perf_counter()

        with diagnostics_scope(run_id=run_id):
            logger.info(
                "Starting diagnostics run",
                extra={"checks": len(self._checks), "break_on_failure": config.break_on_failure},
            )
            try:
                self._notify("on_start", self.checks, config)

                for check in self._checks:
                    result = self._run_check(check)
                    results.record(check, result)

                    if config.break_on_failure and classify_result(result) is Outcome.FAILURE:
                        logger.warning(
                            "Stopping diagnostics run after failed check",
                            extra={"check": check.label, "executed": len(results)},
                        )
                        self._state = RunState.STOPPED_EARLY
                        self._notify("on_stop", results)
                        break
                else:
                    self._state = RunState.COMPLETED
            except BaseException:
                self._state = RunState.IDLE
                raise
            finally:
                results.seal()

            self._notify("on_finish", results)
            duration = perf_counter() - started
            self._metrics_recorder().observe_run(
                state=self._state.value,
                duration_seconds=duration,
                executed=len(results),
            )
            logger.info(
                "Finished diagnostics run",
                extra={
                    "state": self._state.value,
                    "executed": len(results),
                    "failures": results.failure_count,
                    "duration_ms": duration * 1000,
                },
            )
        return results

    def _run_check(self, check: Check) -> Result:
        label = check.label
        with diagnostics_scope(check=label):
            self._notify("on_check_start", check)
            started = perf_counter()
            try:
                result = coerce_result(check.execute())
            except Exception as exc:
                logger.exception("Check raised an exception", extra={"check": label})
                result = Result.failure(str(exc) or type(exc).__name__, {"error_type": type(exc).__name__})
            duration = perf_counter() - started

            outcome = classify_result(result)
            self._metrics_recorder().observe_check(
                check=label,
                outcome=outcome.value,
                duration_seconds=duration,
            )
            logger.debug(
                "Check finished",
                extra={"outcome": outcome.value, "duration_ms": duration * 1000},
            )
            self._notify("on_check_finish", check, result)
        return result

    def _notify(self, event: str, *args: object) -> None:
        for reporter in self._reporters:
            getattr(reporter, event)(*args)

    def _ensure_not_running(self) -> None:
        if self._state is RunState.RUNNING:
            raise RuntimeError("Runner is executing checks; its configuration cannot change")

    def _metrics_recorder(self) -> MetricsRecorder:
        return get_metrics_recorder() if self._metrics is None else self._metrics
