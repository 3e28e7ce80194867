"""Tests for the sequential runner."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from orchid_diagnostics.engine.check import AbstractCheck, Callback, Check
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.result import Outcome, Result
from orchid_diagnostics.engine.runner import BaseReporter, Reporter, RunConfig, Runner, RunState
from orchid_diagnostics.errors import DuplicateCheckError, InvalidCheckTypeError


class Recorded(AbstractCheck):
    def __init__(self, label: str, value: Any, calls: list[str]) -> None:
        self.set_label(label)
        self._value = value
        self._calls = calls

    def execute(self) -> Any:
        self._calls.append(self.label)
        if isinstance(self._value, Exception):
            raise self._value
        return self._value


class EventReporter(BaseReporter):
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def on_start(self, checks: Sequence[Check], config: RunConfig) -> None:
        self.events.append(("start", (len(checks), config.break_on_failure)))

    def on_check_start(self, check: Check) -> None:
        self.events.append(("check_start", check.label))

    def on_check_finish(self, check: Check, result: Result) -> None:
        self.events.append(("check_finish", (check.label, result.outcome)))

    def on_stop(self, results: ResultCollection) -> None:
        self.events.append(("stop", len(results)))

    def on_finish(self, results: ResultCollection) -> None:
        self.events.append(("finish", len(results)))


class RecordingMetrics:
    def __init__(self) -> None:
        self.checks: list[tuple[str, str]] = []
        self.runs: list[tuple[str, int]] = []

    def observe_check(self, *, check: str, outcome: str, duration_seconds: float) -> None:
        assert duration_seconds >= 0
        self.checks.append((check, outcome))

    def observe_run(self, *, state: str, duration_seconds: float, executed: int) -> None:
        assert duration_seconds >= 0
        self.runs.append((state, executed))


def _checks(calls: list[str], *values: Any) -> list[Recorded]:
    return [Recorded(f"check {index}", value, calls) for index, value in enumerate(values)]


class TestRunOrder:
    def test_runs_all_checks_in_order(self) -> None:
        calls: list[str] = []
        checks = _checks(calls, True, Result.warning("slow"), False, None)
        runner = Runner(checks)

        results = runner.run()

        assert calls == ["check 0", "check 1", "check 2", "check 3"]
        assert list(results) == checks
        assert [results[check].outcome for check in checks] == [
            Outcome.SUCCESS,
            Outcome.WARNING,
            Outcome.FAILURE,
            Outcome.UNKNOWN,
        ]
        assert runner.state is RunState.COMPLETED
        assert results.sealed

    def test_failure_does_not_stop_by_default(self) -> None:
        calls: list[str] = []
        results = Runner(_checks(calls, False, True)).run()

        assert len(results) == 2
        assert results.failure_count == 1

    def test_break_on_failure_stops_after_first_failure(self) -> None:
        calls: list[str] = []
        checks = _checks(calls, True, False, True)
        runner = Runner(checks, config=RunConfig(break_on_failure=True))

        results = runner.run()

        assert calls == ["check 0", "check 1"]
        assert len(results) == 2
        assert checks[2] not in results
        assert runner.state is RunState.STOPPED_EARLY

    def test_warnings_do_not_trigger_break(self) -> None:
        calls: list[str] = []
        runner = Runner(_checks(calls, "careful", True), config=RunConfig(break_on_failure=True))

        results = runner.run()

        assert len(results) == 2
        assert runner.state is RunState.COMPLETED

    def test_exception_becomes_failure(self) -> None:
        calls: list[str] = []
        checks = _checks(calls, RuntimeError("disk exploded"), True)

        results = Runner(checks).run()

        failed = results[checks[0]]
        assert failed.outcome is Outcome.FAILURE
        assert failed.message == "disk exploded"
        assert failed.data == {"error_type": "RuntimeError"}
        assert results[checks[1]].outcome is Outcome.SUCCESS

    def test_exception_without_message_uses_type_name(self) -> None:
        calls: list[str] = []
        checks = _checks(calls, KeyError())

        result = Runner(checks).run()[checks[0]]
        assert result.message == "KeyError"

    def test_invalid_result_outcome_becomes_failure(self) -> None:
        calls: list[str] = []
        checks = [Callback(lambda: Result("bogus")), *_checks(calls, True)]

        results = Runner(checks).run()

        assert results[checks[0]].outcome is Outcome.FAILURE
        assert results[checks[0]].data == {"error_type": "ValueError"}
        assert "bogus" in results[checks[0]].message
        assert calls == ["check 0"]
        assert results.failure_count == 1

    def test_exception_triggers_break(self) -> None:
        calls: list[str] = []
        runner = Runner(_checks(calls, ValueError("x"), True), config=RunConfig(break_on_failure=True))

        assert len(runner.run()) == 1
        assert calls == ["check 0"]

    def test_empty_runner(self) -> None:
        runner = Runner()
        results = runner.run()

        assert len(results) == 0
        assert results.passed
        assert runner.state is RunState.COMPLETED


class TestReporters:
    def test_event_sequence(self) -> None:
        calls: list[str] = []
        reporter = EventReporter()
        runner = Runner(_checks(calls, True, False), reporters=[reporter])

        runner.run()

        assert reporter.events == [
            ("start", (2, False)),
            ("check_start", "check 0"),
            ("check_finish", ("check 0", Outcome.SUCCESS)),
            ("check_start", "check 1"),
            ("check_finish", ("check 1", Outcome.FAILURE)),
            ("finish", 2),
        ]

    def test_stop_is_reported_before_finish(self) -> None:
        calls: list[str] = []
        reporter = EventReporter()
        runner = Runner(
            _checks(calls, False, True),
            config=RunConfig(break_on_failure=True),
            reporters=[reporter],
        )

        runner.run()

        assert reporter.events[-2:] == [("stop", 1), ("finish", 1)]

    def test_every_reporter_is_notified(self) -> None:
        calls: list[str] = []
        first, second = EventReporter(), EventReporter()
        runner = Runner(_checks(calls, True))
        runner.add_reporter(first)
        runner.add_reporter(second)

        runner.run()

        assert first.events == second.events
        assert runner.reporters == (first, second)
        assert isinstance(first, Reporter)

    def test_rejects_non_reporter(self) -> None:
        with pytest.raises(TypeError, match="Reporter"):
            Runner().add_reporter(object())  # type: ignore[arg-type]


class TestRunnerConfiguration:
    def test_rejects_check_classes(self) -> None:
        with pytest.raises(InvalidCheckTypeError):
            Runner().add_check(Callback)  # type: ignore[arg-type]

    def test_rejects_non_checks(self) -> None:
        with pytest.raises(InvalidCheckTypeError):
            Runner([object()])  # type: ignore[list-item]

    def test_rejects_empty_label(self) -> None:
        class Unnamed:
            label = ""

            def execute(self) -> bool:
                return True

        with pytest.raises(ValueError, match="empty label"):
            Runner().add_check(Unnamed())

    def test_rejects_the_same_instance_twice(self) -> None:
        calls: list[str] = []
        (check,) = _checks(calls, True)

        with pytest.raises(DuplicateCheckError, match="already added"):
            Runner([check, check])
        assert calls == []

    def test_duplicate_is_rejected_before_running(self) -> None:
        calls: list[str] = []
        runner = Runner(_checks(calls, True))

        with pytest.raises(ValueError):
            runner.add_check(runner.checks[0])

        assert len(runner.checks) == 1
        assert runner.state is RunState.IDLE
        assert len(runner.run()) == 1

    def test_config_can_be_replaced_between_runs(self) -> None:
        runner = Runner()
        runner.config = RunConfig(break_on_failure=True)
        assert runner.config.break_on_failure

    def test_configuration_is_locked_while_running(self) -> None:
        runner = Runner()
        errors: list[Exception] = []

        def mutate() -> bool:
            assert runner.state is RunState.RUNNING
            try:
                runner.add_check(Callback(lambda: True))
            except RuntimeError as exc:
                errors.append(exc)
            return True

        runner.add_check(Callback(mutate))
        results = runner.run()

        assert results.passed
        assert len(errors) == 1
        assert len(runner.checks) == 1

    def test_runner_can_run_again(self) -> None:
        calls: list[str] = []
        runner = Runner(_checks(calls, True))

        first = runner.run()
        second = runner.run()

        assert first is not second
        assert calls == ["check 0", "check 0"]


def test_metrics_are_observed() -> None:
    calls: list[str] = []
    metrics = RecordingMetrics()
    runner = Runner(
        _checks(calls, True, False, True),
        config=RunConfig(break_on_failure=True),
        metrics=metrics,
    )

    runner.run()

    assert metrics.checks == [("check 0", "success"), ("check 1", "failure")]
    assert metrics.runs == [("stopped_early", 2)]
