"""Tests for console reporters."""

from __future__ import annotations

from io import StringIO

from orchid_diagnostics.engine.check import Callback
from orchid_diagnostics.engine.result import Result
from orchid_diagnostics.engine.runner import RunConfig, Runner
from orchid_diagnostics.reporting.console import BasicConsoleReporter, VerboseConsoleReporter


def _check(label: str, value: object) -> Callback:
    check = Callback(lambda: value)
    check.set_label(label)
    return check


def _run(reporter: BasicConsoleReporter, *checks: Callback, stop: bool = False) -> list[str]:
    Runner(checks, config=RunConfig(break_on_failure=stop), reporters=[reporter]).run()
    stream = reporter._stream
    assert isinstance(stream, StringIO)
    return stream.getvalue().splitlines()


class TestBasicConsoleReporter:
    def test_all_passing_run(self) -> None:
        lines = _run(
            BasicConsoleReporter(StringIO()),
            _check("System: disk", True),
            _check("System: python", Result.success("3.12")),
        )

        assert lines == [
            "Starting diagnostics: 2 check(s)",
            "  OK   System: disk",
            "  OK   System: python",
            "",
            "OK (2 diagnostic check(s))",
        ]

    def test_mixed_outcomes_summary(self) -> None:
        lines = _run(
            BasicConsoleReporter(StringIO()),
            _check("a", True),
            _check("b", "cache cold"),
            _check("c", False),
            _check("d", Result.skip()),
            _check("e", None),
        )

        assert lines[1:6] == ["  OK   a", "  WARN b", "  FAIL c", "  SKIP d", "  ???? e"]
        assert lines[-1] == "FAILED (1 success, 1 warning, 1 failure, 1 skip, 1 unknown)"

    def test_warnings_only_pass(self) -> None:
        lines = _run(BasicConsoleReporter(StringIO()), _check("a", "hmm"))
        assert lines[-1] == "PASSED (1 warning)"

    def test_messages_are_not_printed(self) -> None:
        lines = _run(BasicConsoleReporter(StringIO()), _check("a", Result.failure("disk full")))
        assert not any("disk full" in line for line in lines)

    def test_stop_reports_skipped_checks(self) -> None:
        lines = _run(
            BasicConsoleReporter(StringIO()),
            _check("a", False),
            _check("b", True),
            _check("c", True),
            stop=True,
        )

        assert lines[0] == "Starting diagnostics: 3 check(s) (stopping on first failure)"
        assert "Diagnostics stopped after a failure; 2 check(s) not run." in lines
        assert lines[-1] == "FAILED (1 failure)"

    def test_color_wraps_symbols(self) -> None:
        lines = _run(BasicConsoleReporter(StringIO(), color=True), _check("a", True))
        assert lines[1] == "  \033[92mOK  \033[0m a"


class TestVerboseConsoleReporter:
    def test_prints_messages(self) -> None:
        lines = _run(
            VerboseConsoleReporter(StringIO()),
            _check("System: disk", Result.failure("Remaining space is 1 MiB")),
            _check("System: python", True),
        )

        assert lines[1] == "  FAIL System: disk: Remaining space is 1 MiB"
        assert lines[2] == "  OK   System: python"
        assert not any(line.startswith("  ...") for line in lines)

    def test_debug_prints_progress_and_data(self) -> None:
        lines = _run(
            VerboseConsoleReporter(StringIO(), debug=True),
            _check("disk", Result.warning("low", {"free": 10})),
        )

        assert lines[1] == "  ...  disk"
        assert lines[2] == "  WARN disk: low"
        assert lines[3:6] == ["         {", '           "free": 10', "         }"]

    def test_data_hidden_without_debug(self) -> None:
        lines = _run(
            VerboseConsoleReporter(StringIO()),
            _check("disk", Result.warning("low", {"free": 10})),
        )
        assert not any('"free"' in line for line in lines)
