"""Console reporters printing run progress to a text stream."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from typing import TextIO

from orchid_diagnostics.engine.check import Check
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.result import Outcome, Result, classify_result
from orchid_diagnostics.engine.runner import BaseReporter, RunConfig

SYMBOLS = {
    Outcome.SUCCESS: "OK",
    Outcome.WARNING: "WARN",
    Outcome.FAILURE: "FAIL",
    Outcome.SKIP: "SKIP",
    Outcome.UNKNOWN: "????",
}

_COLORS = {
    Outcome.SUCCESS: "\033[92m",
    Outcome.WARNING: "\033[93m",
    Outcome.FAILURE: "\033[91m",
    Outcome.SKIP: "\033[94m",
    Outcome.UNKNOWN: "\033[95m",
}
_RESET = "\033[0m"
_SYMBOL_WIDTH = max(len(symbol) for symbol in SYMBOLS.values())


class BasicConsoleReporter(BaseReporter):
    """Prints one line per check with a terse status symbol, then a summary."""

    def __init__(self, stream: TextIO | None = None, *, color: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._color = color
        self._total = 0
        self._stopped = False

    def on_start(self, checks: Sequence[Check], config: RunConfig) -> None:
        self._total = len(checks)
        self._stopped = False
        suffix = " (stopping on first failure)" if config.break_on_failure else ""
        self._write(f"Starting diagnostics: {self._total} check(s){suffix}")

    def on_check_finish(self, check: Check, result: Result) -> None:
        self._write(f"  {self._symbol(classify_result(result))} {check.label}")

    def on_stop(self, results: ResultCollection) -> None:
        self._stopped = True
        skipped = self._total - len(results)
        self._write(f"Diagnostics stopped after a failure; {skipped} check(s) not run.")

    def on_finish(self, results: ResultCollection) -> None:
        self._write("")
        self._write(self._summary(results))

    def _summary(self, results: ResultCollection) -> str:
        if results.passed and results.warning_count == 0 and results.unknown_count == 0:
            return f"OK ({len(results)} diagnostic check(s))"
        parts = [
            f"{results.count(outcome)} {outcome.value}"
            for outcome in Outcome
            if results.count(outcome)
        ]
        verdict = "PASSED" if results.passed else "FAILED"
        return f"{verdict} ({', '.join(parts)})"

    def _symbol(self, outcome: Outcome) -> str:
        symbol = SYMBOLS[outcome].ljust(_SYMBOL_WIDTH)
        if self._color:
            return f"{_COLORS[outcome]}{symbol}{_RESET}"
        return symbol

    def _write(self, line: str) -> None:
        self._stream.write(f"{line}\n")
        self._stream.flush()


class VerboseConsoleReporter(BasicConsoleReporter):
    """Prints label and full message for each check; ``debug`` also dumps result data."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        debug: bool = False,
        color: bool = False,
    ) -> None:
        super().__init__(stream, color=color)
        self._debug = debug

    def on_check_start(self, check: Check) -> None:
        if self._debug:
            self._write(f"  ...  {check.label}")

    def on_check_finish(self, check: Check, result: Result) -> None:
        line = f"  {self._symbol(classify_result(result))} {check.label}"
        if result.message:
            line = f"{line}: {result.message}"
        self._write(line)

        if self._debug and result.data is not None:
            dumped = json.dumps(result.data, default=repr, indent=2, sort_keys=True)
            for data_line in dumped.splitlines():
                self._write(f"         {data_line}")
