"""Ordered, queryable aggregate of check results."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from orchid_diagnostics.engine.result import Outcome, Result, classify_result

if TYPE_CHECKING:
    from orchid_diagnostics.engine.check import Check


class ResultCollection(Mapping["Check", Result]):
    """Maps each executed check to its result, in execution order.

    Checks are keyed by identity, so two checks sharing a label are kept apart.
    The collection is filled by the runner and sealed once the run ends; from
    then on it is read-only.
    """

    def __init__(self) -> None:
        self._results: dict[int, tuple[Check, Result]] = {}
        self._counts: dict[Outcome, int] = dict.fromkeys(Outcome, 0)
        self._sealed = False

    def record(self, check: Check, result: Result) -> None:
        """Store the result of ``check``. Only valid before the collection is sealed."""
        if self._sealed:
            raise RuntimeError("ResultCollection is sealed and can no longer be modified")
        key = id(check)
        if key in self._results:
            raise ValueError(f"A result for check {check.label!r} was already recorded")
        self._results[key] = (check, result)
        self._counts[classify_result(result)] += 1

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __getitem__(self, check: Check) -> Result:
        try:
            return self._results[id(check)][1]
        except KeyError:
            raise KeyError(check) from None

    def __iter__(self) -> Iterator[Check]:
        return (check for check, _ in self._results.values())

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, check: object) -> bool:
        entry = self._results.get(id(check))
        return entry is not None and entry[0] is check

    def __repr__(self) -> str:
        counts = ", ".join(f"{outcome.value}={count}" for outcome, count in self._counts.items())
        return f"<ResultCollection size={len(self)} {counts}>"

    def count(self, outcome: Outcome) -> int:
        return self._counts[outcome]

    @property
    def success_count(self) -> int:
        return self._counts[Outcome.SUCCESS]

    @property
    def warning_count(self) -> int:
        return self._counts[Outcome.WARNING]

    @property
    def failure_count(self) -> int:
        return self._counts[Outcome.FAILURE]

    @property
    def skip_count(self) -> int:
        return self._counts[Outcome.SKIP]

    @property
    def unknown_count(self) -> int:
        return self._counts[Outcome.UNKNOWN]

    @property
    def passed(self) -> bool:
        """True when no check failed."""
        return self.failure_count == 0

    def labels(self) -> list[str]:
        return [check.label for check in self]

    def by_label(self) -> dict[str, Result]:
        """Return a label -> result view. Later checks win on duplicate labels."""
        return {check.label: result for check, result in self._results.values()}

    def to_dict(self) -> dict[str, Any]:
        """Return the flat export record, see :func:`results_to_dict`."""
        from orchid_diagnostics.reporting.export import results_to_dict

        return results_to_dict(self)
