"""Tests for ResultCollection."""

from __future__ import annotations

import pytest

from orchid_diagnostics.engine.check import Callback
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.result import Outcome, Result


def _check(label: str) -> Callback:
    check = Callback(lambda: True)
    check.set_label(label)
    return check


class TestResultCollection:
    def test_preserves_insertion_order_and_counts(self) -> None:
        first, second, third = _check("a"), _check("b"), _check("c")
        results = ResultCollection()
        results.record(first, Result.success())
        results.record(second, Result.failure("boom"))
        results.record(third, Result.warning())

        assert list(results) == [first, second, third]
        assert results.labels() == ["a", "b", "c"]
        assert results[second].message == "boom"
        assert results.success_count == 1
        assert results.failure_count == 1
        assert results.warning_count == 1
        assert results.count(Outcome.SKIP) == 0
        assert results.passed is False

    def test_checks_sharing_a_label_are_kept_apart(self) -> None:
        first, second = _check("same"), _check("same")
        results = ResultCollection()
        results.record(first, Result.success("one"))
        results.record(second, Result.failure("two"))

        assert len(results) == 2
        assert results[first].message == "one"
        assert results.by_label() == {"same": Result.failure("two")}

    def test_duplicate_record_is_rejected(self) -> None:
        check = _check("a")
        results = ResultCollection()
        results.record(check, Result.success())

        with pytest.raises(ValueError, match="already recorded"):
            results.record(check, Result.failure())

    def test_sealed_collection_is_read_only(self) -> None:
        results = ResultCollection()
        results.seal()

        assert results.sealed
        with pytest.raises(RuntimeError, match="sealed"):
            results.record(_check("late"), Result.success())

    def test_unknown_check_lookup(self) -> None:
        results = ResultCollection()
        missing = _check("missing")

        assert missing not in results
        with pytest.raises(KeyError):
            results[missing]

    def test_empty_collection_passes(self) -> None:
        results = ResultCollection()
        assert results.passed
        assert results.to_dict()["details"] == {}
