"""Typed outcomes produced by diagnostic checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    """Closed classification of a check result."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILURE = "failure"
    SKIP = "skip"
    UNKNOWN = "unknown"


# Classification priority for result-like objects.
_PRIORITY = (Outcome.SUCCESS, Outcome.WARNING, Outcome.FAILURE, Outcome.SKIP)

_ALIASES = {
    "ok": Outcome.SUCCESS,
    "pass": Outcome.SUCCESS,
    "passed": Outcome.SUCCESS,
    "healthy": Outcome.SUCCESS,
    "warn": Outcome.WARNING,
    "fail": Outcome.FAILURE,
    "failed": Outcome.FAILURE,
    "error": Outcome.FAILURE,
    "skipped": Outcome.SKIP,
}


@dataclass(slots=True, frozen=True)
class Result:
    """Outcome of a single check invocation."""

    outcome: Outcome
    message: str = ""
    data: Any = None

    def __post_init__(self) -> None:
        outcome = _outcome_from(self.outcome)
        if outcome is None:
            raise ValueError(
                f"Invalid outcome {self.outcome!r}; expected one of "
                f"{', '.join(item.value for item in Outcome)}"
            )
        object.__setattr__(self, "outcome", outcome)

    @classmethod
    def success(cls, message: str = "", data: Any = None) -> Result:
        return cls(Outcome.SUCCESS, message, data)

    @classmethod
    def warning(cls, message: str = "", data: Any = None) -> Result:
        return cls(Outcome.WARNING, message, data)

    @classmethod
    def failure(cls, message: str = "", data: Any = None) -> Result:
        return cls(Outcome.FAILURE, message, data)

    @classmethod
    def skip(cls, message: str = "", data: Any = None) -> Result:
        return cls(Outcome.SKIP, message, data)

    @classmethod
    def unknown(cls, message: str = "", data: Any = None) -> Result:
        return cls(Outcome.UNKNOWN, message, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the export representation of this result."""
        return {
            "outcome": self.outcome.value,
            "message": self.message,
            "data": self.data,
        }


def classify_result(value: object) -> Outcome:
    """Map any value reported by a check onto exactly one :class:`Outcome`.

    Never raises. :class:`Result` instances report their own outcome; other
    objects are inspected for an ``outcome`` or ``status`` attribute and matched
    in the order success, warning, failure, skip. Everything else is unknown.
    """
    if isinstance(value, Result):
        return value.outcome

    for attribute in ("outcome", "status"):
        candidate = _outcome_from(getattr(value, attribute, None))
        if candidate is not None:
            return candidate
    return Outcome.UNKNOWN


def coerce_result(value: object) -> Result:
    """Convert the return value of a check body into a :class:`Result`."""
    if isinstance(value, Result):
        return value
    if value is True:
        return Result.success()
    if value is False:
        return Result.failure()
    if value is None:
        return Result.unknown("Check returned no result")
    if isinstance(value, str):
        return Result.warning(value)

    outcome = classify_result(value)
    if outcome is not Outcome.UNKNOWN:
        message = getattr(value, "message", "")
        return Result(
            outcome,
            "" if message is None else str(message),
            getattr(value, "data", None),
        )
    return Result.unknown(f"Check returned an unsupported value of type {type(value).__name__}", value)


def _outcome_from(raw: object) -> Outcome | None:
    if raw is None:
        return None
    if isinstance(raw, Outcome):
        return raw
    if not isinstance(raw, str):
        return None

    normalized = raw.strip().lower()
    for outcome in _PRIORITY:
        if normalized == outcome.value:
            return outcome
    return _ALIASES.get(normalized)
