"""Check contracts and the callable adapter."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from orchid_diagnostics.engine.result import Result

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@runtime_checkable
class Check(Protocol):
    """Contract for a named, executable unit producing one result."""

    @property
    def label(self) -> str:
        """Human-readable identifier of the check."""
        ...

    def execute(self) -> Result | Any:
        """Run the check body."""
        ...


@runtime_checkable
class LabelSettable(Protocol):
    """Optional capability of checks whose label may be assigned."""

    def set_label(self, label: str) -> None: ...


class AbstractCheck:
    """Convenience base for checks.

    The default label is derived from the class name (``DiskFree`` becomes
    ``"Disk Free"``) and may be replaced once through :meth:`set_label`.
    """

    _label: str | None = None

    @property
    def label(self) -> str:
        if self._label:
            return self._label
        return _CAMEL_BOUNDARY.sub(" ", type(self).__name__)

    def set_label(self, label: str) -> None:
        if not label or not label.strip():
            raise ValueError("Check label must be a non-empty string")
        self._label = label

    def execute(self) -> Result:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} label={self.label!r}>"


class Callback(AbstractCheck):
    """Wraps a plain callable as a check, passing the configured arguments."""

    def __init__(self, func: Callable[..., Any], params: Sequence[Any] = ()) -> None:
        if not callable(func):
            raise TypeError(f"Callback expects a callable, got {type(func).__name__}")
        self._func = func
        self._params = tuple(params)

    @property
    def func(self) -> Callable[..., Any]:
        return self._func

    @property
    def params(self) -> tuple[Any, ...]:
        return self._params

    @property
    def label(self) -> str:
        if self._label:
            return self._label
        name = getattr(self._func, "__qualname__", None) or getattr(self._func, "__name__", None)
        return name or type(self._func).__name__

    def execute(self) -> Any:
        return self._func(*self._params)
