"""Built-in diagnostic checks."""

from __future__ import annotations

import importlib.util
import operator
import os
import platform
import shutil
import socket
from collections.abc import Callable
from pathlib import Path
from time import perf_counter
from typing import Any

from orchid_diagnostics.engine.check import AbstractCheck
from orchid_diagnostics.engine.result import Result
from orchid_diagnostics.health import HealthStatus, Resource, run_health_probe

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def _format_bytes(value: float) -> str:
    for unit in _UNITS:
        if abs(value) < 1024 or unit == _UNITS[-1]:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} {_UNITS[-1]}"


def _parse_version(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for piece in str(version).strip().split("."):
        digits = "".join(ch for ch in piece if ch.isdigit())
        if not digits:
            break
        parts.append(int(digits))
    if not parts:
        raise ValueError(f"Invalid version string: {version!r}")
    return tuple(parts)


class DiskFree(AbstractCheck):
    """Fails when the filesystem holding ``path`` has less than ``min_bytes`` free."""

    def __init__(self, min_bytes: int, path: str | os.PathLike[str] = "/") -> None:
        if int(min_bytes) < 0:
            raise ValueError("min_bytes must be >= 0")
        self.min_bytes = int(min_bytes)
        self.path = Path(path)

    def execute(self) -> Result:
        usage = shutil.disk_usage(self.path)
        data = {"path": str(self.path), "free": usage.free, "total": usage.total}
        if usage.free < self.min_bytes:
            return Result.failure(
                f"Remaining space at {self.path} is {_format_bytes(usage.free)}, "
                f"below the required {_format_bytes(self.min_bytes)}",
                data,
            )
        return Result.success(f"Remaining space at {self.path}: {_format_bytes(usage.free)}", data)


class _DirectoryAccess(AbstractCheck):
    _mode: int
    _verb: str

    def __init__(self, *paths: str | os.PathLike[str]) -> None:
        if not paths:
            raise ValueError(f"{type(self).__name__} requires at least one path")
        self.paths = tuple(Path(path) for path in paths)

    def execute(self) -> Result:
        missing = [str(path) for path in self.paths if not path.is_dir()]
        denied = [
            str(path)
            for path in self.paths
            if path.is_dir() and not os.access(path, self._mode)
        ]
        data = {"missing": missing, "denied": denied}
        if missing:
            return Result.failure(f"Not a directory: {', '.join(missing)}", data)
        if denied:
            return Result.failure(f"Directory is not {self._verb}: {', '.join(denied)}", data)
        return Result.success(f"Directory is {self._verb}: {', '.join(map(str, self.paths))}")


class DirReadable(_DirectoryAccess):
    """Checks that every given directory exists and is readable."""

    _mode = os.R_OK
    _verb = "readable"


class DirWritable(_DirectoryAccess):
    """Checks that every given directory exists and is writable."""

    _mode = os.W_OK
    _verb = "writable"


class PythonVersion(AbstractCheck):
    """Compares the running interpreter version against ``version``."""

    def __init__(self, version: str, operator: str = ">=") -> None:
        if operator not in _COMPARATORS:
            raise ValueError(
                f"Unsupported operator {operator!r}; expected one of {sorted(_COMPARATORS)}"
            )
        self.version = str(version)
        self.operator = operator
        self._expected = _parse_version(self.version)

    def execute(self) -> Result:
        current = platform.python_version()
        actual = _parse_version(current)[: len(self._expected)]
        if _COMPARATORS[self.operator](actual, self._expected):
            return Result.success(f"Python version {current}")
        return Result.failure(
            f"Python version {current} does not satisfy {self.operator} {self.version}",
            {"current": current, "expected": f"{self.operator}{self.version}"},
        )


class ModuleImportable(AbstractCheck):
    """Checks that the given modules can be imported, without importing them."""

    def __init__(self, *modules: str) -> None:
        if not modules:
            raise ValueError("ModuleImportable requires at least one module name")
        self.modules = modules

    def execute(self) -> Result:
        missing = []
        for name in self.modules:
            try:
                spec = importlib.util.find_spec(name)
            except (ImportError, ValueError):
                spec = None
            if spec is None:
                missing.append(name)
        if missing:
            return Result.failure(f"Modules not available: {', '.join(missing)}", {"missing": missing})
        return Result.success(f"Modules available: {', '.join(self.modules)}")


class TcpConnection(AbstractCheck):
    """Opens a TCP connection to ``host:port``."""

    def __init__(self, host: str, port: int, timeout: float = 2.0) -> None:
        if not (1 <= int(port) <= 65535):
            raise ValueError("port must be between 1 and 65535")
        self.host = host
        self.port = int(port)
        self.timeout = float(timeout)

    def execute(self) -> Result:
        started = perf_counter()
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                pass
        except (TimeoutError, OSError) as exc:
            return Result.failure(
                f"Cannot connect to {self.host}:{self.port}: {exc}",
                {"error_type": type(exc).__name__},
            )
        latency_ms = (perf_counter() - started) * 1000
        return Result.success(
            f"Connected to {self.host}:{self.port}",
            {"latency_ms": round(latency_ms, 3)},
        )


class ResourceHealthCheck(AbstractCheck):
    """Runs the asynchronous ``health_check()`` of a resource."""

    def __init__(self, resource: Resource, timeout_seconds: float | None = None) -> None:
        if not isinstance(resource, Resource):
            raise TypeError(f"{type(resource).__name__} does not expose health_check()")
        self.resource = resource
        self.timeout_seconds = timeout_seconds

    def execute(self) -> Result:
        status = run_health_probe(
            self.resource.health_check,
            name=self.label,
            timeout_seconds=self.timeout_seconds,
        )
        return _result_from_status(status)


def _result_from_status(status: HealthStatus) -> Result:
    message = status.message or ("healthy" if status.healthy else "unhealthy")
    if status.healthy:
        return Result.success(message, status.to_dict())
    return Result.failure(message, status.to_dict())
