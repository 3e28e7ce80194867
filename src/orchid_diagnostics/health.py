"""Health primitives for asynchronous resource probes."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Protocol, runtime_checkable


@dataclass(slots=True)
class HealthStatus:
    """Represents an infrastructure health probe result."""

    healthy: bool
    latency_ms: float
    message: str | None = None
    details: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        payload: dict[str, Any] = {
            "healthy": self.healthy,
            "latency_ms": max(0.0, float(self.latency_ms)),
        }
        if self.message is not None:
            payload["message"] = self.message
        if self.details:
            payload["details"] = dict(self.details)
        return payload


HealthProbe = Callable[[], Awaitable[HealthStatus]]


@runtime_checkable
class Resource(Protocol):
    """Contract for resources exposing an asynchronous health probe."""

    async def health_check(self) -> HealthStatus:
        """Return current health status of this resource."""
        ...


def run_health_probe(
    probe: HealthProbe,
    *,
    name: str,
    timeout_seconds: float | None = None,
) -> HealthStatus:
    """Run an asynchronous probe to completion from synchronous code.

    Errors and timeouts are reported as an unhealthy status.
    """
    if timeout_seconds is not None and timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be > 0")
    return asyncio.run(_run_probe(name=name, probe=probe, timeout_seconds=timeout_seconds))


async def _run_probe(
    *,
    name: str,
    probe: HealthProbe,
    timeout_seconds: float | None,
) -> HealthStatus:
    started = perf_counter()

    try:
        awaitable = probe()
        status = (
            await awaitable
            if timeout_seconds is None
            else await asyncio.wait_for(awaitable, timeout=timeout_seconds)
        )
        if not isinstance(status, HealthStatus):
            raise TypeError(
                f"health_check for '{name}' returned {type(status).__name__}, "
                "expected HealthStatus"
            )

        latency_ms = status.latency_ms
        if latency_ms < 0:
            latency_ms = (perf_counter() - started) * 1000

        return HealthStatus(
            healthy=status.healthy,
            latency_ms=latency_ms,
            message=status.message,
            details=dict(status.details) if status.details else None,
        )
    except TimeoutError:
        return HealthStatus(
            healthy=False,
            latency_ms=(perf_counter() - started) * 1000,
            message=f"health_check for '{name}' timed out after {timeout_seconds}s",
            details={"error_type": "TimeoutError"},
        )
    except Exception as exc:
        return HealthStatus(
            healthy=False,
            latency_ms=(perf_counter() - started) * 1000,
            message=str(exc),
            details={"error_type": type(exc).__name__},
        )
