"""Prometheus metrics primitives for diagnostics runs."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Protocol

from orchid_diagnostics.errors import MissingDependencyError

_LABEL_NORMALIZER = re.compile(r"[^a-zA-Z0-9_]+")


def _import_prometheus_client() -> Any:
    try:
        import prometheus_client
    except ImportError as exc:  # pragma: no cover - depends on optional extras
        raise MissingDependencyError(
            "Prometheus metrics require optional dependency 'prometheus-client'. "
            "Install with: pip install 'orchid-diagnostics[metrics]'"
        ) from exc
    return prometheus_client


def _sanitize_label(value: str, *, default: str = "unknown") -> str:
    normalized = _LABEL_NORMALIZER.sub("_", value.strip().lower()).strip("_")
    return normalized or default


def _collector_or_create(registry: Any, name: str, factory: Any) -> Any:
    names_to_collectors = getattr(registry, "_names_to_collectors", None)
    if isinstance(names_to_collectors, dict):
        collector = names_to_collectors.get(name)
        if collector is not None:
            return collector
    return factory()


class MetricsRecorder(Protocol):
    """Observer contract for diagnostics metrics."""

    def observe_check(
        self,
        *,
        check: str,
        outcome: str,
        duration_seconds: float,
    ) -> None:
        """Record the outcome and latency of one check."""
        ...

    def observe_run(
        self,
        *,
        state: str,
        duration_seconds: float,
        executed: int,
    ) -> None:
        """Record the terminal state of a run."""
        ...


class NoopMetricsRecorder:
    """No-op recorder used when metrics are not configured."""

    def observe_check(
        self,
        *,
        check: str,
        outcome: str,
        duration_seconds: float,
    ) -> None:
        del check, outcome, duration_seconds

    def observe_run(
        self,
        *,
        state: str,
        duration_seconds: float,
        executed: int,
    ) -> None:
        del state, duration_seconds, executed


class PrometheusMetricsRecorder:
    """Prometheus-backed recorder with ``<prefix>_check_*`` / ``<prefix>_run_*`` naming.

    Check labels are free text, so they are kept verbatim as label values while
    outcome and state values are normalized.
    """

    def __init__(
        self,
        *,
        registry: Any | None = None,
        prefix: str = "orchid_diagnostics",
    ) -> None:
        prometheus_client = _import_prometheus_client()
        self._registry = prometheus_client.REGISTRY if registry is None else registry
        self._prefix = _sanitize_label(prefix, default="orchid_diagnostics")
        self._check_latency = _collector_or_create(
            self._registry,
            f"{self._prefix}_check_duration_seconds",
            lambda: prometheus_client.Histogram(
                f"{self._prefix}_check_duration_seconds",
                "Diagnostic check execution time in seconds.",
                labelnames=("check", "outcome"),
                registry=self._registry,
                buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
            ),
        )
        self._check_outcomes = _collector_or_create(
            self._registry,
            f"{self._prefix}_check_results_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_check_results_total",
                "Diagnostic check results by outcome.",
                labelnames=("check", "outcome"),
                registry=self._registry,
            ),
        )
        self._check_status = _collector_or_create(
            self._registry,
            f"{self._prefix}_check_passed",
            lambda: prometheus_client.Gauge(
                f"{self._prefix}_check_passed",
                "1 when the last execution of the check did not fail, 0 otherwise.",
                labelnames=("check",),
                registry=self._registry,
            ),
        )
        self._runs = _collector_or_create(
            self._registry,
            f"{self._prefix}_runs_total",
            lambda: prometheus_client.Counter(
                f"{self._prefix}_runs_total",
                "Diagnostics runs by terminal state.",
                labelnames=("state",),
                registry=self._registry,
            ),
        )
        self._run_latency = _collector_or_create(
            self._registry,
            f"{self._prefix}_run_duration_seconds",
            lambda: prometheus_client.Gauge(
                f"{self._prefix}_run_duration_seconds",
                "Duration of the last diagnostics run in seconds.",
                registry=self._registry,
            ),
        )
        self._run_executed = _collector_or_create(
            self._registry,
            f"{self._prefix}_run_executed_checks",
            lambda: prometheus_client.Gauge(
                f"{self._prefix}_run_executed_checks",
                "Number of checks executed by the last diagnostics run.",
                registry=self._registry,
            ),
        )

    def observe_check(
        self,
        *,
        check: str,
        outcome: str,
        duration_seconds: float,
    ) -> None:
        outcome_label = _sanitize_label(outcome)
        self._check_latency.labels(check=check, outcome=outcome_label).observe(
            max(0.0, duration_seconds)
        )
        self._check_outcomes.labels(check=check, outcome=outcome_label).inc()
        self._check_status.labels(check=check).set(0.0 if outcome_label == "failure" else 1.0)

    def observe_run(
        self,
        *,
        state: str,
        duration_seconds: float,
        executed: int,
    ) -> None:
        self._runs.labels(state=_sanitize_label(state)).inc()
        self._run_latency.set(max(0.0, duration_seconds))
        self._run_executed.set(max(0, executed))


_NOOP_RECORDER = NoopMetricsRecorder()
_DEFAULT_RECORDER: MetricsRecorder = _NOOP_RECORDER


def get_metrics_recorder() -> MetricsRecorder:
    """Return the process-level metrics recorder."""
    return _DEFAULT_RECORDER


def set_metrics_recorder(recorder: MetricsRecorder | None) -> MetricsRecorder:
    """Set process-level recorder. `None` switches back to no-op."""
    global _DEFAULT_RECORDER
    _DEFAULT_RECORDER = _NOOP_RECORDER if recorder is None else recorder
    return _DEFAULT_RECORDER


def configure_prometheus_metrics(
    *,
    registry: Any | None = None,
    prefix: str = "orchid_diagnostics",
    set_default: bool = True,
) -> PrometheusMetricsRecorder:
    """Build a Prometheus recorder and optionally set it as default."""
    recorder = PrometheusMetricsRecorder(registry=registry, prefix=prefix)
    if set_default:
        set_metrics_recorder(recorder)
    return recorder


def render_prometheus_metrics(*, registry: Any | None = None) -> bytes:
    """Render current Prometheus metrics in exposition text format."""
    prometheus_client = _import_prometheus_client()
    resolved_registry = prometheus_client.REGISTRY if registry is None else registry
    return bytes(prometheus_client.generate_latest(resolved_registry))


def write_prometheus_textfile(path: Path | str, *, registry: Any | None = None) -> Path:
    """Write metrics for the node_exporter textfile collector."""
    prometheus_client = _import_prometheus_client()
    resolved_registry = prometheus_client.REGISTRY if registry is None else registry
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    prometheus_client.write_to_textfile(str(target), resolved_registry)
    return target
