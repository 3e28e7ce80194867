"""Observability helpers: structured logging and metrics."""

from orchid_diagnostics.observability.logging import (
    DiagnosticsContext,
    bootstrap_logging,
    bootstrap_logging_from_app_settings,
    diagnostics_scope,
    get_diagnostics_context,
)
from orchid_diagnostics.observability.metrics import (
    MetricsRecorder,
    NoopMetricsRecorder,
    PrometheusMetricsRecorder,
    configure_prometheus_metrics,
    get_metrics_recorder,
    render_prometheus_metrics,
    set_metrics_recorder,
    write_prometheus_textfile,
)

__all__ = [
    "DiagnosticsContext",
    "MetricsRecorder",
    "NoopMetricsRecorder",
    "PrometheusMetricsRecorder",
    "bootstrap_logging",
    "bootstrap_logging_from_app_settings",
    "configure_prometheus_metrics",
    "diagnostics_scope",
    "get_diagnostics_context",
    "get_metrics_recorder",
    "render_prometheus_metrics",
    "set_metrics_recorder",
    "write_prometheus_textfile",
]
