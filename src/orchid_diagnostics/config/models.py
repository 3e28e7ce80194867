"""Typed configuration models with Pydantic validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CheckGroup = dict[str, Any] | list[Any]


class ServiceSettings(BaseModel):
    """Service identification."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="orchid-diagnostics", min_length=1, description="Service name")
    version: str = Field(default="0.0.0", min_length=1, description="Service version")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )
    format: Literal["json", "text"] = Field(default="json", description="Log output format")
    sampling: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Optional sampling ratio for low-severity logs",
    )


class MetricsSettings(BaseModel):
    """Prometheus metrics configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Record Prometheus metrics for runs")
    prefix: str = Field(default="orchid_diagnostics", min_length=1, description="Metric name prefix")
    textfile: Path | None = Field(
        default=None,
        description="Write metrics to this file after each run (node_exporter textfile collector)",
    )


class DiagnosticsSettings(BaseModel):
    """Check definitions and run defaults.

    ``checks`` maps a group name to either a ``{label: spec}`` mapping or a list
    of unlabelled specs. A spec is an identifier string or a list
    ``[identifier, *params]``.
    """

    model_config = ConfigDict(frozen=True)

    break_on_failure: bool = Field(default=False, description="Stop at the first failed check")
    color: bool = Field(default=False, description="Use ANSI colors in console output")
    checks: dict[str, CheckGroup] = Field(default_factory=dict, description="Check groups")

    @field_validator("checks")
    @classmethod
    def validate_group_names(cls, value: dict[str, CheckGroup]) -> dict[str, CheckGroup]:
        for group in value:
            if not group.strip():
                raise ValueError("check group names must not be empty")
        return value


class AppSettings(BaseModel):
    """Root application settings."""

    model_config = ConfigDict(frozen=True)

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    diagnostics: DiagnosticsSettings = Field(default_factory=DiagnosticsSettings)
