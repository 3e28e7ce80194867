"""Configuration loading, validation and check-source assembly."""

from orchid_diagnostics.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    PlaceholderResolutionError,
)
from orchid_diagnostics.config.loader import deep_merge, load_config, validate_settings
from orchid_diagnostics.config.models import (
    AppSettings,
    DiagnosticsSettings,
    LoggingSettings,
    MetricsSettings,
    ServiceSettings,
)
from orchid_diagnostics.config.placeholders import resolve_placeholders
from orchid_diagnostics.config.sources import (
    DiagnosticsContributor,
    collect_check_config,
    filter_check_config,
    filter_checks_by_label,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    "DiagnosticsContributor",
    "DiagnosticsSettings",
    "LoggingSettings",
    "MetricsSettings",
    "PlaceholderResolutionError",
    "ServiceSettings",
    "collect_check_config",
    "deep_merge",
    "filter_check_config",
    "filter_checks_by_label",
    "load_config",
    "resolve_placeholders",
    "validate_settings",
]
