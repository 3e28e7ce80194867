"""Pluggable diagnostics engine: resolve check definitions, run them, report results."""

from orchid_diagnostics.app import DiagnosticsApp, RunOptions
from orchid_diagnostics.engine import (
    AbstractCheck,
    BaseReporter,
    Callback,
    Check,
    CheckRegistry,
    CheckResolver,
    LabelSettable,
    Outcome,
    ProviderManager,
    ProviderRegistry,
    Reporter,
    Result,
    ResultCollection,
    RunConfig,
    Runner,
    RunState,
    classify_result,
    coerce_result,
)
from orchid_diagnostics.errors import (
    CheckNotFoundError,
    ConfigurationError,
    DiagnosticsError,
    DuplicateCheckError,
    InvalidCheckTypeError,
    InvalidSpecError,
    MissingDependencyError,
    NoChecksConfiguredError,
    ProviderNotFoundError,
    ResolutionError,
    UnknownCheckGroupError,
    UnknownCheckLabelError,
)
from orchid_diagnostics.health import HealthStatus, Resource
from orchid_diagnostics.reporting import (
    BasicConsoleReporter,
    VerboseConsoleReporter,
    exit_code,
    render_http_response,
    render_json,
    results_to_dict,
)

__version__ = "0.1.0"

__all__ = [
    "AbstractCheck",
    "BaseReporter",
    "BasicConsoleReporter",
    "Callback",
    "Check",
    "CheckNotFoundError",
    "CheckRegistry",
    "CheckResolver",
    "ConfigurationError",
    "DiagnosticsApp",
    "DiagnosticsError",
    "DuplicateCheckError",
    "HealthStatus",
    "InvalidCheckTypeError",
    "InvalidSpecError",
    "LabelSettable",
    "MissingDependencyError",
    "NoChecksConfiguredError",
    "Outcome",
    "ProviderManager",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "Reporter",
    "ResolutionError",
    "Resource",
    "Result",
    "ResultCollection",
    "RunConfig",
    "RunOptions",
    "RunState",
    "Runner",
    "UnknownCheckGroupError",
    "UnknownCheckLabelError",
    "VerboseConsoleReporter",
    "__version__",
    "classify_result",
    "coerce_result",
    "exit_code",
    "render_http_response",
    "render_json",
    "results_to_dict",
]
