"""Check resolution and execution engine."""

from orchid_diagnostics.engine.check import AbstractCheck, Callback, Check, LabelSettable
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.registry import (
    CheckFactory,
    CheckRegistry,
    ProviderFactory,
    ProviderManager,
    ProviderRegistry,
)
from orchid_diagnostics.engine.resolver import CheckResolver, import_string, normalize_label
from orchid_diagnostics.engine.result import Outcome, Result, classify_result, coerce_result
from orchid_diagnostics.engine.runner import BaseReporter, Reporter, RunConfig, Runner, RunState

__all__ = [
    "AbstractCheck",
    "BaseReporter",
    "Callback",
    "Check",
    "CheckFactory",
    "CheckRegistry",
    "CheckResolver",
    "LabelSettable",
    "Outcome",
    "ProviderFactory",
    "ProviderManager",
    "ProviderRegistry",
    "Reporter",
    "Result",
    "ResultCollection",
    "RunConfig",
    "RunState",
    "Runner",
    "classify_result",
    "coerce_result",
    "import_string",
    "normalize_label",
]
