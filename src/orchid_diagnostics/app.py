"""Diagnostics application: from run options to rendered results."""

from __future__ import annotations

import logging
from typing import TextIO

from pydantic import BaseModel, ConfigDict, Field

from orchid_diagnostics.config.models import AppSettings
from orchid_diagnostics.config.sources import (
    Contributors,
    collect_check_config,
    filter_check_config,
    filter_checks_by_label,
)
from orchid_diagnostics.engine.check import Check
from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.registry import CheckRegistry, ProviderRegistry
from orchid_diagnostics.engine.resolver import CheckResolver
from orchid_diagnostics.engine.runner import RunConfig, Runner
from orchid_diagnostics.observability.metrics import MetricsRecorder
from orchid_diagnostics.reporting.console import BasicConsoleReporter, VerboseConsoleReporter
from orchid_diagnostics.reporting.export import HttpResponse, exit_code, render_http_response

logger = logging.getLogger(__name__)


class RunOptions(BaseModel):
    """Caller decisions for one diagnostics run."""

    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    debug: bool = False
    quiet: bool = False
    break_on_failure: bool | None = Field(
        default=None,
        description="Overrides the configured default when set",
    )
    group: str | None = Field(default=None, description="Only run checks of this group")
    label: str | None = Field(default=None, description="Only run the check with this label")

    @property
    def effective_quiet(self) -> bool:
        """Quiet only applies when neither verbose nor debug output was requested."""
        return self.quiet and not self.verbose and not self.debug


class DiagnosticsApp:
    """Collects, resolves and runs the configured checks.

    Example usage::

        app = DiagnosticsApp(load_config(), contributors={"Billing": billing_module})
        results = app.run(RunOptions(verbose=True), console=sys.stdout)
        sys.exit(app.console_exit_code(results))
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        contributors: Contributors = (),
        providers: ProviderRegistry | None = None,
        builtins: CheckRegistry | None = None,
        extensions: CheckRegistry | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._contributors = contributors
        self._resolver = CheckResolver(
            providers=providers,
            builtins=builtins,
            extensions=extensions,
        )
        self._metrics = metrics

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def resolver(self) -> CheckResolver:
        return self._resolver

    def collect_checks(self, options: RunOptions | None = None) -> list[Check]:
        """Resolve the checks selected by ``options``.

        Raises:
            ConfigurationError: If nothing is configured or the filters match nothing.
            ResolutionError: If any check specification is invalid.
        """
        options = options or RunOptions()
        config = collect_check_config(
            self._settings.diagnostics.checks,
            self._contributors,
            group=options.group,
        )
        config = filter_check_config(config, options.group)

        entries = self._resolver.resolve_all_items(config)
        if options.label:
            return filter_checks_by_label(entries, options.label, group=options.group)
        return [check for _, check in entries]

    def build_runner(self, options: RunOptions | None = None, *, console: TextIO | None = None) -> Runner:
        """Create a runner for the selected checks, with a console reporter when wanted."""
        options = options or RunOptions()
        checks = self.collect_checks(options)

        break_on_failure = (
            self._settings.diagnostics.break_on_failure
            if options.break_on_failure is None
            else options.break_on_failure
        )
        runner = Runner(checks, config=RunConfig(break_on_failure=break_on_failure), metrics=self._metrics)

        if console is not None and not options.effective_quiet:
            color = self._settings.diagnostics.color
            if options.verbose or options.debug:
                runner.add_reporter(VerboseConsoleReporter(console, debug=options.debug, color=color))
            else:
                runner.add_reporter(BasicConsoleReporter(console, color=color))

        logger.debug("Built diagnostics runner", extra={"checks": len(checks)})
        return runner

    def run(self, options: RunOptions | None = None, *, console: TextIO | None = None) -> ResultCollection:
        return self.build_runner(options, console=console).run()

    @staticmethod
    def console_exit_code(results: ResultCollection) -> int:
        return exit_code(results)

    @staticmethod
    def http_response(results: ResultCollection, accept: str | None = None) -> HttpResponse:
        return render_http_response(results, accept)
