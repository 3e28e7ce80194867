"""Command line entry point.

Usage:
    orchid-diagnostics [group] [label] [--verbose | --debug | --quiet] [--break]
                       [--config-dir DIR] [--env ENV] [--format console|json]
                       [--metrics-file PATH]

Exit status is 0 when no check failed, 1 when at least one failed and 2 when
the configuration or a check definition is invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from orchid_diagnostics.app import DiagnosticsApp, RunOptions
from orchid_diagnostics.config.errors import ConfigError
from orchid_diagnostics.config.loader import DEFAULT_BASE_FILE, DEFAULT_CONFIG_DIR, load_config
from orchid_diagnostics.config.models import AppSettings
from orchid_diagnostics.errors import DiagnosticsError
from orchid_diagnostics.observability.logging import bootstrap_logging_from_app_settings
from orchid_diagnostics.observability.metrics import (
    MetricsRecorder,
    configure_prometheus_metrics,
    write_prometheus_textfile,
)
from orchid_diagnostics.reporting.export import render_json

EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orchid-diagnostics",
        description="Run the configured diagnostic checks.",
    )
    parser.add_argument("group", nargs="?", help="Only run checks of this group")
    parser.add_argument("label", nargs="?", help="Only run the check with this label")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show check messages")
    parser.add_argument("--debug", action="store_true", help="Show check messages and result data")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only set the exit status")
    parser.add_argument(
        "-b",
        "--break",
        dest="break_on_failure",
        action="store_true",
        default=None,
        help="Stop at the first failed check",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help=f"Directory holding {DEFAULT_BASE_FILE} (default: ./{DEFAULT_CONFIG_DIR})",
    )
    parser.add_argument("--env", default=None, help="Environment overlay to load")
    parser.add_argument(
        "--format",
        choices=("console", "json"),
        default="console",
        help="Output format",
    )
    parser.add_argument("--metrics-file", type=Path, default=None, help="Write Prometheus metrics here")
    return parser


def load_settings(config_dir: Path | None, env: str | None) -> AppSettings:
    """Load settings from ``config_dir``; without one, an absent default directory means defaults."""
    if config_dir is None and not (DEFAULT_CONFIG_DIR / DEFAULT_BASE_FILE).exists():
        return AppSettings()
    return load_config(config_dir=config_dir, env=env)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config_dir, args.env)
    except ConfigError as exc:
        err.write(f"{exc}\n")
        return EXIT_CONFIGURATION_ERROR

    bootstrap_logging_from_app_settings(
        settings,
        logger=logging.getLogger("orchid_diagnostics"),
        stream=err,
    )

    options = RunOptions(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        break_on_failure=args.break_on_failure,
        group=args.group,
        label=args.label,
    )
    metrics_file = args.metrics_file or settings.metrics.textfile

    try:
        metrics: MetricsRecorder | None = None
        if settings.metrics.enabled or metrics_file is not None:
            metrics = configure_prometheus_metrics(prefix=settings.metrics.prefix, set_default=False)
        app = DiagnosticsApp(settings, metrics=metrics)
        results = app.run(options, console=out if args.format == "console" else None)
    except DiagnosticsError as exc:
        err.write(f"{exc}\n")
        return EXIT_CONFIGURATION_ERROR

    if args.format == "json":
        out.write(render_json(results, indent=2 if args.verbose or args.debug else None))
        out.write("\n")

    if metrics_file is not None:
        write_prometheus_textfile(metrics_file)

    return app.console_exit_code(results)


def run() -> None:
    sys.exit(main())
