"""Reporters and renderers for diagnostics results."""

from orchid_diagnostics.reporting.console import (
    SYMBOLS,
    BasicConsoleReporter,
    VerboseConsoleReporter,
)
from orchid_diagnostics.reporting.export import (
    CONTENT_TYPE_HTML,
    CONTENT_TYPE_JSON,
    HttpResponse,
    exit_code,
    negotiate_format,
    render_html,
    render_http_response,
    render_json,
    results_to_dict,
)

__all__ = [
    "CONTENT_TYPE_HTML",
    "CONTENT_TYPE_JSON",
    "SYMBOLS",
    "BasicConsoleReporter",
    "HttpResponse",
    "VerboseConsoleReporter",
    "exit_code",
    "negotiate_format",
    "render_html",
    "render_http_response",
    "render_json",
    "results_to_dict",
]
