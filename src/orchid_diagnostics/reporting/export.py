"""Machine-readable export of result collections and output negotiation."""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Any, Literal

from orchid_diagnostics.engine.collection import ResultCollection
from orchid_diagnostics.engine.result import Outcome, classify_result

CONTENT_TYPE_HTML = "text/html"
CONTENT_TYPE_JSON = "application/json"

OutputFormat = Literal["html", "json"]


def results_to_dict(results: ResultCollection) -> dict[str, Any]:
    """Flatten a result collection into the canonical export record.

    Details are keyed by check label; when labels collide the later check wins,
    while the counters always cover every executed check.
    """
    details: dict[str, dict[str, Any]] = {}
    for check, result in results.items():
        details[check.label] = {
            "outcome": classify_result(result).value,
            "message": result.message,
            "data": result.data,
        }

    return {
        "details": details,
        "success": results.count(Outcome.SUCCESS),
        "warning": results.count(Outcome.WARNING),
        "failure": results.count(Outcome.FAILURE),
        "skip": results.count(Outcome.SKIP),
        "unknown": results.count(Outcome.UNKNOWN),
        "passed": results.failure_count == 0,
    }


def exit_code(results: ResultCollection) -> int:
    """Console convention: 0 when nothing failed, 1 otherwise."""
    return 0 if results.failure_count == 0 else 1


def render_json(results: ResultCollection, *, indent: int | None = None) -> str:
    return json.dumps(results_to_dict(results), default=str, indent=indent)


def render_html(results: ResultCollection, *, title: str = "Diagnostics") -> str:
    """Render a self-contained HTML page summarizing the results."""
    record = results_to_dict(results)
    rows = []
    for check, result in results.items():
        outcome = classify_result(result).value
        rows.append(
            f'<tr class="{outcome}"><td>{html.escape(check.label)}</td>'
            f"<td>{outcome}</td><td>{html.escape(result.message)}</td></tr>"
        )
    summary = ", ".join(
        f"{record[outcome.value]} {outcome.value}" for outcome in Outcome if record[outcome.value]
    )
    status = "passed" if record["passed"] else "failed"
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{html.escape(title)}</title></head>\n"
        f"<body><h1>{html.escape(title)}: {status}</h1>\n"
        f"<p>{html.escape(summary or 'no checks executed')}</p>\n"
        "<table><thead><tr><th>Check</th><th>Outcome</th><th>Message</th></tr></thead>\n"
        f"<tbody>{''.join(rows)}</tbody></table>\n"
        "</body></html>\n"
    )


def negotiate_format(accept: str | None) -> OutputFormat:
    """Pick the response representation from an Accept header.

    HTML wins when the client accepts it (wildcards included) or when it does
    not accept JSON at all.
    """
    media_types = _parse_accept(accept or CONTENT_TYPE_HTML)
    if _accepts(media_types, CONTENT_TYPE_HTML) or not _accepts(media_types, CONTENT_TYPE_JSON):
        return "html"
    return "json"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Framework-agnostic response produced from a result collection."""

    status_code: int
    content_type: str
    body: str


def render_http_response(
    results: ResultCollection,
    accept: str | None = None,
    *,
    failure_status: int = 503,
) -> HttpResponse:
    """Render ``results`` for an HTTP caller, honouring the Accept header."""
    status_code = 200 if results.passed else failure_status
    if negotiate_format(accept) == "json":
        return HttpResponse(status_code, CONTENT_TYPE_JSON, render_json(results))
    return HttpResponse(status_code, f"{CONTENT_TYPE_HTML}; charset=utf-8", render_html(results))


def _parse_accept(header: str) -> list[str]:
    media_types = []
    for part in header.split(","):
        media_type, _, params = part.strip().partition(";")
        if _quality(params) <= 0:
            continue
        if media_type:
            media_types.append(media_type.strip().lower())
    return media_types


def _quality(params: str) -> float:
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def _accepts(media_types: list[str], content_type: str) -> bool:
    main_type = content_type.split("/", 1)[0]
    return any(
        candidate in (content_type, f"{main_type}/*", "*/*") for candidate in media_types
    )
