"""Minimal FastAPI integration exposing diagnostics over HTTP."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request, Response

from orchid_diagnostics import DiagnosticsApp, RunOptions
from orchid_diagnostics.config import load_config

diagnostics = DiagnosticsApp(load_config(config_dir=Path(__file__).parent / "config"))

app = FastAPI()


@app.get("/diagnostics")
@app.get("/diagnostics/{group}")
def run_diagnostics(request: Request, group: str | None = None) -> Response:
    results = diagnostics.run(RunOptions(group=group))
    rendered = diagnostics.http_response(results, request.headers.get("accept"))
    return Response(
        content=rendered.body,
        status_code=rendered.status_code,
        media_type=rendered.content_type,
    )
