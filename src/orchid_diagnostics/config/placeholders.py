"""Environment variable placeholder resolution.

Supports ``${VAR}`` and ``${VAR:-default}``. A value that consists of a single
placeholder keeps the resolved string; check parameters that must be numbers
are converted by the checks themselves.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

from orchid_diagnostics.config.errors import PlaceholderResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")


def resolve_placeholders(
    data: Mapping[str, Any],
    *,
    strict: bool = True,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return a copy of ``data`` with placeholders resolved in every string value.

    Raises:
        PlaceholderResolutionError: If ``strict`` is set and a placeholder without
            a default names an unset variable.
    """
    env = os.environ if environ is None else environ
    return {key: _resolve(value, str(key), strict, env) for key, value in data.items()}


def _resolve(value: Any, path: str, strict: bool, env: Mapping[str, str]) -> Any:
    if isinstance(value, Mapping):
        return {key: _resolve(item, f"{path}.{key}", strict, env) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve(item, f"{path}[{index}]", strict, env) for index, item in enumerate(value)]
    if not isinstance(value, str):
        return value

    def replace_match(match: re.Match[str]) -> str:
        name = match.group("name")
        if name in env:
            return env[name]
        default = match.group("default")
        if default is not None:
            return default
        if strict:
            raise PlaceholderResolutionError(match.group(0), path)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace_match, value)
