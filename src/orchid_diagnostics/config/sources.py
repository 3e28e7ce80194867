"""Assembling and filtering check definitions from several sources."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from orchid_diagnostics.errors import (
    NoChecksConfiguredError,
    UnknownCheckGroupError,
    UnknownCheckLabelError,
)

if TYPE_CHECKING:
    from orchid_diagnostics.engine.check import Check

logger = logging.getLogger(__name__)

CheckConfig = dict[str, Any]
Contributors = Mapping[str, Any] | Iterable[tuple[str, Any]]


@runtime_checkable
class DiagnosticsContributor(Protocol):
    """A component contributing its own group of checks."""

    def get_diagnostics(self) -> Mapping[Any, Any] | Sequence[Any] | None: ...


def collect_check_config(
    base: Mapping[str, Any],
    contributors: Contributors = (),
    *,
    group: str | None = None,
) -> CheckConfig:
    """Merge the configured check groups with groups provided by contributors.

    A contributor's group replaces a configured group of the same name.
    Contributors without ``get_diagnostics()`` or returning something other than
    a mapping or list are ignored. Once the contributor named ``group`` has been
    collected, remaining contributors are not consulted.
    """
    config: CheckConfig = dict(base)
    items = contributors.items() if isinstance(contributors, Mapping) else contributors

    for name, contributor in items:
        if not isinstance(contributor, DiagnosticsContributor):
            continue
        checks = contributor.get_diagnostics()
        if isinstance(checks, Mapping) or (
            isinstance(checks, Sequence) and not isinstance(checks, (str, bytes))
        ):
            config[name] = checks
            logger.debug("Collected checks from contributor", extra={"group": name})

        if group and name.casefold() == group.casefold():
            break

    return config


def filter_check_config(config: Mapping[str, Any], group: str | None = None) -> CheckConfig:
    """Restrict ``config`` to ``group`` (case-insensitive) when one is requested.

    Raises:
        UnknownCheckGroupError: If ``group`` matches no configured group.
        NoChecksConfiguredError: If there is nothing to run.
    """
    if group:
        selected = {name: specs for name, specs in config.items() if name.casefold() == group.casefold()}
        if not selected:
            raise UnknownCheckGroupError(group)
    else:
        selected = dict(config)

    if not selected:
        raise NoChecksConfiguredError()
    return selected


def filter_checks_by_label(
    entries: Iterable[tuple[Any, Check]],
    label: str,
    *,
    group: str | None = None,
) -> list[Check]:
    """Keep checks whose configured or resolved label matches ``label`` (case-insensitive).

    Raises:
        UnknownCheckLabelError: If no check matches.
    """
    wanted = label.casefold()
    selected = [
        check
        for configured, check in entries
        if (isinstance(configured, str) and configured.casefold() == wanted)
        or check.label.casefold() == wanted
    ]
    if not selected:
        raise UnknownCheckLabelError(label, group)
    return selected
