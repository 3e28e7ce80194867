"""Turns heterogeneous check specifications into :class:`Check` objects.

A specification is one of:

* a check instance (anything exposing ``label`` and ``execute()``),
* a check class, instantiated without arguments,
* any other callable, wrapped in :class:`Callback`,
* a list or tuple ``[identifier, *params]``,
* a scalar identifier.

String identifiers are expanded through, in order, the named-provider
registry, the built-in namespace, the extension namespace and finally an
import of the identifier as a dotted path.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence, Set
from typing import Any

from orchid_diagnostics.engine.check import Callback, Check, LabelSettable
from orchid_diagnostics.engine.registry import CheckRegistry, ProviderRegistry
from orchid_diagnostics.errors import (
    CheckNotFoundError,
    DuplicateCheckError,
    InvalidCheckTypeError,
    InvalidSpecError,
)

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")

CheckSpecs = Mapping[Any, Any] | Sequence[Any]


def import_string(dotted_path: str) -> Any:
    """Import ``package.module.Attribute`` and return the attribute.

    Raises:
        ImportError: If the path is malformed, or the module or attribute is missing.
    """
    module_path, _, attribute = dotted_path.strip().rpartition(".")
    if not module_path or not attribute or not all(module_path.split(".")):
        raise ImportError(f"{dotted_path!r} is not an absolute dotted path")

    module = importlib.import_module(module_path)
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ImportError(f"Module {module_path!r} has no attribute {attribute!r}") from exc


def normalize_label(label: object) -> str | None:
    """Return the usable label, or None when the label should be ignored.

    Empty labels, numbers and numeric strings (positional keys) are ignored.
    """
    if label is None or isinstance(label, bool):
        return None
    if isinstance(label, (int, float)):
        return None
    text = str(label)
    if not text.strip() or _NUMERIC.match(text):
        return None
    return text


class CheckResolver:
    """Resolves check specifications for a group of checks."""

    def __init__(
        self,
        *,
        providers: ProviderRegistry | None = None,
        builtins: CheckRegistry | None = None,
        extensions: CheckRegistry | None = None,
        importer: Callable[[str], Any] = import_string,
    ) -> None:
        if builtins is None:
            from orchid_diagnostics.checks import default_builtin_registry

            builtins = default_builtin_registry()
        self._providers = providers
        self._builtins = builtins
        self._extensions = extensions if extensions is not None else CheckRegistry("extension")
        self._importer = importer

    @property
    def builtins(self) -> CheckRegistry:
        return self._builtins

    @property
    def extensions(self) -> CheckRegistry:
        return self._extensions

    def resolve_all(self, config: Mapping[str, CheckSpecs]) -> list[Check]:
        """Resolve every group in ``config``. The first invalid entry aborts resolution."""
        return [check for _, check in self.resolve_all_items(config)]

    def resolve_all_items(self, config: Mapping[str, CheckSpecs]) -> list[tuple[Any, Check]]:
        """Like :meth:`resolve_all`, keeping the configured label next to each check.

        Raises:
            DuplicateCheckError: If two entries resolve to the same check instance,
                e.g. one cached provider referenced under two labels.
        """
        seen: dict[int, str] = {}
        items: list[tuple[Any, Check]] = []
        for group, specs in config.items():
            items.extend(self._resolve_entries(group, specs, seen))
        return items

    def resolve_group(self, group: str, specs: CheckSpecs) -> list[Check]:
        """Resolve a ``{label: spec}`` mapping or a list of unlabelled specs."""
        return [check for _, check in self.resolve_group_items(group, specs)]

    def resolve_group_items(self, group: str, specs: CheckSpecs) -> list[tuple[Any, Check]]:
        """Like :meth:`resolve_group`, keeping the configured label next to each check."""
        return self._resolve_entries(group, specs, {})

    def _resolve_entries(
        self,
        group: str,
        specs: CheckSpecs,
        seen: dict[int, str],
    ) -> list[tuple[Any, Check]]:
        if isinstance(specs, Mapping):
            entries: Iterable[tuple[Any, Any]] = specs.items()
        elif isinstance(specs, Sequence) and not isinstance(specs, (str, bytes)):
            entries = enumerate(specs)
        else:
            raise InvalidSpecError(
                f'Check group "{group}" must be a mapping or a list, got {type(specs).__name__}'
            )

        items: list[tuple[Any, Check]] = []
        for label, spec in entries:
            check = self.resolve(group, label, spec)
            first_label = seen.get(id(check))
            if first_label is not None:
                raise DuplicateCheckError(first_label, check.label)
            seen[id(check)] = check.label
            items.append((label, check))
        return items

    def resolve(self, group: str, label: object, spec: Any) -> Check:
        """Resolve one specification into a check labelled ``"<group>: <label>"``."""
        check_label = normalize_label(label)

        if inspect.isclass(spec):
            return self._expand(group, check_label, spec, ())

        if isinstance(spec, Check):
            return self._apply_label(spec, group, check_label)

        if callable(spec):
            return self._apply_label(Callback(spec), group, check_label)

        if isinstance(spec, (list, tuple)):
            if not spec:
                raise InvalidSpecError(f'Cannot use an empty sequence as check definition in "{group}"')
            identifier, *params = spec
            return self._expand(group, check_label, identifier, tuple(params))

        if isinstance(spec, (str, int, float)):
            return self._expand(group, check_label, spec, ())

        if spec is None or isinstance(spec, (Mapping, Set, bytes, bytearray)):
            raise InvalidSpecError(
                f'Cannot understand diagnostic check definition of kind "{type(spec).__name__}" '
                f'in "{group}"'
            )

        raise InvalidCheckTypeError(spec, context=group)

    def _expand(
        self,
        group: str,
        label: str | None,
        identifier: Any,
        params: tuple[Any, ...],
    ) -> Check:
        is_name = isinstance(identifier, str)

        if is_name and self._providers is not None and self._providers.has(identifier):
            logger.debug("Resolved %s via provider registry", identifier)
            check = self._providers.get(identifier)
        elif is_name and identifier in self._builtins:
            check = self._instantiate(self._builtins.get(identifier), params, identifier, group)
        elif is_name and identifier in self._extensions:
            check = self._instantiate(self._extensions.get(identifier), params, identifier, group)
        elif inspect.isclass(identifier):
            check = self._instantiate(identifier, params, identifier, group)
        elif callable(identifier):
            return self._apply_label(Callback(identifier, params), group, label)
        elif is_name and "." in identifier:
            target = self._import(identifier, group)
            if inspect.isclass(target):
                check = self._instantiate(target, params, identifier, group)
            elif callable(target):
                return self._apply_label(Callback(target, params), group, label)
            else:
                check = target
        else:
            raise CheckNotFoundError(identifier, group)

        if inspect.isclass(check) or not isinstance(check, Check):
            raise InvalidCheckTypeError(check, context=group)
        return self._apply_label(check, group, label)

    @staticmethod
    def _instantiate(
        factory: Callable[..., Any] | None,
        params: tuple[Any, ...],
        identifier: Any,
        group: str,
    ) -> Any:
        if factory is None:
            raise CheckNotFoundError(identifier, group)
        name = getattr(identifier, "__name__", identifier)
        try:
            return factory(*params)
        except (TypeError, ValueError) as exc:
            raise InvalidSpecError(
                f'Cannot create check "{name}" in "{group}" with parameters {list(params)!r}: {exc}'
            ) from exc

    def _import(self, identifier: str, group: str) -> Any:
        try:
            return self._importer(identifier)
        except ImportError as exc:
            logger.debug("Import of %s failed: %s", identifier, exc)
            raise CheckNotFoundError(identifier, group) from exc

    @staticmethod
    def _apply_label(check: Check, group: str, label: str | None) -> Check:
        if label and isinstance(check, LabelSettable):
            check.set_label(f"{group}: {label}")
        return check
