"""Registries used to expand check identifiers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from orchid_diagnostics.errors import ProviderNotFoundError

logger = logging.getLogger(__name__)

CheckFactory = Callable[..., Any]
ProviderFactory = Callable[[], Any]


@runtime_checkable
class ProviderRegistry(Protocol):
    """Named-provider lookup consulted before any check namespace."""

    def has(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...


@dataclass(slots=True)
class ProviderManager:
    """Stores pre-configured check providers by name.

    Example usage::

        providers = ProviderManager()

        # Register a ready instance
        providers.register("db.ping", DatabasePing(pool))

        # Or a factory, built on first lookup and cached
        providers.register_factory("cache.ping", lambda: CachePing(redis_client))

        resolver = CheckResolver(providers=providers)
    """

    _providers: dict[str, Any] = field(default_factory=dict)
    _factories: dict[str, ProviderFactory] = field(default_factory=dict)

    def register(self, name: str, provider: Any) -> None:
        """Register a provider instance by name."""
        self._factories.pop(name, None)
        self._providers[name] = provider

    def register_factory(self, name: str, factory: ProviderFactory) -> None:
        """Register a zero-argument factory; it runs once on first :meth:`get`."""
        self._providers.pop(name, None)
        self._factories[name] = factory

    def has(self, name: str) -> bool:
        """Check if a provider is registered."""
        return name in self._providers or name in self._factories

    def get(self, name: str) -> Any:
        """Retrieve a provider by name, building it from its factory if needed."""
        if name in self._providers:
            return self._providers[name]
        factory = self._factories.pop(name, None)
        if factory is None:
            raise ProviderNotFoundError(f"Provider not found: {name}")
        provider = factory()
        self._providers[name] = provider
        logger.debug("Built provider %s from factory", name)
        return provider

    def names(self) -> list[str]:
        return sorted({*self._providers, *self._factories})


class CheckRegistry:
    """Maps check identifiers to factories for one namespace.

    Factories receive the positional parameters of a compound specification,
    so a check class is itself a valid factory.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._factories: dict[str, CheckFactory] = {}

    def register(self, identifier: str, factory: CheckFactory, *, replace: bool = False) -> None:
        """Register ``factory`` under ``identifier``.

        Raises:
            ValueError: If the identifier is already taken and ``replace`` is False.
        """
        if not replace and identifier in self._factories:
            raise ValueError(
                f"Check {identifier!r} is already registered in the {self.name} namespace"
            )
        self._factories[identifier] = factory
        logger.debug("Registered check %s in %s namespace", identifier, self.name)

    def unregister(self, identifier: str) -> None:
        if identifier not in self._factories:
            raise KeyError(f"Check {identifier!r} is not registered in the {self.name} namespace")
        del self._factories[identifier]

    def get(self, identifier: str) -> CheckFactory | None:
        return self._factories.get(identifier)

    def create(self, identifier: str, params: tuple[Any, ...] = ()) -> Any:
        """Instantiate the check registered as ``identifier`` with positional ``params``."""
        factory = self._factories.get(identifier)
        if factory is None:
            raise KeyError(f"Check {identifier!r} is not registered in the {self.name} namespace")
        return factory(*params)

    def identifiers(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers())

    def __len__(self) -> int:
        return len(self._factories)
