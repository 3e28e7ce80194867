"""Built-in checks and the namespace registry that exposes them."""

from orchid_diagnostics.checks.builtin import (
    DirReadable,
    DirWritable,
    DiskFree,
    ModuleImportable,
    PythonVersion,
    ResourceHealthCheck,
    TcpConnection,
)
from orchid_diagnostics.engine.check import Callback
from orchid_diagnostics.engine.registry import CheckRegistry

BUILTIN_CHECKS = {
    "Callback": Callback,
    "DirReadable": DirReadable,
    "DirWritable": DirWritable,
    "DiskFree": DiskFree,
    "ModuleImportable": ModuleImportable,
    "PythonVersion": PythonVersion,
    "ResourceHealthCheck": ResourceHealthCheck,
    "TcpConnection": TcpConnection,
}


def default_builtin_registry() -> CheckRegistry:
    """Return a new registry holding the built-in checks."""
    registry = CheckRegistry("builtin")
    for identifier, factory in BUILTIN_CHECKS.items():
        registry.register(identifier, factory)
    return registry


__all__ = [
    "BUILTIN_CHECKS",
    "DirReadable",
    "DirWritable",
    "DiskFree",
    "ModuleImportable",
    "PythonVersion",
    "ResourceHealthCheck",
    "TcpConnection",
    "default_builtin_registry",
]
