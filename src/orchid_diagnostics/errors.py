"""Custom exceptions for orchid diagnostics."""

from __future__ import annotations


class DiagnosticsError(Exception):
    """Base exception for this package."""


class MissingDependencyError(DiagnosticsError):
    """Raised when an optional dependency is required but not installed."""


class ProviderNotFoundError(DiagnosticsError):
    """Raised when requesting an unknown named provider."""


class ConfigurationError(DiagnosticsError):
    """Raised before a run when the set of checks to execute cannot be determined."""


class NoChecksConfiguredError(ConfigurationError):
    """Raised when no diagnostic checks are enabled at all."""

    def __init__(self) -> None:
        super().__init__(
            "There are no diagnostic checks currently enabled - add one or more entries "
            "to the 'diagnostics.checks' settings or register a contributor exposing "
            "get_diagnostics()."
        )


class UnknownCheckGroupError(ConfigurationError):
    """Raised when a requested check group does not exist."""

    def __init__(self, group: str) -> None:
        self.group = group
        super().__init__(f'Unable to find a group of diagnostic checks called "{group}".')


class UnknownCheckLabelError(ConfigurationError):
    """Raised when a requested check label does not exist in the selected checks."""

    def __init__(self, label: str, group: str | None = None) -> None:
        self.label = label
        self.group = group
        where = f' in group "{group}"' if group else ""
        super().__init__(f'Unable to find a diagnostic check labelled "{label}"{where}.')


class ResolutionError(DiagnosticsError):
    """Base exception for failures turning a check specification into a check."""


class InvalidSpecError(ResolutionError):
    """Raised when a check specification has a shape that cannot be interpreted."""


class CheckNotFoundError(ResolutionError):
    """Raised when a check identifier cannot be expanded by any lookup strategy."""

    def __init__(self, identifier: object, group: str) -> None:
        self.identifier = identifier
        self.group = group
        super().__init__(
            f'Cannot find check class or provider with the name of "{identifier}" ({group})'
        )


class InvalidCheckTypeError(ResolutionError, TypeError):
    """Raised when an object does not satisfy the check contract."""

    def __init__(self, obj: object, *, context: str | None = None) -> None:
        self.obj = obj
        type_name = f"{type(obj).__module__}.{type(obj).__qualname__}"
        suffix = f" ({context})" if context else ""
        super().__init__(
            f'Cannot use object of type "{type_name}" as check{suffix}: '
            "expected an object exposing a label and execute()"
        )


class DuplicateCheckError(ResolutionError, ValueError):
    """Raised when the same check instance would be run more than once."""

    def __init__(self, label: str, duplicate_label: str | None = None) -> None:
        self.label = label
        self.duplicate_label = duplicate_label
        if duplicate_label is None:
            message = f'Check "{label}" was already added; a check instance runs once per run'
        else:
            message = (
                f'Checks "{label}" and "{duplicate_label}" resolve to the same check instance; '
                "register a provider factory per label or use distinct instances"
            )
        super().__init__(message)
