"""Helper resolution error types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def _display(identifier: Any) -> str:
    return str(identifier)


class HelperError(Exception):
    """Base class for failures raised by the helper engine itself."""


class NoSuchHelper(HelperError, LookupError):
    """Raised when no scope in the chain declares the requested identifier."""

    def __init__(self, identifier: Any, scope_description: str) -> None:
        self.identifier = identifier
        self.scope_description = scope_description

        message = f"No helper {_display(identifier)!r} is declared for {scope_description!r}"
        if _display(identifier) == "subject":
            message += " (declare one with `subject` or `subject_eager`)"

        super().__init__(message)


class CircularHelperEvaluation(HelperError):
    """Raised when a helper block re-enters its own resolution before completing."""

    def __init__(self, path: Sequence[Any]) -> None:
        self.path = tuple(path)
        rendered = " -> ".join(_display(identifier) for identifier in self.path)
        super().__init__(f"Circular helper evaluation: {rendered}")


class ScopeFrozenError(RuntimeError):
    """Raised when a scope is mutated after collection has finished."""

    def __init__(self, scope_description: str) -> None:
        self.scope_description = scope_description
        super().__init__(
            f"Scope {scope_description!r} is frozen; helpers and hooks must be "
            "declared before examples run"
        )


class ExampleLifecycleError(RuntimeError):
    """Raised when an example context is used outside the states that allow it."""
