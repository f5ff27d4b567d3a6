"""Base reporter protocol for letspec run output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from letspec.testing.group import Example
    from letspec.testing.runner import ExampleResult, RunResult


class Reporter(Protocol):
    """Protocol defining the interface for run reporters.

    All methods are async so I/O-bound reporters fit. Sync reporters can
    implement these as coroutines that don't await anything.
    """

    async def on_collection_complete(self, examples: list[Example]) -> None:
        """Called once groups are frozen and examples collected."""
        ...

    async def on_example_complete(self, result: ExampleResult) -> None:
        """Called after each example, including skipped ones."""
        ...

    async def on_run_complete(self, run_result: RunResult) -> None:
        """Called after all examples complete."""
        ...
