"""Rich console reporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from letspec.config import LetspecConfig
from letspec.testing.runner import ExampleStatus

if TYPE_CHECKING:
    from letspec.testing.group import Example
    from letspec.testing.runner import ExampleResult, RunResult


_STYLES = {
    ExampleStatus.PASSED: ("green", ".", "PASSED"),
    ExampleStatus.FAILED: ("red", "F", "FAILED"),
    ExampleStatus.ERROR: ("bold red", "E", "ERROR"),
    ExampleStatus.SKIPPED: ("yellow", "s", "SKIPPED"),
}


class ConsoleReporter:
    """Prints progress and a summary to a rich console.

    verbosity < 0 prints only the summary, 0 prints one character per
    example, > 0 prints one line per example.
    """

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity

    @classmethod
    def from_config(cls, config: LetspecConfig, console: Console | None = None) -> ConsoleReporter:
        """Build a reporter using the configured verbosity."""
        return cls(console=console, verbosity=config.verbosity)

    async def on_collection_complete(self, examples: list[Example]) -> None:
        if self.verbosity >= 0:
            self.console.print(f"[bold]collected {len(examples)} examples[/bold]")

    async def on_example_complete(self, result: ExampleResult) -> None:
        style, char, label = _STYLES[result.status]
        if self.verbosity > 0:
            self.console.print(
                f"{escape(result.full_description)} [{style}]{label}[/{style}] "
                f"[dim]({result.duration_ms:.1f}ms)[/dim]",
                highlight=False,
            )
        elif self.verbosity == 0:
            self.console.print(f"[{style}]{char}[/{style}]", end="")

    async def on_run_complete(self, run_result: RunResult) -> None:
        if self.verbosity == 0 and run_result.total:
            self.console.print()

        problems = [
            r for r in run_result.results
            if r.status in {ExampleStatus.FAILED, ExampleStatus.ERROR}
        ]
        for result in problems:
            style, _, label = _STYLES[result.status]
            self.console.rule(f"[{style}]{label}[/{style}] {escape(result.full_description)}")
            error = result.error
            self.console.print(escape(f"{type(error).__name__}: {error}"), highlight=False)

        parts = [f"[green]{run_result.passed} passed[/green]"]
        if run_result.failed:
            parts.append(f"[red]{run_result.failed} failed[/red]")
        if run_result.errors:
            parts.append(f"[bold red]{run_result.errors} errors[/bold red]")
        if run_result.skipped:
            parts.append(f"[yellow]{run_result.skipped} skipped[/yellow]")
        seconds = run_result.duration_ms / 1000
        self.console.print(f"{', '.join(parts)} in {seconds:.2f}s")
