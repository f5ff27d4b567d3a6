"""Shared fixtures for unit tests."""

import pytest

from letspec.reports.base import Reporter


class NullReporter(Reporter):
    """Silent reporter for testing."""

    async def on_collection_complete(self, examples) -> None:
        pass

    async def on_example_complete(self, result) -> None:
        pass

    async def on_run_complete(self, run_result) -> None:
        pass


class RecordingReporter(NullReporter):
    """Reporter that keeps every callback for assertions."""

    def __init__(self) -> None:
        self.collected = []
        self.completed = []
        self.run_results = []

    async def on_collection_complete(self, examples) -> None:
        self.collected.extend(examples)

    async def on_example_complete(self, result) -> None:
        self.completed.append(result)

    async def on_run_complete(self, run_result) -> None:
        self.run_results.append(run_result)


@pytest.fixture
def null_reporter() -> NullReporter:
    """Provide a silent reporter for tests."""
    return NullReporter()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()
