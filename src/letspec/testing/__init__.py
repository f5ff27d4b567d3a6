"""Example groups and the runner that drives the helper engine.

Provides an RSpec-like builder (``describe``, ``subject``, ``let``, ``it``)
and the per-example lifecycle used to execute examples.
"""

from .group import Example, ExampleGroup, describe
from .runner import (
    ExampleResult,
    ExampleStatus,
    Runner,
    RunResult,
    arun_body,
    arun_eager_phase,
    arun_post_example_actions,
    create_example_context,
    discard,
    run,
    run_body,
    run_eager_phase,
    run_post_example_actions,
)


__all__ = [
    "Example",
    "ExampleGroup",
    "describe",
    "Runner",
    "RunResult",
    "ExampleResult",
    "ExampleStatus",
    "run",
    "create_example_context",
    "run_eager_phase",
    "arun_eager_phase",
    "run_body",
    "arun_body",
    "run_post_example_actions",
    "arun_post_example_actions",
    "discard",
]
