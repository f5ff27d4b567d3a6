"""letspec - scoped, memoized subject and let helpers for example groups."""

from .assertions import Contains, Equals, Satisfies, StartsWith
from .config import LetspecConfig, load_config
from .context import ExampleContext, current_example
from .helpers import (
    DEFAULT,
    CircularHelperEvaluation,
    HelperError,
    NoSuchHelper,
)
from .testing import ExampleGroup, Runner, RunResult, describe, run
from .types import ExampleState, RedeclarationPolicy
from .version import __version__


__all__ = [
    # Building groups
    "describe",
    "ExampleGroup",
    "DEFAULT",
    # Running
    "Runner",
    "RunResult",
    "run",
    "ExampleContext",
    "ExampleState",
    "current_example",
    # Errors
    "HelperError",
    "NoSuchHelper",
    "CircularHelperEvaluation",
    # Assertions
    "Equals",
    "Contains",
    "StartsWith",
    "Satisfies",
    # Configuration
    "LetspecConfig",
    "RedeclarationPolicy",
    "load_config",
    "__version__",
]
