"""Shared types for the letspec helper engine."""

from enum import Enum


class ExampleState(Enum):
    """Lifecycle of a single example instance."""

    UNINITIALIZED = "uninitialized"
    SCOPE_BOUND = "scope_bound"  # Chain assigned, cache empty
    EAGER_PHASE = "eager_phase"  # Pre-example actions running
    RUNNING = "running"  # Body and post-example actions
    FINISHED = "finished"  # Cache discarded, terminal


class RedeclarationPolicy(Enum):
    """How a same-scope redeclaration treats the aliases of the declaration it replaces."""

    REPLACE = "replace"  # Drop every alias of the replaced declaration
    SHADOW_DEFAULT = "shadow_default"  # Rebind only the identifiers claimed again
