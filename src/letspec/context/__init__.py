from .context import (
    EXAMPLE_CONTEXT,
    RESERVED_NAMES,
    ExampleContext,
    current_example,
    example_context_scope,
)

__all__ = [
    "ExampleContext",
    "EXAMPLE_CONTEXT",
    "RESERVED_NAMES",
    "current_example",
    "example_context_scope",
]
