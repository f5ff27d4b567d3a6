"""Scoped, memoized helper resolution.

Scopes own declarations, the resolver picks the innermost one, and each
example instance memoizes values in its own cache.
"""

from .cache import MemoizationCache
from .declaration import DEFAULT, HelperDeclaration, Identifier
from .declare import declare_helper
from .eager import EagerAction, EagerBinder, HookAction, PreExampleAction, binder
from .errors import (
    CircularHelperEvaluation,
    ExampleLifecycleError,
    HelperError,
    NoSuchHelper,
    ScopeFrozenError,
)
from .registry import HelperRegistry
from .resolver import HelperResolver, resolver
from .scope import Scope, ScopeChain


__all__ = [
    "DEFAULT",
    "HelperDeclaration",
    "Identifier",
    "HelperRegistry",
    "Scope",
    "ScopeChain",
    "HelperResolver",
    "resolver",
    "MemoizationCache",
    "PreExampleAction",
    "HookAction",
    "EagerAction",
    "EagerBinder",
    "binder",
    "declare_helper",
    "HelperError",
    "NoSuchHelper",
    "CircularHelperEvaluation",
    "ScopeFrozenError",
    "ExampleLifecycleError",
]
