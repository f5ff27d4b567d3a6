"""Assertion library for example validation."""

from .base import Assertion, AssertionFailedError, AssertionResult, Not
from .basic import Contains, Equals, Satisfies, StartsWith
from .expectation import Expectation

__all__ = [
    "Assertion",
    "AssertionFailedError",
    "AssertionResult",
    "Contains",
    "Equals",
    "Expectation",
    "Not",
    "Satisfies",
    "StartsWith",
]
