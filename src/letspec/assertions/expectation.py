"""Expectation wrapper used by ``expect`` and the ``is_expected`` one-liner."""

from __future__ import annotations

from typing import Any

from letspec.assertions.base import Assertion, AssertionResult, Not


class Expectation:
    """Applies matchers to a single target value."""

    def __init__(self, actual: Any) -> None:
        self.actual = actual

    def to(self, assertion: Assertion) -> AssertionResult:
        return assertion(self.actual)

    def not_to(self, assertion: Assertion) -> AssertionResult:
        return Not(assertion)(self.actual)

    to_not = not_to

    def __repr__(self) -> str:
        return f"Expectation({self.actual!r})"
