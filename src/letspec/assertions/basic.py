"""Basic assertion implementations."""

from collections.abc import Callable
from typing import Any

from letspec.assertions.base import Assertion, AssertionResult, _short_repr


class Equals(Assertion):
    """Assertion that checks equality with an expected value."""

    def __init__(self, expected: Any):
        self.expected = expected
        self.name = f"Equals({_short_repr(expected)})"

    def evaluate(self, actual: Any) -> AssertionResult:
        passed = actual == self.expected
        return AssertionResult(
            assertion_name=self.name,
            passed=passed,
            message=None if passed else f"Expected: {self.expected!r}, Got: {actual!r}",
        )


class Contains(Assertion):
    """Assertion that checks if the value contains an item or substring."""

    def __init__(self, item: Any):
        self.item = item
        self.name = f"Contains({_short_repr(item)})"

    def evaluate(self, actual: Any) -> AssertionResult:
        try:
            passed = self.item in actual
        except TypeError:
            passed = False
        return AssertionResult(
            assertion_name=self.name,
            passed=passed,
            message=None if passed else f"Expected to contain: {self.item!r}, Got: {actual!r}",
        )


class StartsWith(Assertion):
    """Assertion that checks if the string form of the value starts with a prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        self.name = f"StartsWith({_short_repr(prefix)})"

    def evaluate(self, actual: Any) -> AssertionResult:
        actual_str = str(actual)
        passed = actual_str.startswith(self.prefix)
        return AssertionResult(
            assertion_name=self.name,
            passed=passed,
            message=None if passed else f"Expected to start with: {self.prefix!r}, Got: {actual_str!r}",
        )


class Satisfies(Assertion):
    """Assertion backed by an arbitrary predicate."""

    def __init__(self, predicate: Callable[[Any], bool], description: str | None = None):
        self.predicate = predicate
        self.name = f"Satisfies({description or getattr(predicate, '__name__', 'predicate')})"

    def evaluate(self, actual: Any) -> AssertionResult:
        passed = bool(self.predicate(actual))
        return AssertionResult(
            assertion_name=self.name,
            passed=passed,
            message=None if passed else f"Predicate rejected {actual!r}",
        )
