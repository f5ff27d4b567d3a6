"""Matchers applied to helper values by ``expect`` and ``is_expected``."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


def _short_repr(value: Any, width: int = 30) -> str:
    """One-line repr of ``value`` clipped to ``width``, used in matcher names."""
    text = " ".join(repr(value).split())
    if len(text) <= width:
        return text
    return f"{text[: width - 3]}..."


class AssertionResult(BaseModel):
    """Outcome of matching one value.

    Attributes:
    ----------
    assertion_name : str
        Name of the matcher, e.g. ``Equals(3)`` or ``not Contains('x')``
    passed : bool
        Whether the value was accepted
    message : str | None
        Why the value was rejected; ``None`` when it passed
    """

    assertion_name: str
    passed: bool
    message: str | None = None

    def __bool__(self) -> bool:
        return self.passed

    def describe(self) -> str:
        if self.message:
            return f"{self.assertion_name} failed: {self.message}"
        return f"{self.assertion_name} failed"


class AssertionFailedError(AssertionError):
    """Raised when a matcher rejects a value; the runner reports it as a failure."""

    def __init__(self, result: AssertionResult) -> None:
        self.assertion_result = result
        super().__init__(result.describe())


class Assertion(ABC):
    """A matcher that judges a single value.

    Subclasses set ``name`` and implement :meth:`evaluate`. Calling a matcher
    raises :class:`AssertionFailedError` on rejection, so ``Equals(3)(value)``
    works on its own inside an example body. ``~matcher`` negates it.
    """

    name: str

    @abstractmethod
    def evaluate(self, actual: Any) -> AssertionResult: ...

    def __call__(self, actual: Any) -> AssertionResult:
        result = self.evaluate(actual)
        if not result:
            raise AssertionFailedError(result)
        return result

    def __invert__(self) -> "Assertion":
        return Not(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class Not(Assertion):
    """Accepts exactly the values the wrapped matcher rejects."""

    def __init__(self, assertion: Assertion):
        self.assertion = assertion
        self.name = f"not {assertion.name}"

    def evaluate(self, actual: Any) -> AssertionResult:
        passed = not self.assertion.evaluate(actual)
        return AssertionResult(
            assertion_name=self.name,
            passed=passed,
            message=None if passed else f"Did not expect a match for {actual!r}",
        )

    def __invert__(self) -> Assertion:
        return self.assertion
