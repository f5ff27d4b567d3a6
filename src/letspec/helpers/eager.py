"""Pre-example actions and the binder that turns eager helpers into them.

An eager declaration registers its pre-example action at the point of
declaration, so eager evaluation interleaves with ``before`` hooks in
declaration order instead of running in a separate phase of its own.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from letspec.helpers.declaration import HelperDeclaration
from letspec.helpers.scope import Scope, ScopeChain

if TYPE_CHECKING:
    from letspec.context.context import ExampleContext

logger = logging.getLogger(__name__)


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", repr(fn))


class PreExampleAction(ABC):
    """Something run against the example context before the body."""

    scope: Scope

    @abstractmethod
    def run(self, context: ExampleContext) -> None: ...

    @abstractmethod
    async def arun(self, context: ExampleContext) -> None: ...


class HookAction(PreExampleAction):
    """A user ``before`` hook."""

    def __init__(self, scope: Scope, fn: Callable[[ExampleContext], Any]) -> None:
        self.scope = scope
        self.fn = fn

    def run(self, context: ExampleContext) -> None:
        result = self.fn(context)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = f"Hook {_name(self.fn)} is async; run the example with the async runner"
            raise TypeError(msg)

    async def arun(self, context: ExampleContext) -> None:
        result = self.fn(context)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"<HookAction {_name(self.fn)} in {self.scope.description!r}>"


class EagerAction(PreExampleAction):
    """Forces one eager declaration through the example's cache."""

    def __init__(self, scope: Scope, declaration: HelperDeclaration) -> None:
        self.scope = scope
        self.declaration = declaration

    @property
    def superseded(self) -> bool:
        # Replaced in the same scope; the replacement binds its own action if eager.
        return not self.scope.registry.is_live(self.declaration)

    def run(self, context: ExampleContext) -> None:
        if self.superseded:
            return
        logger.debug("Eagerly evaluating %r", self.declaration)
        context.force(self.declaration)

    async def arun(self, context: ExampleContext) -> None:
        if self.superseded:
            return
        logger.debug("Eagerly evaluating %r", self.declaration)
        await context.aforce(self.declaration)

    def __repr__(self) -> str:
        return f"<EagerAction {self.declaration!r}>"


class EagerBinder:
    """Registers and runs the pre-example actions for a scope chain."""

    def bind(self, scope: Scope, declaration: HelperDeclaration) -> EagerAction:
        """Register the pre-example action for an eager ``declaration``."""
        if not declaration.eager:
            raise ValueError(f"{declaration!r} is not eager")
        action = EagerAction(scope, declaration)
        scope.add_pre_example_action(action)
        return action

    def pre_example_actions(self, chain: ScopeChain) -> Iterator[PreExampleAction]:
        """Outermost scope first, declaration order within a scope."""
        for scope in chain:
            yield from scope.pre_example_actions

    def run(self, context: ExampleContext) -> None:
        for action in self.pre_example_actions(context.chain):
            action.run(context)

    async def arun(self, context: ExampleContext) -> None:
        for action in self.pre_example_actions(context.chain):
            await action.arun(context)


binder = EagerBinder()
