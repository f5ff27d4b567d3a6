"""Per-example memoization of helper values."""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from letspec.helpers.declaration import HelperDeclaration
from letspec.helpers.errors import CircularHelperEvaluation, ExampleLifecycleError

if TYPE_CHECKING:
    from letspec.context.context import ExampleContext

logger = logging.getLogger(__name__)


# Declarations currently being computed along the logical call chain. Tasks
# spawned from inside a block inherit it, sibling readers do not.
_EVALUATING: ContextVar[tuple[tuple[MemoizationCache, HelperDeclaration], ...]] = ContextVar(
    "helper_evaluation_stack", default=()
)


class MemoizationCache:
    """Values computed for one example instance, keyed by declaration identity.

    A block runs at most once per declaration per instance. Failures are not
    stored; the exception goes to the caller unchanged.
    """

    def __init__(self) -> None:
        self._values: dict[HelperDeclaration, Any] = {}
        self._pending: dict[HelperDeclaration, asyncio.Future[Any]] = {}

    def __contains__(self, declaration: object) -> bool:
        return declaration in self._values

    def __len__(self) -> int:
        return len(self._values)

    def clear(self) -> None:
        self._values.clear()
        for future in self._pending.values():
            future.cancel()
        self._pending.clear()

    def _enter(self, declaration: HelperDeclaration) -> tuple[tuple[MemoizationCache, HelperDeclaration], ...]:
        stack = _EVALUATING.get()
        for index, (cache, active) in enumerate(stack):
            if cache is self and active is declaration:
                path = [entry.label for _, entry in stack[index:]]
                path.append(declaration.label)
                raise CircularHelperEvaluation(path)
        return (*stack, (self, declaration))

    def get_or_compute(self, declaration: HelperDeclaration, context: ExampleContext) -> Any:
        """Return the memoized value, running the block on first use."""
        if declaration in self._values:
            return self._values[declaration]
        # A block re-entering its own in-flight computation is a cycle, not a race.
        stack = self._enter(declaration)
        if declaration in self._pending:
            msg = f"{declaration!r} is being computed asynchronously; read it with `aget`"
            raise ExampleLifecycleError(msg)

        token = _EVALUATING.set(stack)
        try:
            logger.debug("Computing %r", declaration)
            value = declaration.block(context)
            if inspect.isawaitable(value):
                if inspect.iscoroutine(value):
                    value.close()
                msg = (
                    f"{declaration!r} has an async block; read it with "
                    f"`await ctx.aget({declaration.label!r})`"
                )
                raise TypeError(msg)
        finally:
            _EVALUATING.reset(token)

        self._values[declaration] = value
        return value

    async def get_or_compute_async(
        self, declaration: HelperDeclaration, context: ExampleContext
    ) -> Any:
        """Async variant. Concurrent readers share one in-flight computation."""
        if declaration in self._values:
            return self._values[declaration]

        stack = self._enter(declaration)
        pending = self._pending.get(declaration)
        if pending is None:
            pending = asyncio.ensure_future(self._evaluate(declaration, context, stack))
            self._pending[declaration] = pending
        else:
            logger.debug("Awaiting in-flight computation of %r", declaration)
        return await asyncio.shield(pending)

    async def _evaluate(
        self,
        declaration: HelperDeclaration,
        context: ExampleContext,
        stack: tuple[tuple[MemoizationCache, HelperDeclaration], ...],
    ) -> Any:
        token = _EVALUATING.set(stack)
        try:
            logger.debug("Computing %r", declaration)
            value = declaration.block(context)
            if inspect.isawaitable(value):
                value = await value
            self._values[declaration] = value
            return value
        finally:
            _EVALUATING.reset(token)
            self._pending.pop(declaration, None)
