from __future__ import annotations

import functools
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from types import SimpleNamespace
from typing import Any

from letspec.assertions.expectation import Expectation
from letspec.helpers.cache import MemoizationCache
from letspec.helpers.declaration import DEFAULT, HelperDeclaration, Identifier
from letspec.helpers.errors import ExampleLifecycleError
from letspec.helpers.resolver import HelperResolver, resolver as default_resolver
from letspec.helpers.scope import ScopeChain
from letspec.types import ExampleState


EXAMPLE_CONTEXT: ContextVar[ExampleContext | None] = ContextVar("example_context", default=None)

_READABLE = frozenset({ExampleState.EAGER_PHASE, ExampleState.RUNNING})


class ExampleContext:
    """Runtime object a single example executes against.

    Each context owns a private :class:`~letspec.helpers.cache.MemoizationCache`
    that lives exactly as long as the example. Helpers are reachable through
    :meth:`subject`, :meth:`get` and, for named helpers and methods declared
    with ``define``, plain attribute access::

        ctx.subject()
        ctx.count()          # same as ctx.get("count")
        ctx.is_expected().to(Equals(1))

    Attributes
    ----------
    description
        Full description of the example, for messages and reporting.
    state
        Mutable per-example namespace shared between hooks, helper blocks
        and the example body.
    """

    def __init__(
        self,
        chain: ScopeChain | None = None,
        *,
        description: str | None = None,
        resolver: HelperResolver | None = None,
    ) -> None:
        self.description = description
        self.state = SimpleNamespace()
        self._resolver = resolver or default_resolver
        self._cache = MemoizationCache()
        self._chain: ScopeChain | None = None
        self._phase = ExampleState.UNINITIALIZED
        if chain is not None:
            self.bind(chain)

    # Lifecycle

    @property
    def phase(self) -> ExampleState:
        return self._phase

    @property
    def chain(self) -> ScopeChain:
        if self._chain is None:
            raise ExampleLifecycleError("Example context is not bound to a scope chain")
        return self._chain

    @property
    def cache(self) -> MemoizationCache:
        return self._cache

    def _transition(self, expected: ExampleState, target: ExampleState) -> None:
        if self._phase is not expected:
            msg = (
                f"Cannot move example {self.description!r} to {target.value}: "
                f"it is {self._phase.value}, expected {expected.value}"
            )
            raise ExampleLifecycleError(msg)
        self._phase = target

    def bind(self, chain: ScopeChain) -> ExampleContext:
        self._transition(ExampleState.UNINITIALIZED, ExampleState.SCOPE_BOUND)
        self._chain = chain
        if self.description is None:
            self.description = chain.describe()
        return self

    def begin_eager_phase(self) -> None:
        self._transition(ExampleState.SCOPE_BOUND, ExampleState.EAGER_PHASE)

    def begin_running(self) -> None:
        self._transition(ExampleState.EAGER_PHASE, ExampleState.RUNNING)

    def finish(self) -> None:
        """Discard the cache. Terminal; the context is never reused."""
        self._cache.clear()
        self._phase = ExampleState.FINISHED

    def _check_readable(self) -> None:
        if self._phase not in _READABLE:
            msg = f"Helpers of example {self.description!r} cannot be read while it is {self._phase.value}"
            raise ExampleLifecycleError(msg)

    # Helper access

    def resolve(self, identifier: Identifier) -> HelperDeclaration:
        return self._resolver.resolve(self.chain, identifier)

    def get(self, identifier: Identifier) -> Any:
        """Resolve ``identifier`` and return its memoized value."""
        self._check_readable()
        return self._cache.get_or_compute(self.resolve(identifier), self)

    async def aget(self, identifier: Identifier) -> Any:
        """Async twin of :meth:`get`; accepts coroutine blocks."""
        self._check_readable()
        return await self._cache.get_or_compute_async(self.resolve(identifier), self)

    def subject(self) -> Any:
        return self.get(DEFAULT)

    async def asubject(self) -> Any:
        return await self.aget(DEFAULT)

    def force(self, declaration: HelperDeclaration) -> Any:
        """Compute a specific declaration, bypassing resolution."""
        self._check_readable()
        return self._cache.get_or_compute(declaration, self)

    async def aforce(self, declaration: HelperDeclaration) -> Any:
        self._check_readable()
        return await self._cache.get_or_compute_async(declaration, self)

    def is_memoized(self, identifier: Identifier) -> bool:
        """Return True if the helper ``identifier`` resolves to has been computed."""
        return self.resolve(identifier) in self._cache

    # Expectations

    def expect(self, actual: Any) -> Expectation:
        return Expectation(actual)

    def is_expected(self) -> Expectation:
        """One-liner expectation on :meth:`subject`."""
        return Expectation(self.subject())

    async def ais_expected(self) -> Expectation:
        return Expectation(await self.asubject())

    # Named accessors

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not regular attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        chain = self.__dict__.get("_chain")
        if chain is not None:
            for scope in chain.innermost_first():
                if name in scope.registry:
                    return functools.partial(self.get, name)
                if name in scope.methods:
                    return functools.partial(scope.methods[name], self)
        msg = f"{type(self).__name__!r} for {self.description!r} has no helper or method {name!r}"
        raise AttributeError(msg)

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        chain = self.__dict__.get("_chain")
        if chain is not None:
            names.update(i for i in self._resolver.reachable(chain) if isinstance(i, str))
            for scope in chain:
                names.update(scope.methods)
        return sorted(names)

    def __repr__(self) -> str:
        return f"<ExampleContext {self.description!r} {self._phase.value}>"


def current_example() -> ExampleContext | None:
    """Return the example context active in the current task, if any."""
    return EXAMPLE_CONTEXT.get()


@contextmanager
def example_context_scope(ctx: ExampleContext) -> Iterator[None]:
    token = EXAMPLE_CONTEXT.set(ctx)
    try:
        yield
    finally:
        EXAMPLE_CONTEXT.reset(token)


# Helper and method names that attribute access could never reach.
RESERVED_NAMES = frozenset(
    {name for name in dir(ExampleContext) if not name.startswith("_")} | {"description", "state"}
)
