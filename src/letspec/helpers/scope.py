"""Group scopes and the chains examples execute within."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any, overload

from letspec.helpers.declaration import HelperDeclaration
from letspec.helpers.errors import ScopeFrozenError
from letspec.helpers.registry import HelperRegistry
from letspec.types import RedeclarationPolicy

if TYPE_CHECKING:
    from letspec.context.context import ExampleContext
    from letspec.helpers.eager import PreExampleAction


class Scope:
    """One example group's declarations.

    ``parent`` is a back-reference, not ownership. Scopes are built during
    collection and are read-only once frozen, so they can be shared by any
    number of concurrently running examples.
    """

    def __init__(
        self,
        description: str,
        parent: Scope | None = None,
        *,
        policy: RedeclarationPolicy | None = None,
    ) -> None:
        self.description = description
        self.parent = parent
        if policy is None:
            policy = parent.registry.policy if parent else RedeclarationPolicy.REPLACE
        self.registry = HelperRegistry(policy)
        self.pre_example_actions: list[PreExampleAction] = []
        self.post_example_actions: list[Callable[[ExampleContext], Any]] = []
        self.methods: dict[str, Callable[..., Any]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ScopeFrozenError(self.full_description)

    def declare(self, declaration: HelperDeclaration) -> None:
        self._check_mutable()
        self.registry.declare(declaration)

    def add_pre_example_action(self, action: PreExampleAction) -> None:
        self._check_mutable()
        self.pre_example_actions.append(action)

    def add_post_example_action(self, fn: Callable[[ExampleContext], Any]) -> None:
        self._check_mutable()
        self.post_example_actions.append(fn)

    def define_method(self, name: str, fn: Callable[..., Any]) -> None:
        self._check_mutable()
        self.methods[name] = fn

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    @property
    def full_description(self) -> str:
        return self.chain().describe()

    def chain(self) -> ScopeChain:
        """Return the chain from the root scope down to this one."""
        scopes: list[Scope] = []
        scope: Scope | None = self
        while scope is not None:
            scopes.append(scope)
            scope = scope.parent
        return ScopeChain(reversed(scopes))

    def __repr__(self) -> str:
        return f"<Scope {self.description!r} depth={self.depth}>"


class ScopeChain(Sequence[Scope]):
    """Ordered scopes from outermost to innermost. Immutable."""

    __slots__ = ("_scopes",)

    def __init__(self, scopes: Iterator[Scope] | Sequence[Scope] = ()) -> None:
        self._scopes: tuple[Scope, ...] = tuple(scopes)
        for outer, inner in zip(self._scopes, self._scopes[1:]):
            if inner.parent is not outer:
                raise ValueError(
                    f"{inner!r} is not nested directly under {outer!r}"
                )

    @overload
    def __getitem__(self, index: int) -> Scope: ...

    @overload
    def __getitem__(self, index: slice) -> ScopeChain: ...

    def __getitem__(self, index: int | slice) -> Scope | ScopeChain:
        if isinstance(index, slice):
            return ScopeChain(self._scopes[index])
        return self._scopes[index]

    def __len__(self) -> int:
        return len(self._scopes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScopeChain):
            return NotImplemented
        return self._scopes == other._scopes

    def __hash__(self) -> int:
        return hash(self._scopes)

    @property
    def innermost(self) -> Scope | None:
        return self._scopes[-1] if self._scopes else None

    def innermost_first(self) -> Iterator[Scope]:
        return reversed(self._scopes)

    def describe(self) -> str:
        return " ".join(scope.description for scope in self._scopes if scope.description)

    def __repr__(self) -> str:
        return f"ScopeChain({self.describe()!r})"
