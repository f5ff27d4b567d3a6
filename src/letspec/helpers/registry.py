"""Per-scope registry of helper declarations."""

from __future__ import annotations

import logging

from letspec.helpers.declaration import HelperDeclaration, Identifier
from letspec.types import RedeclarationPolicy

logger = logging.getLogger(__name__)


class HelperRegistry:
    """Declarations made directly in one scope.

    Lookups never walk to enclosing scopes; that is the resolver's job.
    Redeclaring an identifier is last-write-wins and never an error.
    """

    def __init__(self, policy: RedeclarationPolicy = RedeclarationPolicy.REPLACE) -> None:
        self.policy = policy
        self._bindings: dict[Identifier, HelperDeclaration] = {}
        self._declared: list[HelperDeclaration] = []

    def declare(self, declaration: HelperDeclaration) -> None:
        """Bind every identifier of ``declaration`` in this scope."""
        replaced = {
            self._bindings[identifier]
            for identifier in declaration.identifiers
            if identifier in self._bindings
        }

        if self.policy is RedeclarationPolicy.REPLACE:
            for old in replaced:
                for identifier in old.identifiers:
                    if self._bindings.get(identifier) is old:
                        del self._bindings[identifier]

        for identifier in declaration.identifiers:
            self._bindings[identifier] = declaration

        if replaced:
            logger.debug(
                "%r replaced %s under policy %s",
                declaration,
                ", ".join(repr(old) for old in replaced),
                self.policy.value,
            )

        if declaration not in self._declared:
            self._declared.append(declaration)

    def lookup(self, identifier: Identifier) -> HelperDeclaration | None:
        """Return the declaration bound to ``identifier`` in this scope only."""
        return self._bindings.get(identifier)

    def is_live(self, declaration: HelperDeclaration) -> bool:
        """Return True if any identifier is still bound to ``declaration``."""
        return any(bound is declaration for bound in self._bindings.values())

    def declarations(self) -> list[HelperDeclaration]:
        """Live declarations, in the order they were declared."""
        return [d for d in self._declared if self.is_live(d)]

    def identifiers(self) -> list[Identifier]:
        return list(self._bindings)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._bindings

    def __len__(self) -> int:
        return len(self.declarations())
