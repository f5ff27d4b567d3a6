"""Nearest-declaration lookup across a scope chain."""

from __future__ import annotations

import logging

from letspec.helpers.declaration import HelperDeclaration, Identifier
from letspec.helpers.errors import NoSuchHelper
from letspec.helpers.scope import ScopeChain

logger = logging.getLogger(__name__)


class HelperResolver:
    """Finds the innermost declaration of an identifier.

    Resolution runs on every read and is never cached here: the same frozen
    scopes serve many example instances, each with its own cache.
    """

    def resolve(self, chain: ScopeChain, identifier: Identifier) -> HelperDeclaration:
        for scope in chain.innermost_first():
            declaration = scope.registry.lookup(identifier)
            if declaration is not None:
                logger.debug("Resolved %r to %r", identifier, declaration)
                return declaration
        raise NoSuchHelper(identifier, chain.describe())

    def reachable(self, chain: ScopeChain) -> dict[Identifier, HelperDeclaration]:
        """Return the declaration each identifier resolves to for ``chain``."""
        visible: dict[Identifier, HelperDeclaration] = {}
        for scope in chain.innermost_first():
            for identifier in scope.registry.identifiers():
                if identifier not in visible:
                    declaration = scope.registry.lookup(identifier)
                    if declaration is not None:
                        visible[identifier] = declaration
        return visible

    def is_declared(self, chain: ScopeChain, identifier: Identifier) -> bool:
        return any(identifier in scope.registry for scope in chain)


resolver = HelperResolver()
