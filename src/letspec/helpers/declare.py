"""Entry point used by group builders to record helper declarations."""

from __future__ import annotations

from letspec.helpers.declaration import DefinitionBlock, HelperDeclaration
from letspec.helpers.eager import binder
from letspec.helpers.scope import Scope


def declare_helper(
    scope: Scope,
    identifier: str | None,
    block: DefinitionBlock,
    eager: bool = False,
    *,
    subject: bool = True,
) -> HelperDeclaration:
    """Declare a helper in ``scope`` and bind its eager action if needed.

    Args:
        scope: Scope that owns the declaration.
        identifier: Helper name, or ``None`` for the unnamed subject.
        block: Called with the example context on first read.
        eager: Force evaluation before the example body.
        subject: Also bind the default ``subject`` identifier. ``let``
            declarations pass ``False``.
    """
    declaration = HelperDeclaration(
        name=identifier,
        block=block,
        eager=eager,
        is_subject=subject,
        scope_description=scope.full_description,
    )
    scope.declare(declaration)
    if eager:
        binder.bind(scope, declaration)
    return declaration
