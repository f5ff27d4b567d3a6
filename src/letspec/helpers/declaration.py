"""Helper declarations made by example groups."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Union

if TYPE_CHECKING:
    from letspec.context.context import ExampleContext


class _DefaultIdentifier:
    """Sentinel identifier for the unnamed ``subject``."""

    _instance: _DefaultIdentifier | None = None

    def __new__(cls) -> _DefaultIdentifier:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DEFAULT"

    def __str__(self) -> str:
        return "subject"

    def __reduce__(self) -> str:
        return "DEFAULT"


DEFAULT: Final = _DefaultIdentifier()

Identifier = Union[str, _DefaultIdentifier]
DefinitionBlock = Callable[["ExampleContext"], Any]


@dataclass(frozen=True, eq=False)
class HelperDeclaration:
    """A single ``subject``/``let`` declaration owned by one scope.

    Declarations compare and hash by identity, so two declarations sharing an
    identifier at different depths are always distinct cache keys.

    Attributes
    ----------
    name
        User supplied name, or ``None`` for an unnamed subject.
    block
        Zero-argument computation, called with the example context as its
        only argument. May be a coroutine function.
    eager
        Whether the helper is forced before the example body runs.
    is_subject
        Whether the declaration also binds the ``DEFAULT`` identifier.
    scope_description
        Description of the declaring scope, for messages.
    """

    name: str | None
    block: DefinitionBlock
    eager: bool = False
    is_subject: bool = False
    scope_description: str = ""

    def __post_init__(self) -> None:
        if self.name is None and not self.is_subject:
            raise ValueError("Only a subject may be declared without a name")

    @property
    def identifier(self) -> Identifier:
        """Primary identifier, the name when one was given."""
        return self.name if self.name is not None else DEFAULT

    @property
    def identifiers(self) -> tuple[Identifier, ...]:
        """Every identifier this declaration is bound under."""
        if not self.is_subject:
            return (self.name,)  # type: ignore[return-value]
        if self.name is None:
            return (DEFAULT,)
        return (DEFAULT, self.name)

    @property
    def label(self) -> str:
        return str(self.identifier)

    def __repr__(self) -> str:
        kind = "subject" if self.is_subject else "let"
        bang = "!" if self.eager else ""
        return f"<HelperDeclaration {kind}{bang} {self.label!r} in {self.scope_description!r}>"
