# servicepoint/properties/tags.py
"""Declaring tagged properties on subject classes.

Two forms are recognized:

    @dataclass
    class Pokemon(Animal):
        type: Annotated[PokemonType, Tag("type", priority=1)]
        state: Annotated[PokemonState, Tag("state")]

        @tag("owner.region", priority=5)
        def region(self) -> str: ...

``tag`` also accepts a ``property`` and tags its getter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

__all__ = ["Tag", "tag", "get_tag", "TAG_ATTR"]

TAG_ATTR = "__servicepoint_tag__"

F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Tag:
    """Marks a field (via ``Annotated``) or a method as a tagged property."""

    name: str
    priority: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError(f"Tag name must be a non-empty string (got {self.name!r})")
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise TypeError(f"Tag priority must be an int (got {self.priority!r})")
        object.__setattr__(self, "name", self.name.strip())


def tag(name: str, priority: int = 0) -> Callable[[F], F]:
    """Decorator form of :class:`Tag` for methods and properties."""
    marker = Tag(name, priority)

    def decorator(member: F) -> F:
        target: Any = member
        if isinstance(member, property):
            target = member.fget
        elif isinstance(member, (staticmethod, classmethod)):
            # kept so the accessor scan can report it as ineligible
            target = member.__func__
        if target is None or not callable(target):
            raise TypeError(f"@tag cannot be applied to {member!r}")
        setattr(target, TAG_ATTR, marker)
        return member

    return decorator


def get_tag(member: Any) -> Tag | None:
    found = getattr(member, TAG_ATTR, None)
    return found if isinstance(found, Tag) else None
