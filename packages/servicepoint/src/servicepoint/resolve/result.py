"""Resolution results with probe tracing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class ResolutionBranch(Generic[T]):
    """A single probe of the store."""

    name: str
    value: T | None
    reason: str | None = None
    key: str | None = None
    meta: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class ResolutionResult(Generic[T]):
    """Aggregate result of a resolve walk with the probe history."""

    value: T | None
    selected: ResolutionBranch[T]
    branches: list[ResolutionBranch[T]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.selected not in self.branches:
            self.branches.append(self.selected)

    @property
    def branch(self) -> str:
        return self.selected.name

    @property
    def found(self) -> bool:
        return self.value is not None

    def history(self) -> str:
        """Compact ``branch:key`` trail for logs."""
        return " | ".join(f"{br.name}:{br.key or '<none>'}" for br in self.branches)


__all__ = [
    "ResolutionBranch",
    "ResolutionResult",
]
