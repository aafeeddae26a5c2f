# servicepoint/keys.py
"""Value objects shared by the extractor, the store and the resolver.

All of them are frozen and hashable: registration keys are dictionary keys in
the store, and candidate keys are de-duplicated in sets while ranking.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, NamedTuple, Union

__all__ = [
    "CandidateKey",
    "ImplementationHandle",
    "RegistrationKey",
    "TaggedProperty",
    "TaggedValue",
    "TaggedValuesLike",
    "coerce_tagged_values",
    "is_scalar",
    "stringify",
]


def is_scalar(value: Any) -> bool:
    """True for values that normalize to a single string."""
    return isinstance(value, (str, Enum, bool, numbers.Number))


def stringify(value: Any) -> str:
    """Normalize a scalar to the string form used for matching.

    Enum members match by member name, booleans by ``"true"``/``"false"``,
    everything else by ``str()``. Raises ``TypeError`` for non-scalars.
    """
    # Enum first: str/int based enums would otherwise match the branches below
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, numbers.Number)):
        return str(value)
    raise TypeError(f"Cannot normalize value of type {type(value).__name__}")


class TaggedValue(NamedTuple):
    """A single ``tag == value`` constraint of a registration."""

    tag: str
    value: str

    @classmethod
    def of(cls, tag: str, value: Any) -> "TaggedValue":
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError(f"tag must be a non-empty string (got {tag!r})")
        return cls(tag.strip(), stringify(value))

    def __str__(self) -> str:
        return f"{self.tag}={self.value}"


TaggedValuesLike = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]


def coerce_tagged_values(values: TaggedValuesLike) -> frozenset[TaggedValue]:
    if values is None:
        return frozenset()
    pairs = values.items() if isinstance(values, Mapping) else values
    return frozenset(TaggedValue.of(tag, value) for tag, value in pairs)


@dataclass(frozen=True, slots=True)
class TaggedProperty:
    """A tagged value read from a subject.

    ``declaring_type`` is the class whose annotation or method declared the
    tag; ``priority`` is the priority declared with it.
    """

    declaring_type: type
    name: str
    priority: int
    value: str

    @property
    def tagged_value(self) -> TaggedValue:
        return TaggedValue(self.name, self.value)

    def can_replace(self, other: "TaggedProperty") -> bool:
        """A property replaces a same-named one declared on a supertype (or the same type)."""
        return issubclass(self.declaring_type, other.declaring_type)

    def __repr__(self) -> str:
        return (
            f"TaggedProperty({self.declaring_type.__name__}.{self.name}"
            f"={self.value!r}, priority={self.priority})"
        )


@dataclass(frozen=True, slots=True)
class RegistrationKey:
    """Exact-match key of a registration: service point, subject type, constraints."""

    service_point: str
    subject_type: type
    constraints: frozenset[TaggedValue] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.service_point, str) or not self.service_point.strip():
            raise ValueError("service_point must be a non-empty string")
        if not isinstance(self.subject_type, type):
            raise TypeError(f"subject_type must be a class (got {self.subject_type!r})")
        if not isinstance(self.constraints, frozenset):
            object.__setattr__(self, "constraints", frozenset(self.constraints))

    @classmethod
    def of(
        cls,
        service_point: str,
        subject_type: type,
        tagged_values: TaggedValuesLike = None,
    ) -> "RegistrationKey":
        return cls(service_point, subject_type, coerce_tagged_values(tagged_values))

    @property
    def label(self) -> str:
        tags = ",".join(sorted(str(tv) for tv in self.constraints))
        return f"{self.service_point}:{self.subject_type.__name__}[{tags}]"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, slots=True)
class ImplementationHandle:
    """Stable name of an implementation, resolved by a component factory."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("implementation handle name must be a non-empty string")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class CandidateKey:
    """One probe position during resolution (never stored)."""

    service_point: str
    subject_type: type
    priority_floor: int | None = None

    @property
    def label(self) -> str:
        floor = "-" if self.priority_floor is None else str(self.priority_floor)
        return f"{self.subject_type.__name__}@{floor}"
