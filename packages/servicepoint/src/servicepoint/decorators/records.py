# servicepoint/decorators/records.py
"""Declarations attached to decorated classes, functions and methods."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from servicepoint.keys import ImplementationHandle, RegistrationKey, TaggedValue

__all__ = [
    "DOMAIN_SERVICES_ATTR",
    "DomainServiceDesc",
    "SIGNALS_ATTR",
    "SignalDesc",
    "declarations_of",
]

DOMAIN_SERVICES_ATTR = "__servicepoint_domain_services__"
SIGNALS_ATTR = "__servicepoint_signals__"


def declarations_of(target: Any, attr: str) -> tuple[Any, ...]:
    """Declarations made directly on ``target``; a class never inherits its base's."""
    if isinstance(target, type):
        return tuple(target.__dict__.get(attr, ()))
    return tuple(getattr(target, attr, ()) or ())


@dataclass(frozen=True, slots=True)
class DomainServiceDesc:
    """Declares that ``service_name`` serves ``service_point`` for matching subjects."""

    service_name: str
    service_point: str
    subject_type: type
    tagged_values: frozenset[TaggedValue] = field(default_factory=frozenset)

    @property
    def key(self) -> RegistrationKey:
        return RegistrationKey(self.service_point, self.subject_type, self.tagged_values)

    @property
    def handle(self) -> ImplementationHandle:
        return ImplementationHandle(self.service_name)

    @property
    def label(self) -> str:
        return f"{self.key.label} -> {self.service_name}"


@dataclass(frozen=True, slots=True)
class SignalDesc:
    """Declares a service method as the target of a signal point."""

    signal_point: str
    contract: type
    subject_type: type
    method_name: str
    service_name: str
    tagged_values: frozenset[TaggedValue] = field(default_factory=frozenset)

    @property
    def key(self) -> RegistrationKey:
        return RegistrationKey(self.signal_point, self.subject_type, self.tagged_values)

    @property
    def handle(self) -> ImplementationHandle:
        return ImplementationHandle(f"{self.service_name}->{self.signal_point}")

    @property
    def label(self) -> str:
        return f"{self.key.label} -> {self.service_name}"
