"""Registration records held by the store.

A record pairs the exact-match key with the implementation handle it selects,
plus free-form metadata supplied by the registration source. Registrations
added through an app record the app's name under ``"app"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from servicepoint.keys import ImplementationHandle, RegistrationKey


@dataclass(frozen=True, slots=True)
class Registration:
    """Immutable registration payload."""

    key: RegistrationKey
    handle: ImplementationHandle
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def service_point(self) -> str:
        return self.key.service_point

    @property
    def label(self) -> str:
        return f"{self.key.label} -> {self.handle.name}"


__all__ = ["Registration"]
