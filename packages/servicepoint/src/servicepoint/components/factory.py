# servicepoint/components/factory.py
"""Name-keyed component factory.

Implementations are registered under the stable name carried by an
:class:`~servicepoint.keys.ImplementationHandle`. A provider is either a
zero-argument callable (a class or a factory function) built lazily on first
use, or a ready instance. Built components are singletons per factory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable

from servicepoint.exceptions import ComponentNotFoundError
from servicepoint.keys import ImplementationHandle

logger = logging.getLogger(__name__)

__all__ = ["ComponentFactory", "ComponentDefinition"]

_UNSET = object()


@dataclass(slots=True)
class ComponentDefinition:
    name: str
    provider: Callable[[], Any] | None
    instance: Any = _UNSET

    @property
    def built(self) -> bool:
        return self.instance is not _UNSET


class ComponentFactory:
    """Resolves implementation handles to live objects."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._definitions: dict[str, ComponentDefinition] = {}

    # --- registration ---

    def provide(
        self,
        name: str,
        provider: Callable[[], Any],
        *,
        replace: bool = True,
    ) -> None:
        """Register a lazily built component."""
        if not callable(provider):
            raise TypeError(f"provider for {name!r} must be callable (got {provider!r})")
        self._define(ComponentDefinition(name, provider), replace=replace)

    def instance(self, name: str, obj: Any, *, replace: bool = True) -> None:
        """Register an already built component."""
        self._define(ComponentDefinition(name, None, obj), replace=replace)

    def _define(self, definition: ComponentDefinition, *, replace: bool) -> None:
        with self._lock:
            if definition.name in self._definitions and not replace:
                logger.debug("component %s already defined; keeping existing", definition.name)
                return
            self._definitions[definition.name] = definition
        logger.debug("defined component %s", definition.name)

    def discard(self, name: str) -> None:
        with self._lock:
            self._definitions.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._definitions.clear()

    # --- retrieval ---

    def get(self, handle: ImplementationHandle | str) -> Any:
        """
        Return the component for ``handle``, building it on first access.

        :raises ComponentNotFoundError: If no component carries that name.
        """
        name = handle.name if isinstance(handle, ImplementationHandle) else str(handle)
        definition = self._definitions.get(name)
        if definition is None:
            raise ComponentNotFoundError(f"Component {name!r} is not defined")
        if definition.built:
            return definition.instance

        with self._lock:
            if not definition.built:
                logger.debug("building component %s", name)
                definition.instance = definition.provider()
        return definition.instance

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions
