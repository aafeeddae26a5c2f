# servicepoint/properties/cache.py
"""Per-type memo of tagged accessors."""

from __future__ import annotations

import logging
from threading import RLock

from servicepoint.utils.types import type_lineage

from .accessors import PropertyAccessor, declared_accessors

logger = logging.getLogger(__name__)

__all__ = ["PropertyCache"]


class PropertyCache:
    """Memoizes the ordered accessor list of each subject type.

    The list for a type is the accessors each class of its method resolution
    order declares directly, concatenated in that order, so the most-derived
    declarations always come first.

    Reads go straight to the backing dicts. Two threads may compute the same
    entry concurrently; the first one stored wins and the other adopts it.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._lock = RLock()
        self._declared: dict[type, tuple[PropertyAccessor, ...]] = {}
        self._accessors: dict[type, tuple[PropertyAccessor, ...]] = {}

    def _declared_on(self, cls: type) -> tuple[PropertyAccessor, ...]:
        cached = self._declared.get(cls)
        if cached is not None:
            return cached
        own = tuple(declared_accessors(cls, strict=self.strict))
        with self._lock:
            return self._declared.setdefault(cls, own)

    def accessors_for(self, cls: type) -> tuple[PropertyAccessor, ...]:
        if cls is object:
            return ()
        cached = self._accessors.get(cls)
        if cached is not None:
            return cached

        logger.debug("building property accessors for %s", cls.__name__)
        computed = tuple(
            accessor for klass in type_lineage(cls) for accessor in self._declared_on(klass)
        )

        with self._lock:
            stored = self._accessors.setdefault(cls, computed)
        logger.debug("property accessors for %s: %d", cls.__name__, len(stored))
        return stored

    def clear(self) -> None:
        with self._lock:
            self._declared.clear()
            self._accessors.clear()

    def __contains__(self, cls: object) -> bool:
        return cls in self._declared

    def __len__(self) -> int:
        return len(self._declared)
