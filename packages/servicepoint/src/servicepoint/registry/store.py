# servicepoint/registry/store.py
"""Thread-safe exact-key store mapping registration keys to implementation handles."""

import logging
from threading import RLock
from typing import Any, Literal, overload

from asgiref.sync import sync_to_async

from servicepoint.keys import ImplementationHandle, RegistrationKey

from .exceptions import RegistrationCollisionError, RegistrationLookupError
from .records import Registration

logger = logging.getLogger(__name__)


class RegistrationStore:
    """Exact-key store of registrations, shared by every resolver call.

    Mutations (``add``/``remove``/``clear``) are serialized by a lock; reads
    go straight to the dict and never wait on a writer. A single key is
    replaced or deleted in one dict operation, so a reader observes either the
    old registration or the new state, never a mix.
    """

    def __init__(self, *, allow_override: bool = True) -> None:
        self.allow_override = allow_override
        self._lock = RLock()
        self._store: dict[RegistrationKey, Registration] = {}

    # --- registration ---

    def add(
        self,
        key: RegistrationKey,
        handle: ImplementationHandle,
        *,
        meta: dict[str, Any] | None = None,
    ) -> Registration:
        """
        Bind ``key`` to ``handle``.

        On an exact-key collision the last ``add`` wins and a warning is
        logged. With ``allow_override`` disabled, a collision with a different
        handle raises instead, and re-adding the same handle is a no-op.

        :param key: The exact-match registration key.
        :param handle: The implementation selected by the key.
        :param meta: Optional metadata kept on the record.
        :return: The stored registration.
        :raises RegistrationCollisionError: When overriding is disabled.
        """
        record = Registration(key=key, handle=handle, meta=dict(meta or {}))
        with self._lock:
            existing = self._store.get(key)
            if existing is not None:
                if existing.handle == handle:
                    logger.debug("Duplicate registration ignored: %s", record.label)
                    if not self.allow_override:
                        return existing
                elif not self.allow_override:
                    raise RegistrationCollisionError(
                        f"Key already registered to a different implementation: {existing.label}"
                    )
                else:
                    logger.warning("Registration %s replaced by %s", existing.label, handle.name)
            self._store[key] = record
        logger.info("added registration: %s", record.label)
        return record

    async def aadd(
        self,
        key: RegistrationKey,
        handle: ImplementationHandle,
        *,
        meta: dict[str, Any] | None = None,
    ) -> Registration:
        """Async wrapper around `add`."""
        return await sync_to_async(self.add)(key, handle, meta=meta)

    def remove(self, key: RegistrationKey) -> Registration | None:
        """Remove the registration bound to ``key``; returns it, or None when absent."""
        with self._lock:
            record = self._store.pop(key, None)
        if record is None:
            logger.debug("remove ignored, no registration for %s", key.label)
        else:
            logger.info("removed registration: %s", record.label)
        return record

    async def aremove(self, key: RegistrationKey) -> Registration | None:
        """Async wrapper around `remove`."""
        return await sync_to_async(self.remove)(key)

    # --- retrieval ---

    def lookup(self, key: RegistrationKey) -> ImplementationHandle | None:
        """Return the handle bound to exactly ``key``, or None."""
        record = self._store.get(key)
        return record.handle if record is not None else None

    async def alookup(self, key: RegistrationKey) -> ImplementationHandle | None:
        """Async wrapper around `lookup`."""
        return await sync_to_async(self.lookup)(key)

    def get(self, key: RegistrationKey) -> Registration:
        """
        Return the registration record for ``key``.

        :raises RegistrationLookupError: If nothing is registered under the key.
        """
        try:
            return self._store[key]
        except KeyError as err:
            raise RegistrationLookupError(f"No registration for {key.label}") from err

    def __contains__(self, key: object) -> bool:
        return key in self._store

    # --- counting ---

    def count(self) -> int:
        """Counts the registrations in the store."""
        return len(self._store)

    async def acount(self) -> int:
        """Asynchronously counts the registrations in the store."""
        return await sync_to_async(self.count)()

    # --- enumerate all entries ---

    def registrations(self, service_point: str | None = None) -> tuple[Registration, ...]:
        """Return a snapshot of all registrations, optionally for one service point."""
        with self._lock:
            records = tuple(self._store.values())
        if service_point is None:
            return records
        return tuple(r for r in records if r.key.service_point == service_point)

    @overload
    def keys(self) -> tuple[RegistrationKey, ...]: ...
    @overload
    def keys(self, *, as_csv: Literal[True]) -> str: ...
    @overload
    def keys(self, *, as_csv: Literal[False]) -> tuple[RegistrationKey, ...]: ...

    def keys(self, *, as_csv: bool = False):
        """
        Return all registration keys.

        When `as_csv` is True, returns a comma-separated string of key labels
        for logging/debugging purposes.
        """
        with self._lock:
            keys_tuple = tuple(self._store.keys())
        if as_csv:
            return ",".join(k.label for k in keys_tuple)
        return keys_tuple

    # --- mutation / control ---

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            dropped = len(self._store)
            self._store.clear()
        logger.info("cleared %d registrations", dropped)


__all__ = ["RegistrationStore"]
