# servicepoint/resolve/resolver.py
"""Specificity-ranked lookup of the implementation serving a subject."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from asgiref.sync import sync_to_async

from servicepoint.keys import CandidateKey, ImplementationHandle, RegistrationKey
from servicepoint.properties import PropertyExtractor
from servicepoint.registry import RegistrationStore

from .candidates import build_candidates, filter_and_build
from .result import ResolutionBranch, ResolutionResult

logger = logging.getLogger(__name__)

__all__ = ["Resolver"]


class Resolver:
    """Finds the most specific registration matching a subject.

    Resolution is a pure function of the store's current contents and the
    subject's current property values; nothing is cached between calls
    except the accessor lists held by the extractor's cache.
    """

    def __init__(self, store: RegistrationStore, extractor: PropertyExtractor) -> None:
        self.store = store
        self.extractor = extractor

    def _probes(self, service_point: str, subject: Any) -> Iterator[tuple[CandidateKey, RegistrationKey]]:
        if not service_point:
            raise ValueError("service_point must be a non-empty string")
        if subject is None:
            raise ValueError("subject must not be None")

        properties = self.extractor.get_properties(subject)
        for candidate in build_candidates(service_point, type(subject), properties):
            yield candidate, filter_and_build(candidate, properties)

    def resolve(self, service_point: str, subject: Any) -> ImplementationHandle | None:
        """Return the handle of the best match, or None when nothing matches."""
        logger.debug("resolve started [%s, %s]", service_point, type(subject).__name__)
        for candidate, key in self._probes(service_point, subject):
            handle = self.store.lookup(key)
            if handle is not None:
                logger.debug("resolve finished: %s via %s", handle.name, key.label)
                return handle
        logger.debug("resolve finished: no match for %s", service_point)
        return None

    async def aresolve(self, service_point: str, subject: Any) -> ImplementationHandle | None:
        """Async wrapper around `resolve`."""
        return await sync_to_async(self.resolve)(service_point, subject)

    def explain(self, service_point: str, subject: Any) -> ResolutionResult[ImplementationHandle]:
        """Walk the same probes as `resolve`, recording each one."""
        branches: list[ResolutionBranch[ImplementationHandle]] = []
        for candidate, key in self._probes(service_point, subject):
            handle = self.store.lookup(key)
            branch = ResolutionBranch(
                name=candidate.label,
                value=handle,
                reason="registered" if handle is not None else "miss",
                key=key.label,
            )
            branches.append(branch)
            if handle is not None:
                return ResolutionResult(value=handle, selected=branch, branches=branches)

        none: ResolutionBranch[ImplementationHandle] = ResolutionBranch(
            name="none", value=None, reason="no candidate matched"
        )
        return ResolutionResult(value=None, selected=none, branches=branches)
