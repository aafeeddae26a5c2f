# servicepoint/properties/extractor.py
"""Reading the tagged property set of a subject."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from servicepoint.keys import TaggedProperty, is_scalar, stringify

from .accessors import PropertyAccessor
from .cache import PropertyCache
from .exceptions import PropertyExtractionError

logger = logging.getLogger(__name__)

__all__ = ["PropertyExtractor"]


def _expand(
    out: list[TaggedProperty],
    accessor: PropertyAccessor,
    subject_type: type,
    name: str,
    value: Any,
) -> None:
    if value is None:
        return
    if is_scalar(value):
        out.append(TaggedProperty(accessor.declaring_type, name, accessor.priority, stringify(value)))
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            child_name = "" if key is None else str(key).strip()
            if child_name:
                _expand(out, accessor, subject_type, f"{name}.{child_name}", child)
        return
    raise PropertyExtractionError(
        f"Cannot create property {name!r} of {subject_type.__name__} "
        f"from {type(value).__name__} (accessor {accessor.label})",
        subject_type=subject_type,
        accessor=accessor.label,
    )


class PropertyExtractor:
    """Produces the de-duplicated tagged properties of a subject."""

    def __init__(self, cache: PropertyCache | None = None) -> None:
        self.cache = cache if cache is not None else PropertyCache()

    def get_properties(self, subject: Any) -> frozenset[TaggedProperty]:
        """Return the subject's tagged properties.

        When two properties share a name, the one declared on the more derived
        class is kept; priority plays no part here. Between unrelated mixins the one
        earlier in the method resolution order is kept. Any accessor producing an
        unsupported value fails the whole call with
        :class:`PropertyExtractionError`.
        """
        if subject is None:
            raise ValueError("subject must not be None")

        subject_type = type(subject)
        collected: list[TaggedProperty] = []
        for accessor in self.cache.accessors_for(subject_type):
            _expand(collected, accessor, subject_type, accessor.name, accessor.read(subject))

        merged: dict[str, TaggedProperty] = {}
        for prop in collected:
            current = merged.get(prop.name)
            if current is None or prop.can_replace(current):
                merged[prop.name] = prop

        logger.debug("properties of %s: %d", subject_type.__name__, len(merged))
        return frozenset(merged.values())
