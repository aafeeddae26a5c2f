# servicepoint/resolve/candidates.py
"""
Candidate ranking for specificity-ordered resolution.

Every resolve call probes the store with a sequence of exact keys, one per
candidate, most specific first. Candidates come from two sources:

- each class in the subject type's method resolution order (mixins
  included), without a priority floor: a pure subject-type match;
- each distinct ``(declaring type, priority)`` pair among the subject's
  properties, used as ``(subject type, floor)``.

Ordering
--------
1. service point name, natural order;
2. subject type: earlier in the subject's method resolution order ranks
   first, so a subclass always precedes its bases. Without a subject type a
   strict subclass ranks above its bases and unrelated classes raise
   :class:`CandidateOrderingError`;
3. priority floor within one subject type: any floor ranks above no floor, and
   a lower floor ranks above a higher one. A lower floor lets more of that
   class's own properties into the probe key, so its key carries the larger
   constraint set.

Probe keys
----------
A candidate keeps a property when the property's declaring type is the
candidate's subject type or one of its bases. Properties declared exactly on
the candidate's subject type must also reach the floor; without a floor none
of them are kept.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

from servicepoint.keys import CandidateKey, RegistrationKey, TaggedProperty
from servicepoint.utils.types import type_lineage

from .exceptions import CandidateOrderingError

__all__ = [
    "build_candidates",
    "compare_candidates",
    "filter_and_build",
    "rank_candidates",
]


def _compare_service_points(a: str, b: str) -> int:
    if a == b:
        return 0
    return -1 if a < b else 1


def _compare_subject_types(a: type, b: type) -> int:
    if a is b:
        return 0
    if issubclass(a, b):
        return -1
    if issubclass(b, a):
        return 1
    raise CandidateOrderingError(f"Unrelated classes: [{a.__name__}, {b.__name__}]")


def _compare_floors(a: int | None, b: int | None) -> int:
    if a == b:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return -1 if a < b else 1


def compare_candidates(a: CandidateKey, b: CandidateKey) -> int:
    """Negative when ``a`` is probed before ``b``."""
    return (
        _compare_service_points(a.service_point, b.service_point)
        or _compare_subject_types(a.subject_type, b.subject_type)
        or _compare_floors(a.priority_floor, b.priority_floor)
    )


def rank_candidates(
    candidates: Iterable[CandidateKey],
    subject_type: type | None = None,
) -> list[CandidateKey]:
    """De-duplicate and sort candidates, most specific first.

    With ``subject_type`` the candidates' subject types are ordered by their
    position in its method resolution order, which also orders sibling
    mixins. Without it, :func:`compare_candidates` decides.
    """
    unique = set(candidates)
    if subject_type is None:
        return sorted(unique, key=cmp_to_key(compare_candidates))

    position = {cls: index for index, cls in enumerate(subject_type.__mro__)}
    for candidate in unique:
        if candidate.subject_type not in position:
            raise CandidateOrderingError(
                f"{candidate.subject_type.__name__} is not an ancestor of {subject_type.__name__}"
            )
    return sorted(
        unique,
        key=lambda c: (
            c.service_point,
            position[c.subject_type],
            c.priority_floor is None,
            c.priority_floor or 0,
        ),
    )


def build_candidates(
    service_point: str,
    subject_type: type,
    properties: Iterable[TaggedProperty],
) -> list[CandidateKey]:
    candidates = [CandidateKey(service_point, cls) for cls in type_lineage(subject_type)]
    candidates.extend(
        CandidateKey(service_point, prop.declaring_type, prop.priority) for prop in properties
    )
    return rank_candidates(candidates, subject_type)


def filter_and_build(candidate: CandidateKey, properties: Iterable[TaggedProperty]) -> RegistrationKey:
    """Build the probe key for ``candidate`` from the subject's properties."""
    floor = candidate.priority_floor
    kept = []
    for prop in properties:
        if not issubclass(candidate.subject_type, prop.declaring_type):
            continue
        if prop.declaring_type is candidate.subject_type and (floor is None or prop.priority < floor):
            continue
        kept.append(prop.tagged_value)
    return RegistrationKey(candidate.service_point, candidate.subject_type, frozenset(kept))
