# servicepoint/decorators/domain_service.py
"""
Domain service declarations.

    @domain_service(AnimalService, Cat)
    class CatService(AnimalService): ...

    @domain_service("loans", Loan, {"state": LoanState.REQUESTED})
    def requested_loan_service() -> LoanService: ...

A class is instantiated (once) when first routed to; a function is called once
and its return value serves the service point. Declarations may be stacked.

``domain_service.preset`` captures a service point, subject type and common
tagged values once and returns a factory for decorators that add more tagged
values on top:

    pikachu_service = domain_service.preset(PokemonService, Pokemon, {"kind": "pikachu"})

    @pikachu_service({"trained": True})
    class TrainedPikachuService(PokemonService): ...
"""

from __future__ import annotations

from typing import Any, Callable

from servicepoint.dispatch.contracts import service_point_name
from servicepoint.keys import TaggedValuesLike, coerce_tagged_values
from servicepoint.utils.types import qualified_name

from .base import BaseDecorator
from .records import DOMAIN_SERVICES_ATTR, DomainServiceDesc

__all__ = ["DomainServiceDecorator", "domain_service"]


def _service_point_arg(service_point: str | type) -> str:
    if isinstance(service_point, type):
        return service_point_name(service_point)
    if not isinstance(service_point, str) or not service_point.strip():
        raise ValueError(f"service_point must be a contract class or a non-empty string (got {service_point!r})")
    return service_point.strip()


class DomainServiceDecorator(BaseDecorator):
    """Declares the decorated class or factory function as a domain service."""

    attr = DOMAIN_SERVICES_ATTR
    log_category = "domain_service"

    def __init__(
        self,
        service_point: str | type,
        subject_type: type,
        tagged_values: TaggedValuesLike = None,
        *,
        name: str | None = None,
    ) -> None:
        if not isinstance(subject_type, type):
            raise TypeError(f"subject_type must be a class (got {subject_type!r})")
        self.service_point = _service_point_arg(service_point)
        self.subject_type = subject_type
        self.tagged_values = coerce_tagged_values(tagged_values)
        self.name = name

    def describe(self, target: Any) -> DomainServiceDesc:
        return DomainServiceDesc(
            service_name=self.name or qualified_name(target),
            service_point=self.service_point,
            subject_type=self.subject_type,
            tagged_values=self.tagged_values,
        )

    @classmethod
    def preset(
        cls,
        service_point: str | type,
        subject_type: type,
        tagged_values: TaggedValuesLike = None,
    ) -> Callable[..., "DomainServiceDecorator"]:
        base = dict(coerce_tagged_values(tagged_values))

        def make(extra: TaggedValuesLike = None, *, name: str | None = None) -> "DomainServiceDecorator":
            merged = {**base, **dict(coerce_tagged_values(extra))}
            return cls(service_point, subject_type, merged, name=name)

        return make


domain_service = DomainServiceDecorator
