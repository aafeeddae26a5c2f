# servicepoint/decorators/base.py
"""
Core declaration decorator.

Declaration decorators never register anything themselves. They build a
description of the target, append it to a tuple attribute on the target and
return the target unchanged; an app reads those tuples when the target is
activated. Applying several decorators (or the same one several times) to one
target accumulates declarations.

Usage
-----
    @domain_service(AnimalService, Cat)
    @domain_service(AnimalService, Cat, {"breed": "siamese"})
    class CatService(AnimalService): ...
"""

import logging
import os
from typing import Any, Callable, TypeVar

from servicepoint.tracing import service_span_sync
from servicepoint.utils.types import qualified_name

from .records import declarations_of

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])

TRACE_LEVEL_ENVVAR = "SERVICEPOINT_TRACE_LEVEL"


def _filter_trace_attrs(attrs: dict[str, Any]) -> dict[str, Any]:
    level = os.getenv(TRACE_LEVEL_ENVVAR, "info").strip().lower()
    if level == "debug":
        return attrs
    keep = {"servicepoint.decorator", "servicepoint.target", "servicepoint.declaration"}
    return {k: v for k, v in attrs.items() if k in keep or not k.startswith("servicepoint.")}


class BaseDecorator:
    """Attaches one declaration per application.

    Subclasses set ``attr`` and ``log_category`` and implement ``describe``.
    """

    attr: str
    log_category: str | None = None

    def describe(self, target: Any) -> Any:
        raise NotImplementedError

    def validate_target(self, target: Any) -> None:
        if not callable(target):
            raise TypeError(f"{type(self).__name__} cannot decorate {target!r}")

    def __call__(self, target: T) -> T:
        self.validate_target(target)
        declaration = self.describe(target)
        setattr(target, self.attr, declarations_of(target, self.attr) + (declaration,))

        span_attrs = _filter_trace_attrs(
            {
                "servicepoint.decorator": type(self).__name__,
                "servicepoint.target": qualified_name(target),
                "servicepoint.declaration": declaration.label,
                "servicepoint.subject_type": declaration.subject_type.__name__,
            }
        )
        with service_span_sync(f"servicepoint.decorator.apply ({target.__name__})", attributes=span_attrs):
            label = str(self.log_category or type(self).__name__).upper()
            logger.info("[%s] ✅ declared `%s`", label, declaration.label)
        return target
