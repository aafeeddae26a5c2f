# servicepoint/dispatch/router.py
"""Routes one contract-method call to the implementation serving its subject."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from servicepoint.components import ComponentFactory
from servicepoint.resolve import Resolver
from servicepoint.tracing import service_span_sync

from .contracts import ContractMethod
from .exceptions import DispatchError, ServiceNotFoundError, SubjectNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["MethodRouter"]


class MethodRouter:
    """Resolve, fetch the component, invoke.

    Whatever the implementation raises reaches the caller unchanged.
    """

    def __init__(self, resolver: Resolver, components: ComponentFactory, *, trace: bool = True) -> None:
        self.resolver = resolver
        self.components = components
        self.trace = trace

    def route(
        self,
        service_point: str,
        method: ContractMethod,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        kwargs = dict(kwargs or {})
        if not self.trace:
            return self._route(service_point, method, args, kwargs)

        with service_span_sync(
            "servicepoint.route",
            attributes={"servicepoint.name": service_point, "servicepoint.method": method.name},
        ):
            return self._route(service_point, method, args, kwargs)

    def _route(
        self,
        service_point: str,
        method: ContractMethod,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        logger.debug("route started [%s.%s]", service_point, method.name)

        subject = method.subject_of(args, kwargs)
        if subject is None:
            raise SubjectNotFoundError(
                f"Cannot find subject for: {service_point}.{method.name}",
                service_point=service_point,
                method=method.name,
            )

        handle = self.resolver.resolve(service_point, subject)
        if handle is None:
            raise ServiceNotFoundError(
                f"Cannot find domain service for: {service_point} [{type(subject).__name__}]",
                service_point=service_point,
                method=method.name,
            )

        implementation = self.components.get(handle)
        target = getattr(implementation, method.name, None)
        if not callable(target):
            raise DispatchError(
                f"{handle.name} does not implement {method.name}",
                service_point=service_point,
                method=method.name,
            )

        result = target(*args, **kwargs)
        logger.debug("route finished [%s.%s -> %s]", service_point, method.name, handle.name)
        return result
