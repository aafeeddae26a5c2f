# servicepoint/dispatch/proxy.py
"""Service point proxies.

A proxy is an instance of a generated subclass of the contract. Every method
with a subject parameter forwards to a :class:`MethodRouter`; every other
method is inherited unchanged and runs on the proxy itself.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from .contracts import NAME_ATTR, ContractMethod, contract_methods, service_point_name
from .router import MethodRouter

__all__ = ["build_service_point"]

T = TypeVar("T")


def _forwarder(service_point: str, method: ContractMethod, router: MethodRouter) -> Callable[..., Any]:
    # updated=() keeps __isabstractmethod__ off the forwarder
    @functools.wraps(method.func, updated=())
    def forward(self, *args: Any, **kwargs: Any) -> Any:
        return router.route(service_point, method, args, kwargs)

    return forward


def build_service_point(contract: type[T], router: MethodRouter, name: str | None = None) -> T:
    """Create a proxy implementing ``contract`` that routes through ``router``."""
    sp_name = name or service_point_name(contract)
    methods = contract_methods(contract)

    namespace: dict[str, Any] = {
        "__module__": contract.__module__,
        "__qualname__": f"{contract.__qualname__}ServicePoint",
        NAME_ATTR: sp_name,
        "__repr__": lambda self: f"<ServicePoint {sp_name!r} for {contract.__name__}>",
    }
    for method in methods.values():
        namespace[method.name] = _forwarder(sp_name, method, router)

    proxy_cls = type(f"{contract.__name__}ServicePoint", (contract,), namespace)
    # skip the contract's own __init__; the proxy holds no state
    return object.__new__(proxy_cls)
