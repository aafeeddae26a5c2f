# servicepoint/dispatch/signals.py
"""
Signal bindings.

A signal contract is a contract with exactly one abstract method, and that
method takes a subject. A service method declared as a signal target is wrapped
in a small object implementing the contract, and the wrapper is registered at
the signal point like any other implementation. Publishing a signal is then an
ordinary service point call.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .contracts import ContractMethod, contract_methods, parameter_types
from .exceptions import ContractDefinitionError, SignalDefinitionError

logger = logging.getLogger(__name__)

__all__ = ["SignalBinding", "signal_method", "validate_signal_contract"]


def signal_method(contract: type) -> ContractMethod:
    """Return the single abstract subject method of a signal contract."""
    abstract = sorted(getattr(contract, "__abstractmethods__", ()) or ())
    if len(abstract) != 1:
        raise SignalDefinitionError(
            f"Signal contract {contract.__name__} must declare exactly one abstract method (found {abstract})"
        )
    try:
        methods = contract_methods(contract)
    except ContractDefinitionError as exc:
        raise SignalDefinitionError(f"Invalid signal contract {contract.__name__}: {exc}") from exc
    return methods[abstract[0]]


def validate_signal_contract(contract: type, target: Callable[..., Any]) -> ContractMethod:
    """Check that ``target`` can serve as the signal method of ``contract``.

    ``target`` is the plain function as defined on the service class; its
    parameter annotations, ``self`` excluded, must equal those of the contract
    method.

    :raises SignalDefinitionError: When the contract or the target does not fit.
    """
    method = signal_method(contract)
    if not inspect.isfunction(target):
        raise SignalDefinitionError(f"Signal target must be a function (got {target!r})")

    expected = method.parameter_types
    actual = parameter_types(target)
    if expected != actual:
        raise SignalDefinitionError(
            f"Bad signal method parameters: {target.__qualname__} takes {actual}, "
            f"{contract.__name__}.{method.name} expects {expected}"
        )
    return method


@dataclass(frozen=True)
class SignalBinding:
    """Adapts one method of a live service object to a signal contract."""

    contract: type
    method: ContractMethod
    target: Callable[..., Any]

    @classmethod
    def bind(cls, contract: type, service: Any, method_name: str) -> "SignalBinding":
        func = getattr(type(service), method_name)
        method = validate_signal_contract(contract, func)
        return cls(contract=contract, method=method, target=getattr(service, method_name))

    def implementation(self) -> Any:
        """Build an object implementing the contract that calls the target."""
        target = self.target

        def forward(_self, *args: Any, **kwargs: Any) -> Any:
            return target(*args, **kwargs)

        forward.__name__ = self.method.name
        forward.__qualname__ = f"{self.contract.__qualname__}Signal.{self.method.name}"
        namespace = {
            "__module__": self.contract.__module__,
            "__qualname__": f"{self.contract.__qualname__}Signal",
            self.method.name: forward,
            "__repr__": lambda _self: f"<Signal {self.contract.__name__} -> {getattr(target, '__qualname__', target)}>",
        }
        binding_cls = type(f"{self.contract.__name__}Signal", (self.contract,), namespace)
        logger.debug("bound signal %s to %s", self.contract.__name__, getattr(target, "__qualname__", target))
        return object.__new__(binding_cls)
