# servicepoint/dispatch/exceptions.py
"""Dispatch exceptions"""
from servicepoint.exceptions import ServicePointError


class DispatchError(ServicePointError):
    """Base class for routing failures."""

    def __init__(self, message: str, *, service_point: str | None = None, method: str | None = None) -> None:
        super().__init__(message)
        self.service_point = service_point
        self.method = method


class SubjectNotFoundError(DispatchError, LookupError):
    """The designated subject argument was missing or None."""


class ServiceNotFoundError(DispatchError, LookupError):
    """No registration matched the subject at this service point."""


class ContractDefinitionError(DispatchError, TypeError):
    """A contract does not designate its subject parameters correctly."""


class SignalDefinitionError(ContractDefinitionError):
    """A signal contract does not line up with its target method."""
