# servicepoint/properties/exceptions.py
"""Property extraction exceptions"""
from servicepoint.exceptions import ServicePointError


class PropertyError(ServicePointError): ...


class AccessorDefinitionError(PropertyError, TypeError):
    """Raised for a tagged member that cannot act as an accessor (strict mode only)."""


class PropertyExtractionError(PropertyError):
    """Raised when a tagged accessor yields a value that cannot become a property."""

    def __init__(self, message: str, *, subject_type: type | None = None, accessor: str | None = None) -> None:
        super().__init__(message)
        self.subject_type = subject_type
        self.accessor = accessor


__all__ = ["PropertyError", "AccessorDefinitionError", "PropertyExtractionError"]
