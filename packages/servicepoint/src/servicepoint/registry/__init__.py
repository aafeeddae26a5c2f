"""Registration store for service point implementations."""

from .exceptions import RegistrationCollisionError, RegistrationLookupError, RegistryError
from .records import Registration
from .store import RegistrationStore

__all__ = [
    "Registration",
    "RegistrationCollisionError",
    "RegistrationLookupError",
    "RegistrationStore",
    "RegistryError",
]
