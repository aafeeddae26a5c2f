# servicepoint/registry/exceptions.py
"""Registry exceptions"""
from servicepoint.exceptions import ServicePointError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(ServicePointError): ...


class RegistrationCollisionError(RegistryError):
    """Raised when overriding is disabled and a key is bound to another handle."""


class RegistrationLookupError(RegistryError, KeyError): ...
