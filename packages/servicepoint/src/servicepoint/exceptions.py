# servicepoint/exceptions.py
"""Root of the servicepoint exception hierarchy.

Each subpackage defines its own errors in a local ``exceptions`` module and
derives them from :class:`ServicePointError`, so callers can catch the whole
family with a single ``except`` clause.
"""


class ServicePointError(Exception):
    """Base class for every error raised by servicepoint."""


class ComponentNotFoundError(ServicePointError, LookupError):
    """Raised when the component factory has no provider for a handle name."""


class DiscoveryError(ServicePointError):
    """Raised when a discovery module cannot be imported."""


__all__ = ["ServicePointError", "ComponentNotFoundError", "DiscoveryError"]
