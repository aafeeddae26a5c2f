# servicepoint/__init__.py
"""
servicepoint: route calls on a contract to the implementation registered for
the call's subject.

    app = ServicePointApp()
    app.activate(CatService)
    animals = app.service_point(AnimalService)
    animals.make_sound(Cat())
"""

from .app import ServicePointApp
from .components import ComponentFactory
from .conf import ServicePointSettings, Settings
from .decorators import DomainServiceDesc, SignalDesc, domain_service, signal
from .discovery import discover
from .dispatch import (
    ContractDefinitionError,
    DispatchError,
    ServiceNotFoundError,
    SignalDefinitionError,
    Subject,
    SubjectNotFoundError,
    build_service_point,
    service_point,
)
from .exceptions import ComponentNotFoundError, DiscoveryError, ServicePointError
from .keys import CandidateKey, ImplementationHandle, RegistrationKey, TaggedProperty, TaggedValue
from .properties import PropertyExtractionError, PropertyExtractor, Tag, tag
from .registry import Registration, RegistrationCollisionError, RegistrationStore
from .resolve import CandidateOrderingError, ResolutionResult, Resolver

__version__ = "0.1.0"

__all__ = [
    "CandidateKey",
    "CandidateOrderingError",
    "ComponentFactory",
    "ComponentNotFoundError",
    "ContractDefinitionError",
    "DiscoveryError",
    "DispatchError",
    "DomainServiceDesc",
    "ImplementationHandle",
    "PropertyExtractionError",
    "PropertyExtractor",
    "Registration",
    "RegistrationCollisionError",
    "RegistrationKey",
    "RegistrationStore",
    "ResolutionResult",
    "Resolver",
    "ServiceNotFoundError",
    "ServicePointApp",
    "ServicePointError",
    "ServicePointSettings",
    "Settings",
    "SignalDefinitionError",
    "SignalDesc",
    "Subject",
    "SubjectNotFoundError",
    "Tag",
    "TaggedProperty",
    "TaggedValue",
    "build_service_point",
    "discover",
    "domain_service",
    "service_point",
    "signal",
    "tag",
]
