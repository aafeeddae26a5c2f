# servicepoint/decorators/__init__.py
from .base import BaseDecorator
from .domain_service import DomainServiceDecorator, domain_service
from .records import (
    DOMAIN_SERVICES_ATTR,
    SIGNALS_ATTR,
    DomainServiceDesc,
    SignalDesc,
    declarations_of,
)
from .signal import SignalDecorator, signal

__all__ = [
    "BaseDecorator",
    "DOMAIN_SERVICES_ATTR",
    "DomainServiceDecorator",
    "DomainServiceDesc",
    "SIGNALS_ATTR",
    "SignalDecorator",
    "SignalDesc",
    "declarations_of",
    "domain_service",
    "signal",
]
