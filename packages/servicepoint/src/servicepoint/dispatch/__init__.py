# servicepoint/dispatch/__init__.py
from .contracts import (
    ContractMethod,
    Subject,
    contract_methods,
    inspect_contract,
    parameter_types,
    service_point,
    service_point_name,
    validate_contract,
)
from .exceptions import (
    ContractDefinitionError,
    DispatchError,
    ServiceNotFoundError,
    SignalDefinitionError,
    SubjectNotFoundError,
)
from .proxy import build_service_point
from .router import MethodRouter
from .signals import SignalBinding, signal_method, validate_signal_contract

__all__ = [
    "ContractDefinitionError",
    "ContractMethod",
    "DispatchError",
    "MethodRouter",
    "ServiceNotFoundError",
    "SignalBinding",
    "SignalDefinitionError",
    "Subject",
    "SubjectNotFoundError",
    "build_service_point",
    "contract_methods",
    "inspect_contract",
    "parameter_types",
    "service_point",
    "service_point_name",
    "signal_method",
    "validate_contract",
    "validate_signal_contract",
]
