# servicepoint/dispatch/contracts.py
"""
Contracts and their subject parameters.

A contract is a class (usually an ``abc.ABC``) whose public methods take the
subject in one parameter marked with :class:`Subject`:

    @service_point("animals")
    class AnimalService(ABC):
        @abstractmethod
        def make_sound(self, animal: Annotated[Animal, Subject]) -> str: ...

        def describe(self, animal: Annotated[Animal, Subject]) -> str:
            return "an animal"

Every abstract method must designate exactly one subject parameter. Concrete
methods may omit it; they then run locally on the service point proxy instead
of being routed.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Annotated, Callable, Mapping, TypeVar, get_origin, get_type_hints

from servicepoint.utils.types import simple_name

from .exceptions import ContractDefinitionError

logger = logging.getLogger(__name__)

__all__ = [
    "ContractMethod",
    "Subject",
    "contract_methods",
    "inspect_contract",
    "parameter_types",
    "service_point",
    "service_point_name",
    "validate_contract",
]

NAME_ATTR = "__servicepoint_name__"
METHODS_ATTR = "__servicepoint_methods__"

C = TypeVar("C", bound=type)


class Subject:
    """Marker for the subject parameter: ``Annotated[Animal, Subject]``."""


def _is_subject_marker(meta: Any) -> bool:
    return meta is Subject or isinstance(meta, Subject)


def _evaluated_hints(func: Callable[..., Any], *, include_extras: bool) -> dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=include_extras)
    except Exception:
        logger.debug("get_type_hints failed for %s; using raw annotations", simple_name(func), exc_info=True)
        return dict(getattr(func, "__annotations__", {}) or {})


def _instance_parameters(func: Callable[..., Any]) -> list[inspect.Parameter]:
    params = list(inspect.signature(func).parameters.values())
    return params[1:]


def parameter_types(func: Callable[..., Any]) -> tuple[Any, ...]:
    """Evaluated parameter annotations of an instance method, ``self`` excluded.

    ``Annotated`` metadata is stripped, so ``Annotated[Loan, Subject]`` and a
    plain ``Loan`` compare equal.
    """
    hints = _evaluated_hints(func, include_extras=False)
    return tuple(hints.get(p.name, p.annotation) for p in _instance_parameters(func))


@dataclass(frozen=True)
class ContractMethod:
    """A routed contract method and where its subject sits."""

    name: str
    func: Callable[..., Any]
    signature: inspect.Signature
    subject_index: int
    subject_name: str
    parameter_types: tuple[Any, ...]
    abstract: bool

    def subject_of(self, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
        """Return the subject argument of a call, or None when absent."""
        if self.subject_index < len(args):
            return args[self.subject_index]
        return kwargs.get(self.subject_name)

    @property
    def label(self) -> str:
        return simple_name(self.func)


def _subject_parameters(func: Callable[..., Any]) -> list[tuple[int, str]]:
    hints = _evaluated_hints(func, include_extras=True)
    found: list[tuple[int, str]] = []
    for index, param in enumerate(_instance_parameters(func)):
        hint = hints.get(param.name, param.annotation)
        if get_origin(hint) is Annotated and any(_is_subject_marker(m) for m in hint.__metadata__):
            found.append((index, param.name))
    return found


def _describe(name: str, func: Callable[..., Any], index: int, param: str) -> ContractMethod:
    signature = inspect.signature(func)
    return ContractMethod(
        name=name,
        func=func,
        signature=signature.replace(parameters=list(signature.parameters.values())[1:]),
        subject_index=index,
        subject_name=param,
        parameter_types=parameter_types(func),
        abstract=bool(getattr(func, "__isabstractmethod__", False)),
    )


def inspect_contract(contract: type) -> dict[str, ContractMethod]:
    """Validate ``contract`` and describe its routed methods.

    :raises ContractDefinitionError: If an abstract method lacks a subject
        parameter, a method marks more than one, or nothing is routable.
    """
    if not isinstance(contract, type):
        raise ContractDefinitionError(f"Contract must be a class (got {contract!r})")

    methods: dict[str, ContractMethod] = {}
    for name in dir(contract):
        if name.startswith("_"):
            continue
        member = inspect.getattr_static(contract, name)
        if not inspect.isfunction(member):
            continue

        subjects = _subject_parameters(member)
        if len(subjects) > 1:
            raise ContractDefinitionError(
                f"{contract.__name__}.{name} marks more than one Subject parameter: "
                f"{[param for _, param in subjects]}"
            )
        if not subjects:
            if getattr(member, "__isabstractmethod__", False):
                raise ContractDefinitionError(
                    f"All abstract methods should specify a Subject parameter: {contract.__name__}.{name}"
                )
            continue

        index, param = subjects[0]
        methods[name] = _describe(name, member, index, param)

    if not methods:
        raise ContractDefinitionError(f"{contract.__name__} declares no method with a Subject parameter")
    return methods


def validate_contract(contract: type) -> None:
    """Raise :class:`ContractDefinitionError` if ``contract`` is malformed."""
    inspect_contract(contract)


def contract_methods(contract: type) -> dict[str, ContractMethod]:
    """Cached :func:`inspect_contract` result, pinned on the contract class."""
    cached = contract.__dict__.get(METHODS_ATTR)
    if cached is None:
        cached = inspect_contract(contract)
        setattr(contract, METHODS_ATTR, cached)
    return cached


def service_point_name(contract: type) -> str:
    return contract.__dict__.get(NAME_ATTR) or contract.__name__


def service_point(_cls: C | None = None, *, name: str | None = None) -> C | Callable[[C], C]:
    """Declare a contract class as a service point.

    Supports both ``@service_point`` and ``@service_point(name="...")``. The
    contract is validated immediately, so a malformed contract fails at import.
    """
    if isinstance(_cls, str):
        # @service_point("animals")
        name, _cls = _cls, None

    def _apply(cls: C) -> C:
        methods = inspect_contract(cls)
        setattr(cls, METHODS_ATTR, methods)
        setattr(cls, NAME_ATTR, (name or cls.__name__).strip())
        logger.info(
            "[SERVICE_POINT] declared `%s` (%s: %s)",
            service_point_name(cls),
            cls.__name__,
            ", ".join(sorted(methods)),
        )
        return cls

    if _cls is not None:
        return _apply(_cls)
    return _apply
