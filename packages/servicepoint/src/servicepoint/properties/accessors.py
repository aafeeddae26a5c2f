# servicepoint/properties/accessors.py
"""Discovery of the tagged accessors a class declares directly.

Only members defined on the class itself are considered here; inherited
accessors are appended by :class:`~servicepoint.properties.cache.PropertyCache`
while it walks the method resolution order.
"""

from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Any, Annotated, ClassVar, Literal, get_args, get_origin, get_type_hints

from .exceptions import AccessorDefinitionError, PropertyExtractionError
from .tags import Tag, get_tag

logger = logging.getLogger(__name__)

__all__ = ["PropertyAccessor", "declared_accessors", "is_zero_argument"]

AccessorKind = Literal["field", "method", "property"]


@dataclass(frozen=True, slots=True)
class PropertyAccessor:
    """Reads one tagged value from a subject."""

    declaring_type: type
    member: str
    tag: Tag
    kind: AccessorKind

    @property
    def name(self) -> str:
        return self.tag.name

    @property
    def priority(self) -> int:
        return self.tag.priority

    @property
    def label(self) -> str:
        return f"{self.declaring_type.__name__}.{self.member}"

    def read(self, subject: Any) -> Any:
        try:
            if self.kind == "field":
                return getattr(subject, self.member, None)
            if self.kind == "property":
                return getattr(subject, self.member)
            return getattr(subject, self.member)()
        except Exception as exc:
            raise PropertyExtractionError(
                f"Accessor {self.label} failed on {type(subject).__name__}: {exc}",
                subject_type=type(subject),
                accessor=self.label,
            ) from exc


def is_zero_argument(func: Any) -> bool:
    """True when ``func`` is callable with only the instance argument."""
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False
    if not params or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        return False
    for param in params[1:]:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if param.default is inspect.Parameter.empty:
            return False
    return True


def _tags_in(hint: Any) -> tuple[Tag, ...]:
    if get_origin(hint) is not Annotated:
        return ()
    return tuple(m for m in hint.__metadata__ if isinstance(m, Tag))


def _reject(cls: type, member: str, reason: str, *, strict: bool) -> None:
    message = f"Cannot create property accessor from {cls.__name__}.{member}: {reason}"
    if strict:
        raise AccessorDefinitionError(message)
    logger.warning(message)


def _evaluate(cls: type, annotation: Any) -> Any:
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    return eval(annotation, globalns, dict(vars(cls)))


def _field_hints(cls: type, own: dict[str, Any], *, strict: bool) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except Exception:
        logger.debug("get_type_hints failed for %s; evaluating fields one by one", cls.__name__, exc_info=True)

    hints: dict[str, Any] = {}
    for member, annotation in own.items():
        try:
            hints[member] = _evaluate(cls, annotation)
        except Exception as exc:
            if isinstance(annotation, str) and "Tag(" in annotation:
                _reject(cls, member, f"cannot evaluate annotation {annotation!r} ({exc})", strict=strict)
            else:
                logger.debug("skipping unresolvable annotation %s.%s", cls.__name__, member)
    return hints


def _field_accessors(cls: type, *, strict: bool) -> list[PropertyAccessor]:
    own = inspect.get_annotations(cls)
    if not own:
        return []

    hints = _field_hints(cls, own, strict=strict)
    found: list[PropertyAccessor] = []
    for member in own:
        if member not in hints:
            continue
        hint = hints[member]
        if get_origin(hint) is ClassVar:
            inner = get_args(hint)
            if inner and _tags_in(inner[0]):
                _reject(cls, member, "class variables cannot be tagged", strict=strict)
            continue
        for marker in _tags_in(hint):
            found.append(PropertyAccessor(cls, member, marker, "field"))
    return found


def _method_accessors(cls: type, *, strict: bool) -> list[PropertyAccessor]:
    found: list[PropertyAccessor] = []
    for member, value in vars(cls).items():
        if isinstance(value, property):
            marker = get_tag(value.fget)
            if marker is not None:
                found.append(PropertyAccessor(cls, member, marker, "property"))
            continue

        if isinstance(value, (staticmethod, classmethod)):
            if get_tag(value.__func__) is not None:
                _reject(cls, member, "static and class methods cannot be tagged", strict=strict)
            continue

        marker = get_tag(value)
        if marker is None:
            continue
        if not inspect.isfunction(value):
            _reject(cls, member, f"unsupported member type {type(value).__name__}", strict=strict)
            continue
        if not is_zero_argument(value):
            _reject(cls, member, "tagged methods must not require arguments", strict=strict)
            continue
        found.append(PropertyAccessor(cls, member, marker, "method"))
    return found


def declared_accessors(cls: type, *, strict: bool = False) -> list[PropertyAccessor]:
    """Return accessors declared directly on ``cls``, by ascending priority.

    Fields come before methods at equal priority (the sort is stable).
    """
    accessors = _field_accessors(cls, strict=strict) + _method_accessors(cls, strict=strict)
    accessors.sort(key=lambda a: a.priority)
    return accessors
