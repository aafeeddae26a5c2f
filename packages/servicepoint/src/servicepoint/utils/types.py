# servicepoint/utils/types.py
"""Small helpers for walking and naming classes."""

from __future__ import annotations

from typing import Any, Iterator

__all__ = ["type_lineage", "simple_name", "qualified_name"]


def type_lineage(cls: type) -> Iterator[type]:
    """Yield ``cls`` and its ancestors in method resolution order, stopping before ``object``.

    Mixins listed ahead of a class's real base are yielded too, so every
    ancestor a subject inherits from appears exactly once.
    """
    for klass in cls.__mro__:
        if klass is object:
            break
        yield klass


def simple_name(target: Any) -> str:
    """Return ``Class.member`` for functions, ``Class`` for types."""
    if isinstance(target, type):
        return target.__name__
    qualname = getattr(target, "__qualname__", None)
    if qualname:
        return qualname
    return type(target).__name__


def qualified_name(target: Any) -> str:
    """Return the dotted module path of a class or function."""
    module = getattr(target, "__module__", None) or "<unknown>"
    return f"{module}.{simple_name(target)}"
