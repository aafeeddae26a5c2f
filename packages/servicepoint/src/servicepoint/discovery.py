# servicepoint/discovery.py
"""Import modules and collect the members that carry declarations."""

from __future__ import annotations

import importlib
import logging
from typing import Any, Iterable

from .decorators.records import DOMAIN_SERVICES_ATTR, SIGNALS_ATTR, declarations_of
from .exceptions import DiscoveryError

logger = logging.getLogger(__name__)

__all__ = ["discover", "import_modules", "is_declared"]


def import_modules(modules: Iterable[str]) -> list[Any]:
    """Import each module path, in order."""
    imported: list[Any] = []
    for module in modules:
        try:
            imported.append(importlib.import_module(module))
        except ModuleNotFoundError as exc:
            if exc.name == module or module.startswith(f"{exc.name}."):
                raise DiscoveryError(f"Discovery module '{module}' not found") from exc
            raise DiscoveryError(f"Discovery module '{module}' failed to import '{exc.name}'") from exc
        except Exception as exc:
            raise DiscoveryError(f"Failed to import discovery module '{module}'") from exc
        logger.debug("imported discovery module %s", module)
    return imported


def _declares_members(cls: type) -> bool:
    return any(
        declarations_of(member, DOMAIN_SERVICES_ATTR) or declarations_of(member, SIGNALS_ATTR)
        for member in vars(cls).values()
        if callable(member)
    )


def is_declared(target: Any) -> bool:
    """True when ``target`` (or, for a class, one of its methods) carries declarations."""
    if declarations_of(target, DOMAIN_SERVICES_ATTR):
        return True
    return isinstance(target, type) and _declares_members(target)


def discover(modules: Iterable[str]) -> list[Any]:
    """
    Import ``modules`` and return their declared members.

    Only members defined in the module itself count, so a class imported from
    elsewhere is not picked up twice. Order follows module order, then
    definition order.

    :raises DiscoveryError: If a module cannot be imported.
    """
    found: list[Any] = []
    seen: set[int] = set()
    for module in import_modules(modules):
        before = len(found)
        for value in vars(module).values():
            if getattr(value, "__module__", None) != module.__name__:
                continue
            if id(value) in seen or not is_declared(value):
                continue
            seen.add(id(value))
            found.append(value)
        logger.info("[DISCOVERY] %s: %d declared member(s)", module.__name__, len(found) - before)
    return found
