"""Layered settings for a service point app.

Lookups fall through three layers: explicit overrides, any layers given at
construction, then :data:`~servicepoint.conf.defaults.DEFAULTS`. Only
upper-case names are taken from modules and mappings, the same convention as
Django and Celery settings modules.
"""


import importlib
import os
from collections import ChainMap
from types import ModuleType
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

CONFIG_MODULE_ENVVAR = "SERVICEPOINT_CONFIG_MODULE"


def _setting_names(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    # with a namespace, "SP_ALLOW_OVERRIDE" becomes "ALLOW_OVERRIDE"
    if namespace is None:
        return {name: value for name, value in mapping.items() if name.isupper()}

    prefix = f"{namespace}_"
    return {
        name[len(prefix):]: value
        for name, value in mapping.items()
        if name.startswith(prefix) and name[len(prefix):].isupper()
    }


def _object_settings(obj: Any) -> Mapping[str, Any]:
    if isinstance(obj, ModuleType):
        return vars(obj)
    if isinstance(obj, Mapping):
        return obj
    return {name: getattr(obj, name) for name in dir(obj) if name.isupper()}


class Settings(MutableMapping[str, Any]):
    """Mutable view over the settings layers; writes go to the override layer."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._overrides: dict[str, Any] = {}
        self._chain = ChainMap(self._overrides, *(dict(layer) for layer in layers), dict(DEFAULTS))

    def __getitem__(self, key: str) -> Any:
        return self._chain[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._overrides[key] = value

    def __delitem__(self, key: str) -> None:
        del self._overrides[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chain)

    def __len__(self) -> int:
        return len(self._chain)

    def __repr__(self) -> str:
        return f"Settings({self.as_dict()!r})"

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._overrides.update(_setting_names(mapping, namespace))

    def update_from_object(self, obj: str | Any, *, namespace: str | None = None) -> None:
        """Load settings from a module path, a module, or an object with upper-case attributes."""
        if isinstance(obj, str):
            obj = importlib.import_module(obj)
        self.update_from_mapping(_object_settings(obj), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> bool:
        """Load the module named by ``envvar``; returns False when the variable is unset."""
        module_name = os.environ.get(envvar, "").strip()
        if not module_name:
            return False
        self.update_from_object(module_name, namespace=namespace)
        return True

    def as_dict(self) -> dict[str, Any]:
        return dict(self._chain)
