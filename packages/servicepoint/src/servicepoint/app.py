# servicepoint/app.py
"""A compact, explicit service point application object.

One app owns everything a routed call touches: the registration store, the
property cache and extractor, the resolver, the component factory and the
router. Nothing is module-global; two apps never see each other's
registrations.

Lifecycle
---------
1. ``configure`` / ``config_from_object`` / ``config_from_envvar`` -> settings
2. ``activate`` or ``autodiscover``  -> components + registrations
3. ``service_point(Contract)``       -> proxy; calls are routed per subject
4. ``deactivate`` / ``shutdown``     -> matching removals
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from functools import partial
from threading import RLock
from typing import Any, Callable, Iterable, Mapping, TypeVar, Union

from .components import ComponentFactory
from .conf import CONFIG_MODULE_ENVVAR, ServicePointSettings, Settings
from .decorators.records import (
    DOMAIN_SERVICES_ATTR,
    SIGNALS_ATTR,
    DomainServiceDesc,
    SignalDesc,
    declarations_of,
)
from .discovery import discover
from .dispatch import MethodRouter, SignalBinding, build_service_point, service_point_name
from .keys import ImplementationHandle
from .properties import PropertyCache, PropertyExtractor
from .registry import Registration, RegistrationStore
from .resolve import ResolutionResult, Resolver
from .tracing import service_span_sync
from .utils.types import qualified_name

logger = logging.getLogger(__name__)

__all__ = ["ServicePointApp"]

T = TypeVar("T")
Declaration = Union[DomainServiceDesc, SignalDesc]


@dataclass(slots=True)
class _Plan:
    """What activating one target provides and registers."""

    owner: str | None = None
    owner_provider: Callable[[], Any] | None = None
    owner_instance: Any = None
    entries: list[tuple[Declaration, Callable[[], Any]]] = field(default_factory=list)


def _sp_name(service_point: str | type) -> str:
    return service_point_name(service_point) if isinstance(service_point, type) else service_point


@dataclass
class ServicePointApp:
    name: str = "default"
    settings: Mapping[str, Any] | ServicePointSettings | None = None
    conf: Settings = field(default_factory=Settings)

    store: RegistrationStore = field(init=False, repr=False)
    cache: PropertyCache = field(init=False, repr=False)
    extractor: PropertyExtractor = field(init=False, repr=False)
    resolver: Resolver = field(init=False, repr=False)
    components: ComponentFactory = field(init=False, repr=False)
    router: MethodRouter = field(init=False, repr=False)

    _proxies: dict[tuple[type, str], Any] = field(default_factory=dict, init=False, repr=False)
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.conf.update_from_envvar()
        if self.settings is not None:
            if isinstance(self.settings, ServicePointSettings):
                self.conf.update_from_mapping(self.settings.model_dump())
            else:
                self.conf.update_from_mapping(self.settings)

        options = self.options
        self.store = RegistrationStore(allow_override=options.ALLOW_OVERRIDE)
        self.cache = PropertyCache(strict=options.STRICT_ACCESSORS)
        self.extractor = PropertyExtractor(self.cache)
        self.resolver = Resolver(self.store, self.extractor)
        self.components = ComponentFactory()
        self.router = MethodRouter(self.resolver, self.components, trace=options.TRACE_ROUTING)

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------
    @property
    def options(self) -> ServicePointSettings:
        """Validated snapshot of the effective settings."""
        return ServicePointSettings.model_validate(self.conf.as_dict())

    def configure(self, mapping: Mapping[str, Any] | None = None, *, namespace: str | None = None) -> ServicePointApp:
        if mapping:
            self.conf.update_from_mapping(mapping, namespace=namespace)
        self._apply_settings()
        return self

    def config_from_object(self, obj: str, *, namespace: str | None = None) -> ServicePointApp:
        self.conf.update_from_object(obj, namespace=namespace)
        self._apply_settings()
        return self

    def config_from_envvar(
        self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None
    ) -> ServicePointApp:
        self.conf.update_from_envvar(envvar, namespace=namespace)
        self._apply_settings()
        return self

    def _apply_settings(self) -> None:
        options = self.options
        self.store.allow_override = options.ALLOW_OVERRIDE
        self.router.trace = options.TRACE_ROUTING
        if self.cache.strict != options.STRICT_ACCESSORS:
            # accessor lists were built under the old policy
            self.cache.strict = options.STRICT_ACCESSORS
            self.cache.clear()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, desc: Declaration, provider: Callable[[], Any]) -> Registration:
        """Provide ``desc.handle`` through ``provider`` and add the registration.

        A handle that is already provided keeps its existing provider, so a
        class carrying several declarations is still built once.
        """
        self.components.provide(desc.handle.name, provider, replace=False)
        return self.store.add(desc.key, desc.handle, meta={"app": self.name})

    def unregister(self, desc: Declaration) -> Registration | None:
        """Remove the registration of ``desc`` if it still points at ``desc.handle``."""
        current = self.store.lookup(desc.key)
        if current is None:
            return None
        if current != desc.handle:
            logger.debug("unregister skipped: %s now served by %s", desc.key.label, current.name)
            return None
        return self.store.remove(desc.key)

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------
    def _member_provider(self, owner: str, member: str) -> Any:
        return getattr(self.components.get(owner), member)()

    def _signal_provider(self, owner: str, desc: SignalDesc) -> Any:
        service = self.components.get(owner)
        return SignalBinding.bind(desc.contract, service, desc.method_name).implementation()

    def _plan(self, target: Any) -> _Plan:
        plan = _Plan()
        if inspect.isfunction(target):
            for desc in declarations_of(target, DOMAIN_SERVICES_ATTR):
                plan.entries.append((desc, target))
            return plan

        if isinstance(target, type):
            cls, instance = target, None
        else:
            cls, instance = type(target), target

        owner = qualified_name(cls)
        for desc in declarations_of(cls, DOMAIN_SERVICES_ATTR):
            plan.entries.append((desc, partial(self.components.get, owner)))

        for member, value in vars(cls).items():
            if not inspect.isfunction(value):
                continue
            for desc in declarations_of(value, DOMAIN_SERVICES_ATTR):
                plan.entries.append((desc, partial(self._member_provider, owner, member)))
            for signal_desc in declarations_of(value, SIGNALS_ATTR):
                plan.entries.append((signal_desc, partial(self._signal_provider, owner, signal_desc)))

        if plan.entries:
            plan.owner = owner
            plan.owner_provider = cls
            plan.owner_instance = instance
        return plan

    def activate(self, target: Any) -> list[Registration]:
        """
        Register everything ``target`` declares.

        ``target`` is a decorated class, a decorated factory function, or an
        instance of a class whose declarations should be served by that very
        instance. Methods of a class may carry their own ``domain_service``
        (factory methods) and ``signal`` declarations; they are invoked on the
        class's component.

        :return: The registrations added, in declaration order.
        """
        plan = self._plan(target)
        if not plan.entries:
            logger.debug("activate: %s declares nothing", qualified_name(target))
            return []

        with service_span_sync(
            "servicepoint.activate",
            attributes={"servicepoint.app": self.name, "servicepoint.target": plan.owner or qualified_name(target)},
        ):
            if plan.owner is not None:
                if plan.owner_instance is not None:
                    self.components.instance(plan.owner, plan.owner_instance)
                else:
                    self.components.provide(plan.owner, plan.owner_provider, replace=False)

            records = [self.register(desc, provider) for desc, provider in plan.entries]

        logger.info("[%s] activated %s (%d registration(s))", self.name.upper(), qualified_name(target), len(records))
        return records

    def deactivate(self, target: Any) -> int:
        """Remove the registrations ``target`` declares; returns how many were removed."""
        plan = self._plan(target)
        removed = 0
        handles: set[ImplementationHandle] = set()
        for desc, _ in plan.entries:
            handles.add(desc.handle)
            if self.unregister(desc) is not None:
                removed += 1

        in_use = {record.handle for record in self.store.registrations()}
        for handle in handles - in_use:
            self.components.discard(handle.name)
        if plan.owner is not None and not any(h.name == plan.owner for h in in_use):
            self.components.discard(plan.owner)

        logger.info("[%s] deactivated %s (%d registration(s))", self.name.upper(), qualified_name(target), removed)
        return removed

    def autodiscover(self, modules: Iterable[str] | None = None) -> list[Any]:
        """Import ``modules`` (default: ``DISCOVERY_MODULES``) and activate what they declare."""
        if modules is None:
            modules = self.options.DISCOVERY_MODULES
        members = discover(modules)
        for member in members:
            self.activate(member)
        return members

    # ------------------------------------------------------------------
    # Service points
    # ------------------------------------------------------------------
    def service_point(self, contract: type[T], name: str | None = None) -> T:
        """Return the proxy for ``contract``, built once per service point name."""
        sp_name = name or service_point_name(contract)
        key = (contract, sp_name)
        proxy = self._proxies.get(key)
        if proxy is None:
            with self._lock:
                proxy = self._proxies.get(key)
                if proxy is None:
                    proxy = build_service_point(contract, self.router, sp_name)
                    self._proxies[key] = proxy
                    logger.debug("built service point %s for %s", sp_name, contract.__name__)
        return proxy

    def resolve(self, service_point: str | type, subject: Any) -> ImplementationHandle | None:
        return self.resolver.resolve(_sp_name(service_point), subject)

    def explain(self, service_point: str | type, subject: Any) -> ResolutionResult[ImplementationHandle]:
        """Probe trail of a resolve call, for debugging registrations."""
        return self.resolver.explain(_sp_name(service_point), subject)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        with self._lock:
            self.store.clear()
            self.components.clear()
            self._proxies.clear()
            self.cache.clear()
        logger.info("[%s] shut down", self.name.upper())

    def __enter__(self) -> ServicePointApp:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()
