"""Discovery of message body reader and writer classes.

Converter classes come from two places:

* the application, which hands its classes to a :class:`ComponentProviderCache`;
* plugins, which either call :meth:`ServiceFinder.register` or advertise the
  class through a packaging entry point (``msgbody.readers`` /
  ``msgbody.writers`` by default).

Application classes always come first. A class known to both sources keeps its
application position and is listed once.

Examples:
    >>> from msgbody.providers import Role, TextProvider
    >>> cache = ComponentProviderCache([TextProvider])
    >>> finder = ServiceFinder(discover_entry_points=False)
    >>> discover_provider_classes(Role.READER, cache, finder)  # doctest: +SKIP
    [<class 'msgbody.providers.builtin.TextProvider'>]
"""

from __future__ import annotations

import logging
import threading
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, Iterable, List, Optional

from msgbody.providers.base import Role

logger = logging.getLogger(__name__)

ComponentProvider = Callable[[type], Optional[Any]]

DEFAULT_ENTRY_POINT_GROUPS: Dict[Role, str] = {
    Role.READER: "msgbody.readers",
    Role.WRITER: "msgbody.writers",
}


def _ordered_unique(classes: Iterable[type]) -> List[type]:
    return list(dict.fromkeys(classes))


class ComponentProviderCache:
    """Application-registered converter classes and their instances.

    Each class is instantiated at most once, through ``component_provider``
    when one is given (it may return None to withhold an instance) or by
    calling the class with no arguments.

    Attributes:
        _provider_classes: Application classes in registration order.
        _components: Instances (or None) keyed by class.
        _lock: Guards instance creation.
    """

    def __init__(
        self,
        provider_classes: Iterable[type] = (),
        component_provider: Optional[ComponentProvider] = None,
    ) -> None:
        self._provider_classes = _ordered_unique(provider_classes)
        for provider_class in self._provider_classes:
            if not isinstance(provider_class, type):
                raise TypeError(
                    f"provider classes must be classes, not instances (got {provider_class!r})"
                )
        self._component_provider = component_provider
        self._components: Dict[type, Optional[Any]] = {}
        self._lock = threading.Lock()

    def get_provider_classes(self, role: Role) -> List[type]:
        """Return the application classes implementing ``role``, in order."""

        return [cls for cls in self._provider_classes if issubclass(cls, role.base_class)]

    def get_component(self, provider_class: type) -> Optional[Any]:
        """Return the cached instance of ``provider_class``, creating it if needed.

        Returns None when no instance is available; the outcome is cached as well.
        """
        # Fast path: check cache without lock
        if provider_class in self._components:
            return self._components[provider_class]

        with self._lock:
            if provider_class in self._components:
                return self._components[provider_class]

            component = self._create_component(provider_class)
            self._components[provider_class] = component
            return component

    def _create_component(self, provider_class: type) -> Optional[Any]:
        if self._component_provider is not None:
            return self._component_provider(provider_class)

        try:
            return provider_class()
        except Exception as error:
            logger.warning(
                "Could not instantiate provider %s, skipping it: %s",
                provider_class.__qualname__,
                error,
                exc_info=True,
            )
            return None


class ServiceFinder:
    """Converter classes contributed from outside the application.

    Plugins registered through :meth:`register` are returned first, followed
    by classes loaded from the role's entry point group.
    """

    def __init__(
        self,
        entry_point_groups: Optional[Dict[Role, str]] = None,
        discover_entry_points: bool = True,
    ) -> None:
        self._groups = dict(DEFAULT_ENTRY_POINT_GROUPS)
        if entry_point_groups:
            self._groups.update(entry_point_groups)
        self._discover_entry_points = discover_entry_points
        self._registered: Dict[Role, List[type]] = {role: [] for role in Role}

    def register(self, provider_class: type, *, role: Optional[Role] = None) -> type:
        """Register a plugin converter class.

        With no ``role`` the class is registered for every role it implements.
        Returns the class so the method can be used as a decorator.

        Raises:
            TypeError: If ``provider_class`` is not a class implementing the role(s).
        """
        if not isinstance(provider_class, type):
            raise TypeError("provider_class must be a class, not an instance")

        roles = (role,) if role is not None else Role.of(provider_class)
        if not roles:
            raise TypeError(
                f"{provider_class.__name__} implements neither BodyReader nor BodyWriter"
            )
        for each in roles:
            if not issubclass(provider_class, each.base_class):
                raise TypeError(
                    f"{provider_class.__name__} must inherit from {each.base_class.__name__}"
                )
            if provider_class not in self._registered[each]:
                self._registered[each].append(provider_class)
        return provider_class

    def entry_point_group(self, role: Role) -> str:
        return self._groups[role]

    def find(self, role: Role) -> List[type]:
        """Return plugin classes for ``role``: registered ones, then entry points."""

        found = list(self._registered[role])
        if self._discover_entry_points:
            found.extend(self._load_entry_points(role))
        return _ordered_unique(found)

    def _load_entry_points(self, role: Role) -> List[type]:
        group = self._groups[role]
        loaded: List[type] = []
        for entry_point in entry_points().select(group=group):
            try:
                provider_class = entry_point.load()
            except Exception as error:
                logger.warning(
                    "Failed to load %s plugin '%s' from group '%s': %s",
                    role,
                    entry_point.name,
                    group,
                    error,
                    exc_info=True,
                )
                continue

            if not isinstance(provider_class, type) or not issubclass(
                provider_class, role.base_class
            ):
                logger.warning(
                    "Ignoring %s plugin '%s': %r is not a %s subclass",
                    role,
                    entry_point.name,
                    provider_class,
                    role.base_class.__name__,
                )
                continue
            loaded.append(provider_class)
        return loaded


def discover_provider_classes(
    role: Role, cache: ComponentProviderCache, finder: Optional[ServiceFinder] = None
) -> List[type]:
    """Return the de-duplicated converter classes for ``role``.

    Application classes precede plugin classes; a class present in both keeps
    its application position.
    """
    classes = dict.fromkeys(cache.get_provider_classes(role))

    if finder is not None:
        logger.debug("Searching for providers that implement: %s", role.base_class.__name__)
        found = finder.find(role)
        for provider_class in found:
            logger.debug("    Provider found: %s", provider_class.__qualname__)
        classes.update(dict.fromkeys(found))

    return list(classes)


__all__ = [
    "ComponentProvider",
    "ComponentProviderCache",
    "ServiceFinder",
    "DEFAULT_ENTRY_POINT_GROUPS",
    "discover_provider_classes",
]
