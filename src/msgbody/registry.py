"""Media-type keyed registry of message body readers and writers.

The registry discovers converter classes once, instantiates them, and indexes
each instance under every media type it declares (``*/*`` when it declares
none). Resolution walks ``P/S``, ``P/*``, ``*/*`` in that order and returns the
first indexed converter whose predicate accepts the target type; within a key,
application converters win over plugins because they were indexed first.

Examples:
    >>> from msgbody.providers import JsonProvider, TextProvider
    >>> registry = MessageBodyRegistry.create([TextProvider, JsonProvider])
    >>> type(registry.resolve_writer(dict, "application/json")).__name__
    'JsonProvider'
    >>> type(registry.resolve_reader(str, "text/html")).__name__
    'TextProvider'
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from msgbody._internal.configuration.schemas import RegistryConfig
from msgbody.core.exceptions import MediaTypeParseError, ProviderNotFoundError
from msgbody.discovery import (
    ComponentProvider,
    ComponentProviderCache,
    ServiceFinder,
    discover_provider_classes,
)
from msgbody.media_type import (
    GENERAL_MEDIA_TYPE,
    MediaType,
    MediaTypeLike,
    as_media_type,
    search_list,
)
from msgbody.providers.base import BodyReader, BodyWriter, Role, declared_media_types

logger = logging.getLogger(__name__)

CapabilityIndex = Mapping[MediaType, Tuple[Any, ...]]


class MessageBodyRegistry:
    """Resolve readers and writers by target type and media type.

    The reader and writer indexes are built in the constructor and never change
    afterwards, so a registry can be shared freely between threads.

    Attributes:
        _readers: Reader index, media type -> readers in discovery order.
        _writers: Writer index, media type -> writers in discovery order.
    """

    def __init__(
        self,
        component_cache: ComponentProviderCache,
        finder: Optional[ServiceFinder] = None,
    ) -> None:
        """Discover converters and build both indexes.

        Args:
            component_cache: Application converter classes and their instances.
            finder: Source of plugin converter classes, if any.

        Raises:
            MediaTypeParseError: If a converter declares a malformed media type.
        """
        self._readers = self._build_index(Role.READER, component_cache, finder)
        self._writers = self._build_index(Role.WRITER, component_cache, finder)

    @classmethod
    def create(
        cls,
        provider_classes: Iterable[type] = (),
        *,
        config: Optional[RegistryConfig] = None,
        component_provider: Optional[ComponentProvider] = None,
        finder: Optional[ServiceFinder] = None,
    ) -> "MessageBodyRegistry":
        """Build a registry from application classes and a configuration.

        A finder is derived from ``config`` unless one is passed explicitly.
        """
        config = config or RegistryConfig()
        if finder is None:
            finder = ServiceFinder(
                entry_point_groups={
                    role: config.entry_point_group(role) for role in Role
                },
                discover_entry_points=config.discover_entry_points,
            )
        cache = ComponentProviderCache(provider_classes, component_provider)
        return cls(cache, finder)

    @staticmethod
    def _build_index(
        role: Role, cache: ComponentProviderCache, finder: Optional[ServiceFinder]
    ) -> CapabilityIndex:
        index: Dict[MediaType, List[Any]] = {}

        for provider_class in discover_provider_classes(role, cache, finder):
            provider = cache.get_component(provider_class)
            if provider is None:
                logger.debug("No instance for %s, not indexed", provider_class.__qualname__)
                continue

            values = declared_media_types(provider, role)
            if values is None:
                index.setdefault(GENERAL_MEDIA_TYPE, []).append(provider)
                continue

            for value in values:
                try:
                    media_type = MediaType.parse(value)
                except MediaTypeParseError as error:
                    raise MediaTypeParseError(
                        value,
                        f"declared in {role.declaration} of {provider_class.__qualname__}",
                    ) from error
                index.setdefault(media_type, []).append(provider)

        logger.debug(
            "Built %s index: %s",
            role,
            {str(key): len(providers) for key, providers in index.items()},
        )
        return MappingProxyType({key: tuple(providers) for key, providers in index.items()})

    @property
    def readers(self) -> CapabilityIndex:
        """Read-only reader index."""

        return self._readers

    @property
    def writers(self) -> CapabilityIndex:
        """Read-only writer index."""

        return self._writers

    def _resolve(
        self,
        role: Role,
        index: CapabilityIndex,
        target_type: type,
        media_type: Optional[MediaTypeLike],
    ) -> Any:
        requested = as_media_type(media_type)
        for key in search_list(requested):
            providers = index.get(key)
            if providers is None:
                continue
            for provider in providers:
                if role.accepts(provider, target_type):
                    return provider

        raise ProviderNotFoundError(role, target_type, requested)

    def resolve_reader(
        self, target_type: type, media_type: Optional[MediaTypeLike] = None
    ) -> BodyReader:
        """Return the best reader for ``target_type`` and ``media_type``.

        Args:
            target_type: Python type the body should be read into.
            media_type: Requested media type, or None for any.

        Raises:
            ProviderNotFoundError: If no reader on the search list accepts the type.
            MediaTypeParseError: If ``media_type`` is a malformed string.
        """
        return self._resolve(Role.READER, self._readers, target_type, media_type)

    def resolve_writer(
        self, target_type: type, media_type: Optional[MediaTypeLike] = None
    ) -> BodyWriter:
        """Return the best writer for ``target_type`` and ``media_type``.

        Raises:
            ProviderNotFoundError: If no writer on the search list accepts the type.
            MediaTypeParseError: If ``media_type`` is a malformed string.
        """
        return self._resolve(Role.WRITER, self._writers, target_type, media_type)

    # The list variants wrap the single best match; generic_type and annotations
    # are accepted for interface compatibility and not consulted.
    def list_readers(
        self,
        media_type: Optional[MediaTypeLike],
        target_type: type,
        generic_type: Optional[Any] = None,
        annotations: Optional[Sequence[Any]] = None,
    ) -> List[BodyReader]:
        return [self.resolve_reader(target_type, media_type)]

    def list_writers(
        self,
        media_type: Optional[MediaTypeLike],
        target_type: type,
        generic_type: Optional[Any] = None,
        annotations: Optional[Sequence[Any]] = None,
    ) -> List[BodyWriter]:
        return [self.resolve_writer(target_type, media_type)]


__all__ = ["CapabilityIndex", "MessageBodyRegistry"]
