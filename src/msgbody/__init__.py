"""msgbody: media-type keyed message body readers and writers with negotiation.

Examples:
    >>> from msgbody import MessageBodyRegistry, TextProvider
    >>> registry = MessageBodyRegistry.create([TextProvider])
    >>> registry.resolve_writer(str, "text/plain")  # doctest: +ELLIPSIS
    <msgbody.providers.builtin.TextProvider object at ...>
"""

from msgbody._internal.configuration import LoggingConfig, RegistryConfig, load_config
from msgbody.core.exceptions import (
    ConfigurationError,
    MediaTypeParseError,
    MsgBodyError,
    ProviderNotFoundError,
    RegistryError,
)
from msgbody.discovery import ComponentProviderCache, ServiceFinder, discover_provider_classes
from msgbody.media_type import GENERAL_MEDIA_TYPE, MediaType, search_list
from msgbody.providers import (
    BodyReader,
    BodyWriter,
    BytesProvider,
    JsonProvider,
    PydanticModelProvider,
    Role,
    TextProvider,
    YamlProvider,
    consumes,
    declared_media_types,
    produces,
)
from msgbody.registry import MessageBodyRegistry

__version__ = "0.1.0"

__all__ = [
    "MessageBodyRegistry",
    "ComponentProviderCache",
    "ServiceFinder",
    "discover_provider_classes",
    "MediaType",
    "GENERAL_MEDIA_TYPE",
    "search_list",
    "BodyReader",
    "BodyWriter",
    "Role",
    "consumes",
    "produces",
    "declared_media_types",
    "BytesProvider",
    "TextProvider",
    "JsonProvider",
    "PydanticModelProvider",
    "YamlProvider",
    "RegistryConfig",
    "LoggingConfig",
    "load_config",
    "MsgBodyError",
    "ConfigurationError",
    "MediaTypeParseError",
    "RegistryError",
    "ProviderNotFoundError",
]
