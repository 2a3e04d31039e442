"""Message body converter contracts and the converters msgbody ships with."""

from msgbody.providers.base import (  # noqa: F401
    BodyReader,
    BodyWriter,
    Role,
    consumes,
    declared_media_types,
    produces,
)
from msgbody.providers.builtin import (  # noqa: F401
    BytesProvider,
    JsonProvider,
    PydanticModelProvider,
    TextProvider,
    YamlProvider,
)

__all__ = [
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
]
