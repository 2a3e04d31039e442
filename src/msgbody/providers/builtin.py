"""Converters shipped with msgbody.

They are advertised through the ``msgbody.readers`` and ``msgbody.writers``
entry points of this distribution, so they are found by external discovery and
always sort after converters an application registers itself.
"""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Optional

import yaml
from pydantic import BaseModel

from msgbody.media_type import MediaType
from msgbody.providers.base import BodyReader, BodyWriter, consumes, produces

DEFAULT_CHARSET = "utf-8"


def _charset(media_type: Optional[MediaType]) -> str:
    if media_type is None:
        return DEFAULT_CHARSET
    return media_type.parameters.get("charset", DEFAULT_CHARSET)


def _is_subclass(target_type: Any, *bases: type) -> bool:
    return isinstance(target_type, type) and issubclass(target_type, bases)


class BytesProvider(BodyReader, BodyWriter):
    """Passes raw bytes through untouched for any media type."""

    def is_readable(self, target_type: type) -> bool:
        return _is_subclass(target_type, bytes, bytearray)

    def is_writeable(self, target_type: type) -> bool:
        return _is_subclass(target_type, bytes, bytearray)

    def read_from(self, target_type, media_type, stream: BinaryIO):
        data = stream.read()
        return bytearray(data) if issubclass(target_type, bytearray) else bytes(data)

    def get_size(self, obj: Any) -> int:
        return len(obj)

    def write_to(self, obj, target_type, media_type, stream: BinaryIO) -> None:
        stream.write(bytes(obj))


@consumes("text/plain", "text/*")
@produces("text/plain", "text/*")
class TextProvider(BodyReader, BodyWriter):
    """Decodes and encodes ``str`` using the media type's charset."""

    def is_readable(self, target_type: type) -> bool:
        return _is_subclass(target_type, str)

    def is_writeable(self, target_type: type) -> bool:
        return _is_subclass(target_type, str)

    def read_from(self, target_type, media_type, stream: BinaryIO) -> str:
        return stream.read().decode(_charset(media_type))

    def write_to(self, obj, target_type, media_type, stream: BinaryIO) -> None:
        stream.write(obj.encode(_charset(media_type)))


@consumes("application/json")
@produces("application/json")
class JsonProvider(BodyReader, BodyWriter):
    """JSON documents as plain ``dict`` or ``list`` values."""

    def is_readable(self, target_type: type) -> bool:
        return _is_subclass(target_type, dict, list)

    def is_writeable(self, target_type: type) -> bool:
        return _is_subclass(target_type, dict, list)

    def read_from(self, target_type, media_type, stream: BinaryIO):
        return json.loads(stream.read().decode(_charset(media_type)))

    def write_to(self, obj, target_type, media_type, stream: BinaryIO) -> None:
        stream.write(json.dumps(obj).encode(_charset(media_type)))


@consumes("application/json")
@produces("application/json")
class PydanticModelProvider(BodyReader, BodyWriter):
    """JSON documents bound to pydantic models."""

    def is_readable(self, target_type: type) -> bool:
        return _is_subclass(target_type, BaseModel)

    def is_writeable(self, target_type: type) -> bool:
        return _is_subclass(target_type, BaseModel)

    def read_from(self, target_type, media_type, stream: BinaryIO) -> BaseModel:
        return target_type.model_validate_json(stream.read())

    def write_to(self, obj, target_type, media_type, stream: BinaryIO) -> None:
        stream.write(obj.model_dump_json().encode(_charset(media_type)))


@consumes("application/yaml", "application/x-yaml", "text/yaml")
@produces("application/yaml", "application/x-yaml", "text/yaml")
class YamlProvider(BodyReader, BodyWriter):
    """YAML documents as plain ``dict`` or ``list`` values."""

    def is_readable(self, target_type: type) -> bool:
        return _is_subclass(target_type, dict, list)

    def is_writeable(self, target_type: type) -> bool:
        return _is_subclass(target_type, dict, list)

    def read_from(self, target_type, media_type, stream: BinaryIO):
        loaded = yaml.safe_load(stream.read().decode(_charset(media_type)))
        if loaded is None:
            return target_type()
        return loaded

    def write_to(self, obj, target_type, media_type, stream: BinaryIO) -> None:
        text = yaml.safe_dump(obj, sort_keys=False)
        stream.write(text.encode(_charset(media_type)))


__all__ = [
    "BytesProvider",
    "TextProvider",
    "JsonProvider",
    "PydanticModelProvider",
    "YamlProvider",
]
