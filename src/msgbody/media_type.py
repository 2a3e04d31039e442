"""Media type values used as keys of the converter indexes.

A media type is compared on its ``type/subtype`` pair only. Parameters such as
``charset`` are parsed and carried along so converters can honor them, but they
never take part in equality or hashing, which keeps ``text/plain`` and
``text/plain; charset=utf-8`` on the same index key.

Examples:
    >>> MediaType.parse("Text/Plain; charset=UTF-8")
    MediaType('text/plain')
    >>> [str(t) for t in search_list(MediaType.parse("text/html"))]
    ['text/html', 'text/*', '*/*']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

from msgbody.core.exceptions import MediaTypeParseError

WILDCARD = "*"

_EMPTY_PARAMETERS: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class MediaType:
    """A ``type/subtype`` pair, either side of which may be the wildcard ``*``."""

    type: str = WILDCARD
    subtype: str = WILDCARD
    parameters: Mapping[str, str] = field(
        default_factory=lambda: _EMPTY_PARAMETERS, compare=False, hash=False
    )

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """Parse ``type/subtype[; name=value ...]`` into a MediaType.

        The bare wildcard ``*`` is accepted as ``*/*``. Type and subtype are
        lower-cased; parameter names are lower-cased and values kept verbatim
        with surrounding quotes removed.

        Raises:
            MediaTypeParseError: If the string has no usable type/subtype pair.
        """
        if not isinstance(value, str):
            raise MediaTypeParseError(value, "expected a string")

        head, _, tail = value.partition(";")
        head = head.strip().lower()
        if head == WILDCARD:
            head = "*/*"

        primary, sep, sub = head.partition("/")
        if not sep:
            raise MediaTypeParseError(value)
        primary, sub = primary.strip(), sub.strip()
        if not primary or not sub or "/" in sub:
            raise MediaTypeParseError(value)
        if primary == WILDCARD and sub != WILDCARD:
            raise MediaTypeParseError(value, "wildcard type requires a wildcard subtype")

        return cls(primary, sub, _parse_parameters(value, tail))

    @property
    def is_wildcard_type(self) -> bool:
        return self.type == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        return self.subtype == WILDCARD

    def with_wildcard_subtype(self) -> "MediaType":
        """Return ``type/*`` for this media type's primary type."""

        return MediaType(self.type, WILDCARD)

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"

    def __repr__(self) -> str:
        return f"MediaType({str(self)!r})"


def _parse_parameters(value: str, tail: str) -> Mapping[str, str]:
    if not tail.strip():
        return _EMPTY_PARAMETERS

    parameters: dict[str, str] = {}
    for item in tail.split(";"):
        item = item.strip()
        if not item:
            continue
        name, sep, param_value = item.partition("=")
        name = name.strip().lower()
        if not sep or not name:
            raise MediaTypeParseError(value, f"malformed parameter {item!r}")
        parameters[name] = param_value.strip().strip('"')
    return MappingProxyType(parameters)


# Universal fallback key.
GENERAL_MEDIA_TYPE = MediaType(WILDCARD, WILDCARD)

MediaTypeLike = Union[MediaType, str]


def as_media_type(value: Optional[MediaTypeLike]) -> Optional[MediaType]:
    """Coerce a string or MediaType to a MediaType, passing ``None`` through."""

    if value is None or isinstance(value, MediaType):
        return value
    return MediaType.parse(value)


def search_list(media_type: Optional[MediaType]) -> list[MediaType]:
    """Return the keys to probe, most specific first.

    ``None`` searches only the generic media type. ``P/S`` always yields exactly
    ``[P/S, P/*, */*]``, even when ``P/S`` already contains wildcards.
    """
    if media_type is None:
        return [GENERAL_MEDIA_TYPE]
    return [media_type, media_type.with_wildcard_subtype(), GENERAL_MEDIA_TYPE]


__all__ = [
    "WILDCARD",
    "GENERAL_MEDIA_TYPE",
    "MediaType",
    "MediaTypeLike",
    "as_media_type",
    "search_list",
]
