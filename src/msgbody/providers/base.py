"""Contracts that message body readers and writers implement to plug into msgbody.

Only the minimal interface lives here. A converter states which media types it
handles as ordinary class data (``consumes`` for reading, ``produces`` for
writing) and answers a type predicate; the registry takes care of indexing and
negotiation.

Examples:
    >>> @consumes("text/plain")
    ... class Upper(BodyReader):
    ...     def is_readable(self, target_type):
    ...         return target_type is str
    ...     def read_from(self, target_type, media_type, stream):
    ...         return stream.read().decode().upper()
    >>> declared_media_types(Upper(), Role.READER)
    ('text/plain',)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, BinaryIO, Callable, Optional, Sequence, TypeVar

from msgbody.media_type import MediaType

T = TypeVar("T", bound=type)


class BodyReader(ABC):
    """Reads a Python object of a target type from a byte stream.

    Attributes:
        consumes: Media types this reader accepts. ``None`` registers the
            reader under the generic ``*/*`` key only.
    """

    consumes: Optional[Sequence[str]] = None

    @abstractmethod
    def is_readable(self, target_type: type) -> bool:
        """Return True if this reader can produce instances of ``target_type``."""

    @abstractmethod
    def read_from(self, target_type: type, media_type: Optional[MediaType], stream: BinaryIO) -> Any:
        """Read an instance of ``target_type`` from ``stream``."""


class BodyWriter(ABC):
    """Writes a Python object of a target type to a byte stream.

    Attributes:
        produces: Media types this writer emits. ``None`` registers the
            writer under the generic ``*/*`` key only.
    """

    produces: Optional[Sequence[str]] = None

    @abstractmethod
    def is_writeable(self, target_type: type) -> bool:
        """Return True if this writer can serialize instances of ``target_type``."""

    def get_size(self, obj: Any) -> int:
        """Return the serialized size of ``obj`` in bytes, or -1 if unknown."""

        return -1

    @abstractmethod
    def write_to(
        self,
        obj: Any,
        target_type: type,
        media_type: Optional[MediaType],
        stream: BinaryIO,
    ) -> None:
        """Serialize ``obj`` to ``stream``."""


class Role(str, Enum):
    """The two converter roles; each owns its own index in the registry."""

    READER = "reader"
    WRITER = "writer"

    def __str__(self) -> str:
        return self.value

    @property
    def base_class(self) -> type:
        return BodyReader if self is Role.READER else BodyWriter

    @property
    def declaration(self) -> str:
        """Name of the class attribute holding the declared media types."""

        return "consumes" if self is Role.READER else "produces"

    def accepts(self, provider: Any, target_type: type) -> bool:
        """Evaluate the role's capability predicate on ``provider``."""

        if self is Role.READER:
            return provider.is_readable(target_type)
        return provider.is_writeable(target_type)

    @classmethod
    def of(cls, provider_class: type) -> tuple["Role", ...]:
        """Return every role ``provider_class`` implements."""

        return tuple(role for role in cls if issubclass(provider_class, role.base_class))


def declared_media_types(provider: Any, role: Role) -> Optional[tuple[str, ...]]:
    """Return the media type strings ``provider`` declares for ``role``.

    Returns None when nothing is declared. Duplicates are preserved.
    """
    values = getattr(provider, role.declaration, None)
    if values is None:
        return None
    if isinstance(values, str):
        values = (values,)
    values = tuple(values)
    return values or None


def _declare(attribute: str, media_types: Sequence[str]) -> Callable[[T], T]:
    if not media_types:
        raise ValueError(f"@{attribute} requires at least one media type")

    def decorator(cls: T) -> T:
        setattr(cls, attribute, tuple(media_types))
        return cls

    return decorator


def consumes(*media_types: str) -> Callable[[T], T]:
    """Class decorator declaring the media types a reader consumes."""

    return _declare("consumes", media_types)


def produces(*media_types: str) -> Callable[[T], T]:
    """Class decorator declaring the media types a writer produces."""

    return _declare("produces", media_types)


__all__ = [
    "BodyReader",
    "BodyWriter",
    "Role",
    "consumes",
    "produces",
    "declared_media_types",
]
