"""Core primitives shared across msgbody."""

from msgbody.core.exceptions import (  # noqa: F401
    ConfigurationError,
    MediaTypeParseError,
    MsgBodyError,
    ProviderNotFoundError,
    RegistryError,
)

__all__ = [
    "MsgBodyError",
    "ConfigurationError",
    "MediaTypeParseError",
    "RegistryError",
    "ProviderNotFoundError",
]
