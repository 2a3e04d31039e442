from typing import Any, Optional


class MsgBodyError(Exception):
    """Base class for all custom exceptions in the msgbody library."""

    pass


class ConfigurationError(MsgBodyError):
    """Raised when there's a configuration error."""

    pass


class MediaTypeParseError(ConfigurationError, ValueError):
    """Raised when a media type string does not have a type/subtype structure."""

    def __init__(self, value: Any, reason: str = "expected 'type/subtype'") -> None:
        self.value = value
        super().__init__(f"Invalid media type {value!r}: {reason}")


class RegistryError(MsgBodyError):
    """Base class for errors related to registry operations."""

    pass


class ProviderNotFoundError(RegistryError):
    """Raised when no reader or writer accepts a type for a media type."""

    def __init__(self, role: Any, target_type: Any, media_type: Optional[Any]) -> None:
        self.role = role
        self.target_type = target_type
        self.media_type = media_type
        role_name = getattr(role, "value", role)
        type_name = getattr(target_type, "__qualname__", None) or repr(target_type)
        super().__init__(
            f"A message body {role_name} for Python type, {type_name}, "
            f"and media type, {media_type}, was not found"
        )


__all__ = [
    "MsgBodyError",
    "ConfigurationError",
    "MediaTypeParseError",
    "RegistryError",
    "ProviderNotFoundError",
]
