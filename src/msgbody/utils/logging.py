"""Logging utilities for msgbody (thin wrappers over the standard library).

Only the ``msgbody`` logger hierarchy is touched; the root logger and any
handlers the host application installs are left alone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from msgbody._internal.configuration.schemas import LoggingConfig

ROOT_LOGGER_NAME = "msgbody"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_ATTR = "_msgbody_handler"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger by name (no prefixing).

    Args:
        name: Logger name (typically ``__name__``).
    """
    return logging.getLogger(name)


def _level_value(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(
    verbose: bool = False,
    level: Optional[Union[str, int]] = None,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """Configure the ``msgbody`` logger.

    Installs a single stream handler (repeated calls replace its formatter
    instead of stacking handlers).

    Args:
        verbose: Use DEBUG when no explicit level is given.
        level: Explicit level name or number.
        fmt: Format string for the handler.

    Returns:
        The configured ``msgbody`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if level is None:
        level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(_level_value(level))

    handler = next(
        (h for h in logger.handlers if getattr(h, _HANDLER_ATTR, False)), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    return logger


def set_component_level(component: str, level: Union[str, int]) -> None:
    """Set log level for a specific component, e.g. ``"discovery"``.

    Accepts either string levels (e.g., "INFO") or numeric constants.
    """
    name = component
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{component}"
    logging.getLogger(name).setLevel(_level_value(level))


def apply_logging_config(config: "LoggingConfig") -> logging.Logger:
    """Apply a LoggingConfig: root level, format and component overrides."""

    logger = configure_logging(level=config.level, fmt=config.format)
    for component, level in config.components.items():
        set_component_level(component, level)
    return logger


__all__ = [
    "get_logger",
    "configure_logging",
    "set_component_level",
    "apply_logging_config",
]
