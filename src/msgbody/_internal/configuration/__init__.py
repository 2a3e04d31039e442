"""Configuration utilities for msgbody.

This package exposes the configuration schemas and the loader used to build a
registry from a YAML file and ``MSGBODY_*`` environment variables.
"""

from msgbody._internal.configuration.loader import load_config
from msgbody._internal.configuration.schemas import LoggingConfig, RegistryConfig

__all__ = [
    "load_config",
    "LoggingConfig",
    "RegistryConfig",
]
