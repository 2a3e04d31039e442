"""Structured schemas describing msgbody's configuration files."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from msgbody.providers.base import Role

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LoggingConfig(BaseModel):
    """Logging preferences for msgbody's loggers.

    Attributes:
        level: Level applied to the ``msgbody`` logger.
        format: Format string for the handler installed by configure_logging.
        components: Per-module overrides, e.g. ``{"discovery": "DEBUG"}``.
    """

    model_config = ConfigDict(extra="forbid")

    level: str = "WARNING"
    format: str = DEFAULT_LOG_FORMAT
    components: Dict[str, str] = Field(default_factory=dict)

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class RegistryConfig(BaseModel):
    """Top-level msgbody configuration structure.

    Attributes:
        discover_entry_points: Load converters advertised by installed
            distributions in addition to explicitly registered plugins.
        reader_group: Entry point group searched for readers.
        writer_group: Entry point group searched for writers.
        logging: Logging preferences.
    """

    model_config = ConfigDict(extra="forbid")

    discover_entry_points: bool = True
    reader_group: str = "msgbody.readers"
    writer_group: str = "msgbody.writers"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def entry_point_group(self, role: Role) -> str:
        """Return the entry point group configured for ``role``."""

        return self.reader_group if role is Role.READER else self.writer_group
