"""
Typed configuration models using Pydantic.

Every setting has a default, so a run needs no configuration file.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SCHEMA_PATH = Path("./schema.json")


class LogLevel(str, Enum):
    """Log levels accepted by the logging setup."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class JsvConfig(BaseModel):
    """Settings for a validation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_path: Path = Field(
        default=DEFAULT_SCHEMA_PATH,
        description="Schema document used when --schema is not given",
    )
    encoding: str = Field(default="utf-8-sig", description="Text encoding of the CSV file")
    delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="CSV field delimiter",
    )
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Minimum log level")
    json_logs: bool = Field(default=False, description="Emit log lines as JSON")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v
