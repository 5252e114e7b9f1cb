"""
Configuration data model for a recycle bin.

Values come from the bin's ``config`` file (``key=value`` lines) with
environment overrides, validated by Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_SIZE_MB = 1024
DEFAULT_RETENTION_DAYS = 30

BYTES_PER_MB = 1024 * 1024


class BinConfig(BaseModel):
    """
    Settings for one recycle bin, built once per invocation.

    Every component receives this object explicitly; nothing reads the
    configuration file on its own.
    """

    root: Path = Field(..., description="Bin root directory")
    max_size_mb: int = Field(
        default=DEFAULT_MAX_SIZE_MB,
        ge=0,
        description="Maximum total size of recorded items, in MB",
    )
    retention_days: int = Field(
        default=DEFAULT_RETENTION_DAYS,
        ge=0,
        description="Items older than this many days are removed by cleanup",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Messages for configuration lines that were ignored",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def max_bytes(self) -> int:
        return self.max_size_mb * BYTES_PER_MB
