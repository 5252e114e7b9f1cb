"""
Record data models for the recycle bin.

A Record is the durable description of one captured item: who it was,
where it lived, and how it looked when it was removed. Records are
write-once; the store only ever adds or drops whole rows.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Format of the DELETION_DATE column (local time, second precision)
DELETION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ItemKind(str, Enum):
    """What kind of filesystem entry was captured."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class Record(BaseModel):
    """
    Metadata for one captured item.

    Example:
        >>> record = Record(
        ...     id="1730300000000000000_4242",
        ...     original_name="notes.txt",
        ...     original_path="/home/ines/notes.txt",
        ...     deletion_date="2025-10-30 14:32:00",
        ...     size=120,
        ...     kind=ItemKind.FILE,
        ...     mode="644",
        ...     owner="ines:ines",
        ... )
        >>> record.deleted_at
        datetime.datetime(2025, 10, 30, 14, 32)
    """

    id: str = Field(..., min_length=1, description="Unique, immutable item identifier")
    original_name: str = Field(..., description="Base name of the item when captured")
    original_path: str = Field(..., description="Absolute path of the item when captured")
    deletion_date: str = Field(..., description="Capture time as YYYY-MM-DD HH:MM:SS")
    size: int = Field(..., ge=0, description="Recorded size in bytes")
    kind: ItemKind = Field(..., description="file, directory or symlink")
    mode: str = Field(default="", description="Octal permission bits (e.g. '644')")
    owner: str = Field(default="", description="Owner as user:group")

    model_config = ConfigDict(frozen=True)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """IDs name payload entries, so they must be plain file names."""
        if "/" in v or v in (".", ".."):
            raise ValueError(f"Invalid record ID: {v!r}")
        return v

    @property
    def deleted_at(self) -> datetime | None:
        """Parsed deletion time, or None if the stored text is unparsable."""
        try:
            return datetime.strptime(self.deletion_date.strip(), DELETION_DATE_FORMAT)
        except ValueError:
            return None

    def to_row(self) -> list[str]:
        """Serialize to the column order of metadata.db."""
        return [
            self.id,
            self.original_name,
            self.original_path,
            self.deletion_date,
            str(self.size),
            self.kind.value,
            self.mode,
            self.owner,
        ]

    @classmethod
    def from_row(cls, row: list[str]) -> "Record":
        """
        Build a Record from a metadata.db row.

        Raises:
            ValueError: If the row has the wrong shape or invalid values
        """
        if len(row) != 8:
            raise ValueError(f"expected 8 columns, got {len(row)}")

        record_id, name, path, date, size_raw, kind_raw, mode, owner = row
        try:
            size = int(size_raw)
        except ValueError as e:
            raise ValueError(f"Invalid FILE_SIZE value: {size_raw!r}") from e
        try:
            kind = ItemKind(kind_raw)
        except ValueError as e:
            raise ValueError(f"Invalid FILE_TYPE value: {kind_raw!r}") from e

        return cls(
            id=record_id,
            original_name=name,
            original_path=path,
            deletion_date=date,
            size=size,
            kind=kind,
            mode=mode,
            owner=owner,
        )
