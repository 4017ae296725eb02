"""Base classes shared by all entity records and their inputs."""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class EntityKind(str, Enum):
    """The four entity kinds held by the store."""

    USER = "user"
    LOCATION = "location"
    EVENT = "event"
    PARTICIPANT = "participant"

    @property
    def label(self) -> str:
        """Human-readable name used in error messages."""
        return self.value.capitalize()

    @property
    def plural(self) -> str:
        """Collection name as used in seed data and URLs."""
        return f"{self.value}s"


class RecordInput(BaseModel):
    """Base class for create/update payloads (no identifier)."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class Record(BaseModel):
    """Base class for stored records.

    Provides:
    - Opaque string identifier (numbers are canonicalized to strings)
    - Alias-aware serialization for wire payloads
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        from_attributes=True,
        frozen=True,
    )

    kind: ClassVar[EntityKind]

    id: str = Field(min_length=1, description="Unique record identifier")

    def to_payload(self) -> dict[str, Any]:
        """Serialize using wire field names."""
        return self.model_dump(by_alias=True)
