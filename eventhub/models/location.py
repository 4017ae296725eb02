"""Location records."""

from typing import ClassVar

from pydantic import Field

from eventhub.models.base import EntityKind, Record, RecordInput


class Location(Record):
    """A place where events are hosted."""

    kind: ClassVar[EntityKind] = EntityKind.LOCATION

    name: str = Field(description="Location name")
    desc: str = Field(description="Free-form description")
    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")


class CreateLocationInput(RecordInput):
    """Fields required to create a location."""

    name: str
    desc: str
    lat: float
    lng: float


class UpdateLocationInput(RecordInput):
    """Fields that may be changed on a location."""

    name: str | None = None
    desc: str | None = None
    lat: float | None = None
    lng: float | None = None
