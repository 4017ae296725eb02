"""Event records.

Start and end times travel on the wire as ``from`` and ``to``; in Python
they are ``start_time`` and ``end_time``.
"""

from typing import ClassVar

from pydantic import Field

from eventhub.models.base import EntityKind, Record, RecordInput


class Event(Record):
    """A scheduled event, optionally owned by a user and held at a location.

    ``user_id`` and ``location_id`` are soft references: they are never
    checked against the store and may point at nothing.
    """

    kind: ClassVar[EntityKind] = EntityKind.EVENT

    title: str = Field(description="Event title")
    desc: str = Field(description="Free-form description")
    date: str = Field(description="Event date as supplied by the caller")
    start_time: str = Field(alias="from", description="Start time")
    end_time: str = Field(alias="to", description="End time")
    location_id: str | None = Field(default=None, description="Hosting location")
    user_id: str | None = Field(default=None, description="Owning user")


class CreateEventInput(RecordInput):
    """Fields required to create an event."""

    title: str
    desc: str
    date: str
    start_time: str = Field(alias="from")
    end_time: str = Field(alias="to")
    location_id: str | None = None
    user_id: str | None = None


class UpdateEventInput(RecordInput):
    """Fields that may be changed on an event."""

    title: str | None = None
    desc: str | None = None
    date: str | None = None
    start_time: str | None = Field(default=None, alias="from")
    end_time: str | None = Field(default=None, alias="to")
    location_id: str | None = None
    user_id: str | None = None
