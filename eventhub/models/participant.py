"""Participant records linking users to events."""

from typing import ClassVar

from pydantic import Field

from eventhub.models.base import EntityKind, Record, RecordInput


class Participant(Record):
    """A user's attendance of an event."""

    kind: ClassVar[EntityKind] = EntityKind.PARTICIPANT

    user_id: str = Field(description="Attending user")
    event_id: str = Field(description="Attended event")


class CreateParticipantInput(RecordInput):
    """Fields required to add a participant."""

    user_id: str
    event_id: str


class UpdateParticipantInput(RecordInput):
    """Fields that may be changed on a participant."""

    user_id: str | None = None
    event_id: str | None = None
