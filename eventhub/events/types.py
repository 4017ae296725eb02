"""Typed notification definitions.

These notifications announce newly created records:
- UserCreated: A user was created
- EventCreated: An event was created
- ParticipantAdded: A participant was added to an event
"""

from typing import ClassVar

from pydantic import Field

from eventhub.events.base import Notification
from eventhub.events.topics import Topic
from eventhub.models import Event, Participant, User


class UserCreated(Notification):
    """Emitted when a new user is created."""

    topic: ClassVar[Topic] = Topic.USER_CREATED
    payload: User = Field(description="The created user")


class EventCreated(Notification):
    """Emitted when a new event is created."""

    topic: ClassVar[Topic] = Topic.EVENT_CREATED
    payload: Event = Field(description="The created event")


class ParticipantAdded(Notification):
    """Emitted when a user is added to an event."""

    topic: ClassVar[Topic] = Topic.PARTICIPANT_ADDED
    payload: Participant = Field(description="The created participant")
