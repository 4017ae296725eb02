"""Base Notification class for creation notifications."""

from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from eventhub.events.topics import Topic
from eventhub.models.base import Record


class Notification(BaseModel):
    """Base class for notifications published on the bus.

    Notifications are immutable records of a creation that happened.
    Subclasses pin the topic and narrow the payload type.

    Attributes:
        notification_id: Unique identifier for this notification
        timestamp: When the notification was produced
        payload: The newly created record
    """

    model_config = ConfigDict(frozen=True)

    topic: ClassVar[Topic]

    notification_id: UUID = Field(
        default_factory=uuid4,
        description="Unique notification identifier",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the notification was produced",
    )
    payload: Record = Field(description="The newly created record")

    @property
    def user_id(self) -> str | None:
        """User the payload belongs to, if the payload carries one."""
        return getattr(self.payload, "user_id", None)
