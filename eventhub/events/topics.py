"""Notification topics."""

from enum import Enum


class Topic(str, Enum):
    """Named notification channels."""

    USER_CREATED = "user-created"
    EVENT_CREATED = "event-created"
    PARTICIPANT_ADDED = "participant-added"

    @property
    def filterable(self) -> bool:
        """Whether subscribers may narrow this topic by user id."""
        return self is not Topic.USER_CREATED

    @property
    def field_name(self) -> str:
        """camelCase name used by GraphQL-style callers (``eventCreated``)."""
        head, *rest = self.value.split("-")
        return head + "".join(part.capitalize() for part in rest)

    @classmethod
    def parse(cls, name: str) -> "Topic":
        """Resolve a topic from its value or camelCase field name.

        Raises:
            ValueError: If no topic has that name
        """
        for topic in cls:
            if name in (topic.value, topic.field_name):
                return topic
        msg = f"Unknown topic: {name}"
        raise ValueError(msg)
