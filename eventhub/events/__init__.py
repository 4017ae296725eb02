"""Notification infrastructure for EventHub.

Provides:
- Topic: Named notification channels
- Notification: Base class for creation notifications
- NotificationBus / Subscription: In-process filtered multicast
"""

from eventhub.events.base import Notification
from eventhub.events.bus import NotificationBus, Subscription
from eventhub.events.topics import Topic
from eventhub.events.types import EventCreated, ParticipantAdded, UserCreated

__all__ = [
    # Base
    "Notification",
    "Topic",
    # Infrastructure
    "NotificationBus",
    "Subscription",
    # Notification types
    "UserCreated",
    "EventCreated",
    "ParticipantAdded",
]
