"""Entity models for EventHub.

This module exports the record and input types for each entity kind:
- Record / RecordInput: Base classes with identifier handling
- User: People who own and attend events
- Location: Places that host events
- Event: Scheduled events with soft references to a user and a location
- Participant: Links between users and events
"""

from eventhub.models.base import EntityKind, Record, RecordInput
from eventhub.models.event import CreateEventInput, Event, UpdateEventInput
from eventhub.models.location import (
    CreateLocationInput,
    Location,
    UpdateLocationInput,
)
from eventhub.models.participant import (
    CreateParticipantInput,
    Participant,
    UpdateParticipantInput,
)
from eventhub.models.registry import ENTITY_MODELS, EntityModels, models_for
from eventhub.models.user import CreateUserInput, UpdateUserInput, User

__all__ = [
    # Base
    "EntityKind",
    "Record",
    "RecordInput",
    # Registry
    "ENTITY_MODELS",
    "EntityModels",
    "models_for",
    # User
    "User",
    "CreateUserInput",
    "UpdateUserInput",
    # Location
    "Location",
    "CreateLocationInput",
    "UpdateLocationInput",
    # Event
    "Event",
    "CreateEventInput",
    "UpdateEventInput",
    # Participant
    "Participant",
    "CreateParticipantInput",
    "UpdateParticipantInput",
]
