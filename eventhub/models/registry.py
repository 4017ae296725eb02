"""Lookup of the model classes that belong to each entity kind."""

from dataclasses import dataclass

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
from eventhub.models.user import CreateUserInput, UpdateUserInput, User


@dataclass(frozen=True)
class EntityModels:
    """Record, create-input and update-input classes for one kind."""

    record: type[Record]
    create: type[RecordInput]
    update: type[RecordInput]


ENTITY_MODELS: dict[EntityKind, EntityModels] = {
    EntityKind.USER: EntityModels(User, CreateUserInput, UpdateUserInput),
    EntityKind.LOCATION: EntityModels(
        Location, CreateLocationInput, UpdateLocationInput
    ),
    EntityKind.EVENT: EntityModels(Event, CreateEventInput, UpdateEventInput),
    EntityKind.PARTICIPANT: EntityModels(
        Participant, CreateParticipantInput, UpdateParticipantInput
    ),
}


def models_for(kind: EntityKind) -> EntityModels:
    """Return the model classes registered for ``kind``."""
    return ENTITY_MODELS[kind]
