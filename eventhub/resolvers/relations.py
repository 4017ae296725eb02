"""Lazy relationship resolution between entity kinds.

Each relation is a plain function keyed by ``(kind, field)`` that scans
the current store. Nothing is cached or indexed, so results always
reflect the latest writes.
"""

from collections.abc import Callable, Iterable
from typing import Any

from eventhub.models import EntityKind, Event, Location, Participant, Record, User
from eventhub.store.collection import Collection
from eventhub.store.entity_store import EntityStore

RelationFunc = Callable[[EntityStore, Any], Record | list[Record] | None]


class UnknownRelationError(Exception):
    """Raised when a caller asks for a relation the kind does not have."""


def _find_one(collection: Collection, record_id: str | None) -> Record | None:
    if record_id is None:
        return None
    return collection.find_by_id(record_id)


def _find_all(collection: Collection, field: str, value: str) -> list[Record]:
    return [record for record in collection if getattr(record, field) == value]


def user_events(store: EntityStore, user: User) -> list[Event]:
    """Events owned by the user."""
    return _find_all(store.events, "user_id", user.id)


def user_participants(store: EntityStore, user: User) -> list[Participant]:
    """Participations of the user."""
    return _find_all(store.participants, "user_id", user.id)


def event_user(store: EntityStore, event: Event) -> User | None:
    """Owner of the event, if set and present."""
    return _find_one(store.users, event.user_id)


def event_location(store: EntityStore, event: Event) -> Location | None:
    """Location of the event, if set and present."""
    return _find_one(store.locations, event.location_id)


def event_participants(store: EntityStore, event: Event) -> list[Participant]:
    """Participants of the event."""
    return _find_all(store.participants, "event_id", event.id)


def location_events(store: EntityStore, location: Location) -> list[Event]:
    """Events held at the location."""
    return _find_all(store.events, "location_id", location.id)


def participant_user(store: EntityStore, participant: Participant) -> User | None:
    return _find_one(store.users, participant.user_id)


def participant_event(store: EntityStore, participant: Participant) -> Event | None:
    return _find_one(store.events, participant.event_id)


RELATIONS: dict[tuple[EntityKind, str], RelationFunc] = {
    (EntityKind.USER, "events"): user_events,
    (EntityKind.USER, "participants"): user_participants,
    (EntityKind.EVENT, "user"): event_user,
    (EntityKind.EVENT, "location"): event_location,
    (EntityKind.EVENT, "participants"): event_participants,
    (EntityKind.LOCATION, "events"): location_events,
    (EntityKind.PARTICIPANT, "user"): participant_user,
    (EntityKind.PARTICIPANT, "event"): participant_event,
}


def relation_names(kind: EntityKind) -> list[str]:
    """Names of the relations available on ``kind``."""
    return [field for (k, field) in RELATIONS if k is kind]


class RelationResolver:
    """Resolves related records against a store on demand."""

    def __init__(self, store: EntityStore):
        self._store = store

    def resolve(
        self,
        kind: EntityKind,
        record: Record,
        field: str,
    ) -> Record | list[Record] | None:
        """Compute one relation of a record.

        Args:
            kind: Kind of ``record``
            record: Record to start from
            field: Relation name (e.g. ``"events"``)

        Returns:
            The related record or None for to-one relations, a list for
            to-many relations. Dangling references resolve to None or [].

        Raises:
            UnknownRelationError: If ``kind`` has no relation ``field``
        """
        func = RELATIONS.get((kind, field))
        if func is None:
            available = ", ".join(relation_names(kind))
            msg = f"{kind.label} has no relation '{field}' (available: {available})"
            raise UnknownRelationError(msg)
        return func(self._store, record)

    def expand(
        self,
        kind: EntityKind,
        record: Record,
        fields: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Dump a record with the requested relations attached.

        Related records are included one level deep, without their own
        relations.
        """
        data = record.to_payload()
        for field in fields:
            related = self.resolve(kind, record, field)
            if isinstance(related, list):
                data[field] = [item.to_payload() for item in related]
            else:
                data[field] = related.to_payload() if related is not None else None
        return data
