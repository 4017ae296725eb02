"""Tests for EntityService and ServiceRegistry."""

from typing import Any

import pytest

from eventhub.events.bus import NotificationBus
from eventhub.events.topics import Topic
from eventhub.models import EntityKind
from eventhub.services.entity_service import EntityService, NotFoundError
from eventhub.services.registry import ServiceRegistry
from eventhub.store import EntityStore

PAYLOADS: dict[EntityKind, dict[str, Any]] = {
    EntityKind.USER: {"username": "ann", "email": "ann@example.com"},
    EntityKind.LOCATION: {"name": "Hall", "desc": "Annex", "lat": 1.5, "lng": 2.5},
    EntityKind.EVENT: {
        "title": "Standup",
        "desc": "Daily sync",
        "date": "2024-05-06",
        "from": "09:00",
        "to": "09:15",
        "user_id": "u1",
    },
    EntityKind.PARTICIPANT: {"user_id": "u1", "event_id": "e1"},
}

UPDATES: dict[EntityKind, tuple[dict[str, Any], str, Any]] = {
    # partial, untouched field, its expected value
    EntityKind.USER: ({"email": "new@example.com"}, "username", "ann"),
    EntityKind.LOCATION: ({"name": "Annex"}, "lat", 1.5),
    EntityKind.EVENT: ({"title": "Retro"}, "start_time", "09:00"),
    EntityKind.PARTICIPANT: ({"event_id": "e2"}, "user_id", "u1"),
}

ALL_KINDS = list(EntityKind)


def seed_records(service: EntityService, kind: EntityKind, n: int) -> list:
    return [service.create(PAYLOADS[kind]) for _ in range(n)]


class TestCreate:
    """Tests for create."""

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_create_then_find(
        self, services: ServiceRegistry, kind: EntityKind
    ) -> None:
        """A created record is found by its new id with the payload's values."""
        service = services.for_kind(kind)
        created = service.create(PAYLOADS[kind])

        found = service.get(created.id)
        assert found == created
        expected = {"id": created.id, **PAYLOADS[kind]}
        payload = found.to_payload()
        assert {k: v for k, v in payload.items() if k in expected} == expected

    def test_values_stored_verbatim(self, services: ServiceRegistry) -> None:
        """Padded strings and any coordinates come back exactly as sent."""
        user = {"username": " ann ", "email": "\tann@example.com "}
        location = {"name": " X", "desc": "", "lat": 200.0, "lng": -720.5}

        created_user = services.users.create(user)
        created_location = services.locations.create(location)

        found_user = services.users.get(created_user.id)
        found_location = services.locations.get(created_location.id)
        assert found_user.to_payload() == {"id": created_user.id, **user}
        assert found_location.to_payload() == {"id": created_location.id, **location}

    def test_ids_come_from_generator(self, services: ServiceRegistry) -> None:
        """Identifiers are assigned by the injected generator."""
        first = services.users.create(PAYLOADS[EntityKind.USER])
        second = services.locations.create(PAYLOADS[EntityKind.LOCATION])
        assert (first.id, second.id) == ("id-1", "id-2")

    def test_identical_payloads_make_distinct_records(
        self, services: ServiceRegistry
    ) -> None:
        """Creation never deduplicates by content."""
        records = seed_records(services.users, EntityKind.USER, 3)
        assert len({r.id for r in records}) == 3
        assert services.users.count() == 3

    def test_supplied_id_ignored(self, services: ServiceRegistry) -> None:
        """Callers cannot choose the identifier."""
        user = services.users.create({"id": "mine", **PAYLOADS[EntityKind.USER]})
        assert user.id == "id-1"

    def test_generated_collision_retried(self, store: EntityStore) -> None:
        """A generated id already in use is replaced with a fresh one."""
        ids = iter(["dup", "dup", "fresh"])
        services = ServiceRegistry(store, NotificationBus(), lambda: next(ids))
        services.users.create(PAYLOADS[EntityKind.USER])
        second = services.users.create(PAYLOADS[EntityKind.USER])
        assert second.id == "fresh"

    def test_appends_in_order(self, services: ServiceRegistry) -> None:
        """New records go to the end of the collection."""
        records = seed_records(services.events, EntityKind.EVENT, 3)
        assert [e.id for e in services.events.list()] == [r.id for r in records]

    @pytest.mark.parametrize(
        ("kind", "topic"),
        [
            (EntityKind.USER, Topic.USER_CREATED),
            (EntityKind.EVENT, Topic.EVENT_CREATED),
            (EntityKind.PARTICIPANT, Topic.PARTICIPANT_ADDED),
        ],
    )
    def test_create_publishes(
        self,
        services: ServiceRegistry,
        bus: NotificationBus,
        kind: EntityKind,
        topic: Topic,
    ) -> None:
        """User, event and participant creation is announced."""
        subscription = bus.subscribe(topic)
        services.for_kind(kind).create(PAYLOADS[kind])
        assert subscription.pending == 1

    def test_location_create_is_silent(
        self, services: ServiceRegistry, bus: NotificationBus
    ) -> None:
        """Location creation publishes nothing."""
        subscriptions = [bus.subscribe(topic) for topic in Topic]
        services.locations.create(PAYLOADS[EntityKind.LOCATION])
        assert all(s.pending == 0 for s in subscriptions)


class TestUpdate:
    """Tests for update."""

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_update_merges(self, services: ServiceRegistry, kind: EntityKind) -> None:
        """Supplied fields change, the rest keep their values."""
        service = services.for_kind(kind)
        created = service.create(PAYLOADS[kind])
        partial, untouched, value = UPDATES[kind]

        updated = service.update(created.id, partial)

        for field, new_value in partial.items():
            assert getattr(updated, field) == new_value
        assert getattr(updated, untouched) == value
        assert service.get(created.id) == updated

    def test_update_keeps_position(self, services: ServiceRegistry) -> None:
        """The updated record stays where it was."""
        records = seed_records(services.users, EntityKind.USER, 3)
        services.users.update(records[1].id, {"username": "zed"})
        listed = services.users.list()
        assert [u.id for u in listed] == [r.id for r in records]
        assert listed[1].username == "zed"

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_update_missing_fails_without_change(
        self, services: ServiceRegistry, kind: EntityKind
    ) -> None:
        """Updating an unknown id raises NotFound and changes nothing."""
        service = services.for_kind(kind)
        seed_records(service, kind, 2)
        before = service.list()

        with pytest.raises(NotFoundError) as exc_info:
            service.update("missing", UPDATES[kind][0])

        assert str(exc_info.value) == f"{kind.label} not found"
        assert exc_info.value.kind is kind
        assert service.list() == before

    def test_update_accepts_numeric_id(self, seeded_store: EntityStore) -> None:
        """Numeric ids match their string form."""
        services = ServiceRegistry(seeded_store, NotificationBus())
        updated = services.users.update(1, {"username": "anna"})
        assert updated.id == "1"
        assert updated.username == "anna"

    def test_update_does_not_publish(
        self, services: ServiceRegistry, bus: NotificationBus
    ) -> None:
        """Only creation is announced."""
        user = services.users.create(PAYLOADS[EntityKind.USER])
        subscription = bus.subscribe(Topic.USER_CREATED)
        services.users.update(user.id, {"username": "bea"})
        assert subscription.pending == 0


class TestDelete:
    """Tests for delete and delete_all."""

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_delete_removes_one(
        self, services: ServiceRegistry, kind: EntityKind
    ) -> None:
        """Deleting returns the prior record and shrinks the collection by one."""
        service = services.for_kind(kind)
        records = seed_records(service, kind, 3)

        removed = service.delete(records[1].id)

        assert removed == records[1]
        assert service.count() == 2
        assert service.get(records[1].id) is None
        assert [r.id for r in service.list()] == [records[0].id, records[2].id]

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_delete_missing(self, services: ServiceRegistry, kind: EntityKind) -> None:
        """Deleting an unknown id raises NotFound and keeps the count."""
        service = services.for_kind(kind)
        seed_records(service, kind, 2)

        with pytest.raises(NotFoundError, match=f"{kind.label} not found"):
            service.delete("missing")
        assert service.count() == 2

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_delete_all(self, services: ServiceRegistry, kind: EntityKind) -> None:
        """delete_all reports N, then 0."""
        service = services.for_kind(kind)
        seed_records(service, kind, 4)

        assert service.delete_all().count == 4
        assert service.list() == []
        assert service.delete_all().count == 0

    def test_delete_is_isolated_per_kind(self, services: ServiceRegistry) -> None:
        """Deleting a participant or event never touches locations."""
        services.locations.create(PAYLOADS[EntityKind.LOCATION])
        participant = services.participants.create(PAYLOADS[EntityKind.PARTICIPANT])
        event = services.events.create(PAYLOADS[EntityKind.EVENT])

        services.participants.delete(participant.id)
        services.events.delete(event.id)

        assert services.locations.count() == 1
        assert services.participants.count() == 0
        assert services.events.count() == 0

    def test_no_cascade(self, services: ServiceRegistry) -> None:
        """Removing a user leaves their events and participations in place."""
        user = services.users.create(PAYLOADS[EntityKind.USER])
        event = services.events.create(
            {**PAYLOADS[EntityKind.EVENT], "user_id": user.id}
        )
        services.participants.create({"user_id": user.id, "event_id": event.id})

        services.users.delete(user.id)

        assert services.events.count() == 1
        assert services.participants.count() == 1


class TestServiceWiring:
    """Tests for service construction."""

    def test_rejects_mismatched_collection(
        self, store: EntityStore, bus: NotificationBus
    ) -> None:
        """A service must be given its own kind's collection."""
        with pytest.raises(ValueError):
            EntityService(EntityKind.USER, store.events, bus, lambda: "x")

    def test_registry_covers_all_kinds(self, services: ServiceRegistry) -> None:
        """for_kind returns the service for each kind."""
        for kind in EntityKind:
            assert services.for_kind(kind).kind is kind

    def test_get_missing_returns_none(self, services: ServiceRegistry) -> None:
        """Reads never fail."""
        assert services.events.get("nope") is None
