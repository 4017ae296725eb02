"""Tests for Collection."""

import threading

import pytest

from eventhub.models import EntityKind, User
from eventhub.store import Collection, EntityStore


def make_user(user_id: str, username: str = "user") -> User:
    return User(id=user_id, username=username, email=f"{username}@example.com")


@pytest.fixture
def users() -> Collection[User]:
    """Collection with three users a, b, c."""
    return Collection(
        EntityKind.USER, [make_user("a"), make_user("b"), make_user("c")]
    )


class TestCollectionReads:
    """Tests for read operations."""

    def test_list_keeps_insertion_order(self, users: Collection[User]) -> None:
        """list() returns records in append order."""
        assert [u.id for u in users.list()] == ["a", "b", "c"]

    def test_list_is_a_snapshot(self, users: Collection[User]) -> None:
        """Changing the returned list leaves the collection alone."""
        snapshot = users.list()
        snapshot.clear()
        assert len(users) == 3

    def test_find_by_id(self, users: Collection[User]) -> None:
        """find_by_id returns the matching record or None."""
        assert users.find_by_id("b").id == "b"
        assert users.find_by_id("zzz") is None

    def test_index_of_missing(self, users: Collection[User]) -> None:
        """index_of returns -1 for unknown ids."""
        assert users.index_of("c") == 2
        assert users.index_of("zzz") == -1

    def test_ids_compare_as_strings(self) -> None:
        """Numeric-looking ids only match their exact string form."""
        coll = Collection(EntityKind.USER, [make_user("1")])
        assert coll.find_by_id("1") is not None
        assert coll.find_by_id("01") is None


class TestCollectionWrites:
    """Tests for write operations."""

    def test_append(self, users: Collection[User]) -> None:
        """append adds at the end."""
        users.append(make_user("d"))
        assert users.list()[-1].id == "d"

    def test_append_duplicate_id_rejected(self, users: Collection[User]) -> None:
        """Ids stay unique within a collection."""
        with pytest.raises(ValueError):
            users.append(make_user("a"))
        assert len(users) == 3

    def test_remove_at_shifts_following(self, users: Collection[User]) -> None:
        """Removing shifts later records forward."""
        removed = users.remove_at(0)
        assert removed.id == "a"
        assert [u.id for u in users] == ["b", "c"]

    def test_replace_at_keeps_position(self, users: Collection[User]) -> None:
        """replace_at writes in place."""
        users.replace_at(1, make_user("b", username="renamed"))
        assert [u.id for u in users] == ["a", "b", "c"]
        assert users.at(1).username == "renamed"

    def test_clear_returns_count(self, users: Collection[User]) -> None:
        """clear empties the collection and reports how many were removed."""
        assert users.clear() == 3
        assert len(users) == 0
        assert users.clear() == 0

    def test_concurrent_appends(self) -> None:
        """Appends from several threads are all kept."""
        coll: Collection[User] = Collection(EntityKind.USER)

        def worker(prefix: str) -> None:
            for i in range(200):
                coll.append(make_user(f"{prefix}-{i}"))

        threads = [threading.Thread(target=worker, args=(str(n),)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(coll) == 1600
        assert len({u.id for u in coll}) == 1600


class TestEntityStore:
    """Tests for EntityStore."""

    def test_starts_empty(self) -> None:
        """A new store has four empty collections."""
        store = EntityStore()
        assert store.counts() == {
            "users": 0,
            "locations": 0,
            "events": 0,
            "participants": 0,
        }

    def test_collection_lookup(self) -> None:
        """collection() returns the collection for a kind."""
        store = EntityStore(users=[make_user("a")])
        assert store.collection(EntityKind.USER) is store.users
        assert store.collection(EntityKind.EVENT) is store.events
        assert store.collection(EntityKind.USER).find_by_id("a") is not None

    def test_stores_are_independent(self) -> None:
        """Two stores never share records."""
        first = EntityStore()
        second = EntityStore()
        first.users.append(make_user("a"))
        assert len(second.users) == 0
