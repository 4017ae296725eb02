"""In-memory store holding one collection per entity kind."""

import logging

from eventhub.models import EntityKind, Event, Location, Participant, User
from eventhub.store.collection import Collection

logger = logging.getLogger(__name__)


class EntityStore:
    """The four entity collections of a running service.

    A store is constructed once at startup and handed to the services
    that read and write it; there is no module-level instance.
    """

    def __init__(
        self,
        users: list[User] | None = None,
        locations: list[Location] | None = None,
        events: list[Event] | None = None,
        participants: list[Participant] | None = None,
    ):
        """Initialize store, optionally with seed records.

        Args:
            users: Initial users
            locations: Initial locations
            events: Initial events
            participants: Initial participants
        """
        self.users: Collection[User] = Collection(EntityKind.USER, users)
        self.locations: Collection[Location] = Collection(
            EntityKind.LOCATION, locations
        )
        self.events: Collection[Event] = Collection(EntityKind.EVENT, events)
        self.participants: Collection[Participant] = Collection(
            EntityKind.PARTICIPANT, participants
        )
        self._collections: dict[EntityKind, Collection] = {
            EntityKind.USER: self.users,
            EntityKind.LOCATION: self.locations,
            EntityKind.EVENT: self.events,
            EntityKind.PARTICIPANT: self.participants,
        }
        logger.debug(f"Entity store initialized: {self.counts()}")

    def collection(self, kind: EntityKind) -> Collection:
        """Return the collection for ``kind``."""
        return self._collections[kind]

    def counts(self) -> dict[str, int]:
        """Return the number of records per collection."""
        return {kind.plural: len(coll) for kind, coll in self._collections.items()}
