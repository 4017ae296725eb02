"""Service registry wiring one store and bus into per-kind services."""

from eventhub.events.bus import NotificationBus
from eventhub.models import EntityKind, Event, Location, Participant, User
from eventhub.services.entity_service import EntityService
from eventhub.services.ids import IdGenerator, random_ids
from eventhub.store.entity_store import EntityStore


class ServiceRegistry:
    """The four entity services of a running application."""

    def __init__(
        self,
        store: EntityStore,
        bus: NotificationBus,
        id_generator: IdGenerator | None = None,
    ):
        """Initialize services.

        Args:
            store: Store shared by all services
            bus: Bus receiving creation notifications
            id_generator: Identifier source (default: random 21-char ids)
        """
        self.store = store
        self.bus = bus
        new_id = id_generator or random_ids()

        self.users: EntityService[User] = EntityService(
            EntityKind.USER, store.users, bus, new_id
        )
        self.locations: EntityService[Location] = EntityService(
            EntityKind.LOCATION, store.locations, bus, new_id
        )
        self.events: EntityService[Event] = EntityService(
            EntityKind.EVENT, store.events, bus, new_id
        )
        self.participants: EntityService[Participant] = EntityService(
            EntityKind.PARTICIPANT, store.participants, bus, new_id
        )
        self._by_kind: dict[EntityKind, EntityService] = {
            EntityKind.USER: self.users,
            EntityKind.LOCATION: self.locations,
            EntityKind.EVENT: self.events,
            EntityKind.PARTICIPANT: self.participants,
        }

    def for_kind(self, kind: EntityKind) -> EntityService:
        """Return the service handling ``kind``."""
        return self._by_kind[kind]
