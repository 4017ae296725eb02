"""Query and mutation operations for a single entity kind."""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel

from eventhub.events.base import Notification
from eventhub.events.bus import NotificationBus
from eventhub.events.types import EventCreated, ParticipantAdded, UserCreated
from eventhub.models import EntityKind, Record, RecordInput, models_for
from eventhub.services.ids import IdGenerator
from eventhub.services.merge import apply_partial
from eventhub.store.collection import Collection

logger = structlog.get_logger()

T = TypeVar("T", bound=Record)

# Kinds whose creation is announced on the bus
CREATION_NOTIFICATIONS: dict[EntityKind, type[Notification]] = {
    EntityKind.USER: UserCreated,
    EntityKind.EVENT: EventCreated,
    EntityKind.PARTICIPANT: ParticipantAdded,
}


class NotFoundError(Exception):
    """Raised when an update or delete names a record that does not exist."""

    def __init__(self, kind: EntityKind, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.label} not found")


class DeleteAllResult(BaseModel):
    """Outcome of removing every record of a kind."""

    count: int


class EntityService(Generic[T]):
    """Create, read, update and delete records of one kind.

    Each service reads and writes only its own collection. Input
    payloads may be the kind's input models or plain mappings, which are
    validated into them.
    """

    def __init__(
        self,
        kind: EntityKind,
        collection: Collection[T],
        bus: NotificationBus,
        id_generator: IdGenerator,
    ):
        """Initialize the service.

        Args:
            kind: Entity kind handled by this service
            collection: Store collection for that kind
            bus: Bus receiving creation notifications
            id_generator: Source of new record identifiers
        """
        if collection.kind is not kind:
            msg = f"Collection holds {collection.kind.value}, not {kind.value}"
            raise ValueError(msg)
        self.kind = kind
        self._collection = collection
        self._bus = bus
        self._new_id = id_generator
        self._models = models_for(kind)

    def list(self) -> list[T]:
        """Return every record in insertion order."""
        return self._collection.list()

    def get(self, record_id: Any) -> T | None:
        """Return the record with ``record_id``, or None."""
        return self._collection.find_by_id(str(record_id))

    def create(self, data: RecordInput | Mapping[str, Any]) -> T:
        """Store a new record with a freshly generated identifier.

        Creation of users, events and participants is announced on the
        notification bus once the record is stored.
        """
        payload = self._coerce(data, self._models.create)
        with self._collection.lock:
            record_id = self._new_id()
            while self._collection.index_of(record_id) >= 0:
                record_id = self._new_id()
            record = self._models.record.model_validate(
                {**payload.model_dump(), "id": record_id}
            )
            self._collection.append(record)

        logger.debug("record_created", kind=self.kind.value, record_id=record.id)

        notification_cls = CREATION_NOTIFICATIONS.get(self.kind)
        if notification_cls is not None:
            self._bus.publish(notification_cls(payload=record))
        return record

    def update(self, record_id: Any, data: RecordInput | Mapping[str, Any]) -> T:
        """Merge the supplied fields into an existing record.

        Raises:
            NotFoundError: If no record has ``record_id``
        """
        partial = self._coerce(data, self._models.update)
        record_id = str(record_id)
        with self._collection.lock:
            index = self._collection.index_of(record_id)
            if index < 0:
                raise NotFoundError(self.kind, record_id)
            updated = apply_partial(self._collection.at(index), partial)
            self._collection.replace_at(index, updated)

        logger.debug(
            "record_updated",
            kind=self.kind.value,
            record_id=record_id,
            fields=sorted(partial.model_fields_set),
        )
        return updated

    def delete(self, record_id: Any) -> T:
        """Remove a record and return its last value.

        Dependent records in other collections are left in place.

        Raises:
            NotFoundError: If no record has ``record_id``
        """
        record_id = str(record_id)
        with self._collection.lock:
            index = self._collection.index_of(record_id)
            if index < 0:
                raise NotFoundError(self.kind, record_id)
            removed = self._collection.remove_at(index)

        logger.debug("record_deleted", kind=self.kind.value, record_id=record_id)
        return removed

    def delete_all(self) -> DeleteAllResult:
        """Remove every record of this kind."""
        count = self._collection.clear()
        logger.debug("records_cleared", kind=self.kind.value, count=count)
        return DeleteAllResult(count=count)

    def count(self) -> int:
        """Number of stored records."""
        return len(self._collection)

    @staticmethod
    def _coerce(
        data: RecordInput | Mapping[str, Any],
        model_cls: type[RecordInput],
    ) -> RecordInput:
        if isinstance(data, model_cls):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        return model_cls.model_validate(data)
