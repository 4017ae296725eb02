"""Ordered, lock-guarded record collection for a single entity kind."""

import threading
from collections.abc import Iterator
from typing import Generic, TypeVar

from eventhub.models.base import EntityKind, Record

T = TypeVar("T", bound=Record)


class Collection(Generic[T]):
    """Mutable, append-ordered sequence of records keyed by identifier.

    Features:
    - Single writer at a time (one lock per collection)
    - Snapshot reads, so a reader never sees a half-applied write
    - Identifier lookup by equality on the canonical string id
    """

    def __init__(self, kind: EntityKind, records: list[T] | None = None):
        """Initialize collection.

        Args:
            kind: Entity kind held by this collection
            records: Optional initial records, in order
        """
        self.kind = kind
        self._records: list[T] = list(records or [])
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding this collection, for multi-step writes."""
        return self._lock

    def list(self) -> list[T]:
        """Return a snapshot of the records in insertion order."""
        with self._lock:
            return list(self._records)

    def index_of(self, record_id: str) -> int:
        """Return the position of ``record_id``, or -1 if absent."""
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == record_id:
                    return index
            return -1

    def at(self, index: int) -> T:
        """Return the record at position ``index``."""
        with self._lock:
            return self._records[index]

    def find_by_id(self, record_id: str) -> T | None:
        """Return the record with ``record_id``, or None."""
        with self._lock:
            index = self.index_of(record_id)
            return self._records[index] if index >= 0 else None

    def append(self, record: T) -> None:
        """Append a record to the end of the collection.

        Raises:
            ValueError: If a record with the same id already exists
        """
        with self._lock:
            if self.index_of(record.id) >= 0:
                msg = f"Duplicate {self.kind.value} id: {record.id}"
                raise ValueError(msg)
            self._records.append(record)

    def remove_at(self, index: int) -> T:
        """Remove and return the record at ``index``."""
        with self._lock:
            return self._records.pop(index)

    def replace_at(self, index: int, record: T) -> None:
        """Replace the record at ``index`` in place."""
        with self._lock:
            self._records[index] = record

    def clear(self) -> int:
        """Remove every record and return how many were removed."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())
