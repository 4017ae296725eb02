"""In-memory storage for EventHub.

Provides:
- Collection: Ordered, lock-guarded records of one kind
- EntityStore: The four collections of a running service
- load_seed / parse_seed: Initial dataset loading
"""

from eventhub.store.collection import Collection
from eventhub.store.entity_store import EntityStore
from eventhub.store.seed import SeedDataError, load_seed, parse_seed

__all__ = [
    "Collection",
    "EntityStore",
    "SeedDataError",
    "load_seed",
    "parse_seed",
]
