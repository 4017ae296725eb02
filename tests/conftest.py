"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from eventhub.events.bus import NotificationBus
from eventhub.main import create_app
from eventhub.resolvers import RelationResolver
from eventhub.services.ids import sequential_ids
from eventhub.services.registry import ServiceRegistry
from eventhub.store import EntityStore, load_seed

SEED_PATH = Path(__file__).parent.parent / "eventhub" / "data" / "seed.json"


@pytest.fixture
def store() -> EntityStore:
    """Empty entity store."""
    return EntityStore()


@pytest.fixture
def seeded_store() -> EntityStore:
    """Store loaded from the packaged seed file."""
    return load_seed(SEED_PATH)


@pytest.fixture
def bus() -> NotificationBus:
    """Notification bus with unbounded subscriptions."""
    return NotificationBus()


@pytest.fixture
def services(store: EntityStore, bus: NotificationBus) -> ServiceRegistry:
    """Services over the empty store with predictable ids (id-1, id-2, ...)."""
    return ServiceRegistry(store, bus, sequential_ids("id-"))


@pytest.fixture
def seeded_resolver(seeded_store: EntityStore) -> RelationResolver:
    """Resolver over the seeded store."""
    return RelationResolver(seeded_store)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Create async test client for a fresh app with an empty store."""
    app = create_app(store=EntityStore(), id_generator=sequential_ids("id-"))

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
