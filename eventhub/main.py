"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from eventhub.api.router import api_router
from eventhub.config import Settings, settings
from eventhub.events.base import Notification
from eventhub.events.bus import NotificationBus
from eventhub.events.topics import Topic
from eventhub.operations import OperationDispatcher
from eventhub.resolvers import RelationResolver
from eventhub.services.ids import IdGenerator, random_ids
from eventhub.services.registry import ServiceRegistry
from eventhub.store import EntityStore, load_seed

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def log_creation(notification: Notification) -> None:
    """Bus listener recording every announced creation."""
    structlog.get_logger().info(
        "record_announced",
        topic=notification.topic.value,
        record_id=notification.payload.id,
    )


def build_store(config: Settings) -> EntityStore:
    """Create the store, from seed data when configured."""
    if config.seed_data_path:
        return load_seed(config.seed_data_path)
    return EntityStore()


def create_app(
    config: Settings | None = None,
    store: EntityStore | None = None,
    id_generator: IdGenerator | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Settings to use (default: environment settings)
        store: Pre-built store (default: seed file or empty store)
        id_generator: Identifier source (default: random ids)
    """
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan management.

        Startup:
        - Build the entity store (seeded or empty)
        - Initialize notification bus and services

        Shutdown:
        - Close open subscriptions
        """
        logger.info(f"Starting {config.app_name}...")

        app_store = store if store is not None else build_store(config)
        app.state.store = app_store
        logger.info(f"Entity store ready: {app_store.counts()}")

        bus = NotificationBus(queue_size=config.subscription_queue_size)
        for topic in Topic:
            bus.add_listener(topic, log_creation)
        app.state.bus = bus
        logger.info("Notification bus initialized")

        services = ServiceRegistry(
            app_store, bus, id_generator or random_ids(config.id_length)
        )
        app.state.services = services
        app.state.resolver = RelationResolver(app_store)
        app.state.dispatcher = OperationDispatcher(services, bus)
        logger.info("Services initialized")

        yield

        # Shutdown
        logger.info(f"Shutting down {config.app_name}...")
        bus.close()
        await bus.drain()
        logger.info("Subscriptions closed")

    application = FastAPI(
        title=config.app_name,
        description="Users, locations, events and participants with live updates",
        version=config.app_version,
        lifespan=lifespan,
    )
    application.include_router(api_router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "eventhub.main:app",
        host="0.0.0.0",
        port=4000,
        reload=True,
    )
