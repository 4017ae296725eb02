"""Dependencies resolving application services from app state."""

from fastapi import Request

from eventhub.events.bus import NotificationBus
from eventhub.operations import OperationDispatcher
from eventhub.resolvers import RelationResolver
from eventhub.services.registry import ServiceRegistry
from eventhub.store import EntityStore


def get_store(request: Request) -> EntityStore:
    """Dependency to get EntityStore from app state."""
    return request.app.state.store


def get_bus(request: Request) -> NotificationBus:
    """Dependency to get NotificationBus from app state."""
    return request.app.state.bus


def get_services(request: Request) -> ServiceRegistry:
    """Dependency to get ServiceRegistry from app state."""
    return request.app.state.services


def get_resolver(request: Request) -> RelationResolver:
    """Dependency to get RelationResolver from app state."""
    return request.app.state.resolver


def get_dispatcher(request: Request) -> OperationDispatcher:
    """Dependency to get OperationDispatcher from app state."""
    return request.app.state.dispatcher
