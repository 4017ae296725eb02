"""API router aggregation."""

from fastapi import APIRouter

from eventhub.api.entities import (
    events_router,
    locations_router,
    participants_router,
    users_router,
)
from eventhub.api.health import router as health_router
from eventhub.api.operations import router as operations_router
from eventhub.api.subscriptions import router as subscriptions_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(users_router)
api_router.include_router(locations_router)
api_router.include_router(events_router)
api_router.include_router(participants_router)
# Name-addressed queries and mutations
api_router.include_router(operations_router)
# Live creation notifications over WebSocket
api_router.include_router(subscriptions_router)
