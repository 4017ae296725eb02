"""Service status endpoints: overall summary, liveness and readiness."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from eventhub.config import settings
from eventhub.events.topics import Topic

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Summary of the running service."""

    status: str
    service: str
    version: str
    environment: str
    checked_at: datetime
    records: int
    open_subscriptions: int


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    """Per-collection sizes and per-topic subscriber counts."""

    status: str
    collections: dict[str, int]
    subscribers: dict[str, int]


def _subscriber_counts(request: Request) -> dict[str, int]:
    bus = getattr(request.app.state, "bus", None)
    if bus is None:
        return {}
    return {topic.value: bus.subscriber_count(topic) for topic in Topic}


@router.get("/", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report service identity with total records and open subscriptions."""
    store = getattr(request.app.state, "store", None)
    records = sum(store.counts().values()) if store is not None else 0
    return HealthResponse(
        status="healthy" if store is not None else "starting",
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.app_env,
        checked_at=datetime.now(UTC),
        records=records,
        open_subscriptions=sum(_subscriber_counts(request).values()),
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """The process is answering requests."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Store and bus are wired up."""
    store = getattr(request.app.state, "store", None)
    if store is None or getattr(request.app.state, "bus", None) is None:
        return ReadinessResponse(status="not_ready", collections={}, subscribers={})

    return ReadinessResponse(
        status="ready",
        collections=store.counts(),
        subscribers=_subscriber_counts(request),
    )
