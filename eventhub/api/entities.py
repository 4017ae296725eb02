"""CRUD and relation endpoints, one router per entity kind."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from eventhub.api.dependencies import get_resolver, get_services
from eventhub.models import EntityKind, Record, models_for
from eventhub.resolvers import RelationResolver, UnknownRelationError
from eventhub.services.entity_service import NotFoundError
from eventhub.services.registry import ServiceRegistry


def parse_include(include: str | None) -> list[str]:
    """Split a comma-separated ``include`` parameter into relation names."""
    if not include:
        return []
    return [name.strip() for name in include.split(",") if name.strip()]


def serialize_related(related: Record | list[Record] | None) -> Any:
    """Dump a resolved relation using wire field names."""
    if related is None:
        return None
    if isinstance(related, list):
        return [item.to_payload() for item in related]
    return related.to_payload()


def build_entity_router(kind: EntityKind) -> APIRouter:
    """Create the router serving ``/<kind>s``.

    Routes:
    - GET    ""                   list records
    - GET    "/{record_id}"       one record, optional ?include=rel1,rel2
    - GET    "/{record_id}/{rel}" one relation of a record
    - POST   ""                   create (201)
    - PATCH  "/{record_id}"       partial update
    - DELETE "/{record_id}"       delete one
    - DELETE ""                   delete all, returns {"count": N}
    """
    models = models_for(kind)
    create_input = models.create
    update_input = models.update
    router = APIRouter(prefix=f"/{kind.plural}", tags=[kind.plural])

    @router.get("")
    async def list_records(
        services: ServiceRegistry = Depends(get_services),
    ) -> list[dict[str, Any]]:
        return [r.to_payload() for r in services.for_kind(kind).list()]

    @router.get("/{record_id}")
    async def get_record(
        record_id: str,
        include: str | None = Query(default=None, description="Relations to expand"),
        services: ServiceRegistry = Depends(get_services),
        resolver: RelationResolver = Depends(get_resolver),
    ) -> dict[str, Any]:
        record = services.for_kind(kind).get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{kind.label} not found")
        try:
            return resolver.expand(kind, record, parse_include(include))
        except UnknownRelationError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.get("/{record_id}/{relation}")
    async def get_relation(
        record_id: str,
        relation: str,
        services: ServiceRegistry = Depends(get_services),
        resolver: RelationResolver = Depends(get_resolver),
    ) -> Any:
        record = services.for_kind(kind).get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{kind.label} not found")
        try:
            related = resolver.resolve(kind, record, relation)
        except UnknownRelationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return serialize_related(related)

    @router.post("", status_code=201)
    async def create_record(
        data: create_input,  # type: ignore[valid-type]
        services: ServiceRegistry = Depends(get_services),
    ) -> dict[str, Any]:
        return services.for_kind(kind).create(data).to_payload()

    @router.patch("/{record_id}")
    async def update_record(
        record_id: str,
        data: update_input,  # type: ignore[valid-type]
        services: ServiceRegistry = Depends(get_services),
    ) -> dict[str, Any]:
        try:
            return services.for_kind(kind).update(record_id, data).to_payload()
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        services: ServiceRegistry = Depends(get_services),
    ) -> dict[str, Any]:
        try:
            return services.for_kind(kind).delete(record_id).to_payload()
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.delete("")
    async def delete_all_records(
        services: ServiceRegistry = Depends(get_services),
    ) -> dict[str, int]:
        return services.for_kind(kind).delete_all().model_dump()

    return router


users_router = build_entity_router(EntityKind.USER)
locations_router = build_entity_router(EntityKind.LOCATION)
events_router = build_entity_router(EntityKind.EVENT)
participants_router = build_entity_router(EntityKind.PARTICIPANT)
