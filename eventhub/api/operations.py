"""Generic operation endpoint addressing the core by operation name."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from eventhub.api.dependencies import get_dispatcher
from eventhub.api.entities import serialize_related
from eventhub.events.bus import Subscription
from eventhub.operations import OperationDispatcher, OperationError
from eventhub.services.entity_service import NotFoundError

router = APIRouter(prefix="/operations", tags=["operations"])


class OperationRequest(BaseModel):
    """Request body naming an operation and its arguments."""

    name: str = Field(description="Operation name, e.g. createUser or events")
    args: dict[str, Any] = Field(default_factory=dict)


class OperationResponse(BaseModel):
    """Result of a dispatched operation."""

    name: str
    result: Any


@router.post("", response_model=OperationResponse)
async def run_operation(
    request: OperationRequest,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> OperationResponse:
    """Run a query or mutation by name.

    Subscriptions are not available here; use the WebSocket endpoint.

    Raises:
        HTTPException: 400 for unknown operations or missing arguments,
            404 when an update or delete names a missing record,
            422 when the arguments fail record validation
    """
    try:
        result = dispatcher.execute_named(request.name, request.args)
    except OperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=422, detail=e.errors(include_url=False, include_context=False)
        )

    if isinstance(result, Subscription):
        result.close()
        raise HTTPException(
            status_code=400,
            detail=f"'{request.name}' is a subscription; connect to /subscriptions",
        )
    if isinstance(result, BaseModel) and not hasattr(result, "to_payload"):
        return OperationResponse(name=request.name, result=result.model_dump())
    return OperationResponse(name=request.name, result=serialize_related(result))
