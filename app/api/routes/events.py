# app/api/routes/events.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from pydantic import ValidationError

from app.api.deps import get_current_user, get_event_service
from app.core.errors import InvalidArgument
from app.schemas.event import Event, EventCreate
from app.schemas.pagination import INT_MAX, PagedResult, PaginationQuery
from app.services.events import EventService

router = APIRouter(dependencies=[Depends(get_current_user)])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "Event not found"}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"description": "Invalid parameters"}}


def pagination_query(
    page: Optional[int] = Query(None, ge=1, le=INT_MAX),
    page_size: Optional[int] = Query(None, ge=1, le=INT_MAX, alias="pageSize"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    descending: bool = Query(False),
) -> PaginationQuery:
    try:
        return PaginationQuery(page=page, page_size=page_size, sort_by=sort_by, descending=descending)
    except ValidationError as exc:
        raise InvalidArgument(exc.errors()[0]["msg"].removeprefix("Value error, ")) from exc


@router.get("/{event_id}", response_model=Event, responses=_NOT_FOUND)
def get_event(event_id: int = Path(..., le=INT_MAX), service: EventService = Depends(get_event_service)):
    return service.get_event(event_id)


@router.get("", response_model=PagedResult[Event], responses=_BAD_REQUEST)
def list_events(
    query: PaginationQuery = Depends(pagination_query),
    service: EventService = Depends(get_event_service),
):
    return service.list_events(query)


@router.post("", response_model=Event, status_code=status.HTTP_201_CREATED, responses=_BAD_REQUEST)
def create_event(body: EventCreate, response: Response, service: EventService = Depends(get_event_service)):
    created = service.create_event(body)
    response.headers["Location"] = f"/api/event/{created.event_id}"
    return created


@router.put("", response_model=Event, responses={**_NOT_FOUND, **_BAD_REQUEST})
def update_event(body: Event, service: EventService = Depends(get_event_service)):
    return service.update_event(body)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND)
def delete_event(event_id: int = Path(..., le=INT_MAX), service: EventService = Depends(get_event_service)):
    service.delete_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
