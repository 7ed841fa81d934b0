# app/services/events.py
import logging
import time

from sqlalchemy.orm import Session

from app.core.errors import InvalidSort, NotFound
from app.core.pagination import resolve_sort
from app.crud.event import event_crud
from app.models.event import Event as EventModel
from app.schemas.event import Event, EventCreate
from app.schemas.pagination import PagedResult, PaginationQuery

logger = logging.getLogger(__name__)


def _to_schema(e: EventModel) -> Event:
    return Event(
        event_id=e.id,
        name=e.name,
        location=e.location,
        country=e.country,
        capacity=e.capacity,
    )


def _not_found(event_id: int) -> NotFound:
    return NotFound(f"Event with ID {event_id} not found.")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class EventService:
    def __init__(self, db: Session):
        self.db = db

    def get_event(self, event_id: int) -> Event:
        start = time.perf_counter()
        e = event_crud.get(self.db, event_id)
        if e is None:
            logger.warning("Event %s not found", event_id)
            raise _not_found(event_id)
        logger.info("Fetched event %s in %s ms", event_id, _elapsed_ms(start))
        return _to_schema(e)

    def list_events(self, query: PaginationQuery) -> PagedResult[Event]:
        try:
            sort = resolve_sort(query.sort_by, event_crud.sortable)
        except InvalidSort:
            logger.warning("Invalid sort property '%s' requested", query.sort_by)
            raise

        start = time.perf_counter()
        page = event_crud.list_paged(self.db, query, sort)
        logger.info(
            "Fetched %s events (page %s, size %s, sortBy %s, descending %s) in %s ms",
            len(page.items),
            query.page or 0,
            query.page_size or 0,
            sort.name if sort else "eventId",
            query.descending,
            _elapsed_ms(start),
        )
        return PagedResult[Event](
            items=[_to_schema(e) for e in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )

    def create_event(self, body: EventCreate) -> Event:
        start = time.perf_counter()
        e = event_crud.create(self.db, body)
        logger.info("Created event %s in %s ms", e.id, _elapsed_ms(start))
        return _to_schema(e)

    def update_event(self, body: Event) -> Event:
        start = time.perf_counter()
        e = event_crud.get(self.db, body.event_id)
        if e is None:
            logger.warning("Attempted to update event %s, but it was not found", body.event_id)
            raise _not_found(body.event_id)
        e = event_crud.replace(self.db, e, body)
        logger.info("Updated event %s in %s ms", body.event_id, _elapsed_ms(start))
        return _to_schema(e)

    def delete_event(self, event_id: int) -> None:
        start = time.perf_counter()
        if event_crud.get(self.db, event_id) is None or not event_crud.remove(self.db, event_id):
            logger.warning("Attempted to delete event %s, but it was not found", event_id)
            raise _not_found(event_id)
        logger.info("Deleted event %s in %s ms", event_id, _elapsed_ms(start))
