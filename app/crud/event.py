from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.pagination import Page, SortField, paginate
from app.crud.base import CRUDBase
from app.models.event import Event
from app.schemas.event import Event as EventSchema, EventCreate
from app.schemas.pagination import PaginationQuery


class CRUDEvent(CRUDBase[Event, EventCreate, EventSchema]):
    # nomes expostos na API -> colunas ordenáveis
    sortable = {
        "eventId": Event.id,
        "name": Event.name,
        "location": Event.location,
        "country": Event.country,
        "capacity": Event.capacity,
    }

    def list_paged(self, db: Session, query: PaginationQuery, sort: SortField | None = None) -> Page[Event]:
        return paginate(db, select(Event), query, sort, default_column=Event.id)

    def replace(self, db: Session, db_obj: Event, obj_in: EventSchema) -> Event:
        data = obj_in.model_dump(exclude={"event_id"})
        return self.update(db, db_obj, data)


event_crud = CRUDEvent(Event)
