# app/core/pagination.py
"""Single-column sort resolution and page windows for list endpoints.

Sortable columns are declared per entity as a plain mapping
``{"canonicalName": Model.column}``; anything outside that mapping is
rejected with ``InvalidSort`` so user input never reaches ORDER BY.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from app.core.errors import InvalidArgument, InvalidSort
from app.schemas.pagination import PaginationQuery

T = TypeVar("T")


@dataclass(frozen=True)
class SortField:
    name: str
    column: Any


@dataclass
class Page(Generic[T]):
    items: List[T]
    total_count: int
    page: int
    page_size: int


def resolve_sort(sort_by: Optional[str], fields: Mapping[str, Any]) -> Optional[SortField]:
    """Maps a user supplied column name (any case) to a declared sortable field."""
    if sort_by is None or not sort_by.strip():
        return None
    wanted = sort_by.strip().lower()
    for name, column in fields.items():
        if name.lower() == wanted:
            return SortField(name=name, column=column)
    raise InvalidSort(sort_by)


def page_window(page: Optional[int], page_size: Optional[int]) -> Optional[Tuple[int, int]]:
    """Returns (skip, take), or None for an unpaginated request."""
    if page is None and page_size is None:
        return None
    if page is None or page_size is None:
        raise InvalidArgument("Both Page and PageSize must be provided together.")
    if page < 1:
        raise InvalidArgument("Page must be greater than 0.")
    if page_size < 1:
        raise InvalidArgument("PageSize must be greater than 0.")
    return (page - 1) * page_size, page_size


def paginate(
    db: Session,
    stmt: Select,
    query: PaginationQuery,
    sort: Optional[SortField],
    default_column: Any,
) -> Page:
    window = page_window(query.page, query.page_size)

    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0

    if sort is not None:
        ordering: Sequence[Any] = [sort.column.desc() if query.descending else sort.column.asc()]
        if sort.column is not default_column:
            # desempate estável pelo id
            ordering = [*ordering, default_column.asc()]
    else:
        ordering = [default_column.asc()]
    stmt = stmt.order_by(*ordering)

    if window is not None:
        skip, take = window
        stmt = stmt.offset(skip).limit(take)

    items = list(db.scalars(stmt).all())
    return Page(
        items=items,
        total_count=total,
        page=query.page or 1,
        page_size=query.page_size or total,
    )
