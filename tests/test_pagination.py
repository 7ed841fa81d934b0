import pytest
from pydantic import ValidationError
from sqlalchemy import select

from app.core.errors import InvalidArgument, InvalidSort
from app.core.pagination import page_window, paginate, resolve_sort
from app.crud.event import event_crud
from app.models.event import Event
from app.schemas.pagination import PaginationQuery

FIELDS = event_crud.sortable


@pytest.mark.parametrize("raw, expected", [("name", "name"), ("NAME", "name"), ("eventid", "eventId"), (" Capacity ", "capacity")])
def test_resolve_sort_is_case_insensitive(raw, expected):
    field = resolve_sort(raw, FIELDS)
    assert field.name == expected
    assert field.column is FIELDS[expected]


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_resolve_sort_without_column(raw):
    assert resolve_sort(raw, FIELDS) is None


@pytest.mark.parametrize("raw", ["DROP TABLE", "name; DELETE FROM events", "id desc", "__class__", "doesNotExist"])
def test_resolve_sort_rejects_unknown_columns(raw):
    with pytest.raises(InvalidSort) as exc_info:
        resolve_sort(raw, FIELDS)
    assert isinstance(exc_info.value, InvalidArgument)
    assert raw in exc_info.value.message


def test_page_window():
    assert page_window(None, None) is None
    assert page_window(1, 10) == (0, 10)
    assert page_window(2, 1) == (1, 1)
    assert page_window(3, 25) == (50, 25)


@pytest.mark.parametrize("page, size", [(1, None), (None, 5), (0, 5), (1, 0)])
def test_page_window_rejects_bad_input(page, size):
    with pytest.raises(InvalidArgument):
        page_window(page, size)


def test_pagination_query_requires_both_or_neither():
    with pytest.raises(ValidationError):
        PaginationQuery(page=1)
    with pytest.raises(ValidationError):
        PaginationQuery(page_size=1)
    assert PaginationQuery().page is None


def test_paginate_second_page(db, three_events):
    page = paginate(db, select(Event), PaginationQuery(page=2, page_size=1), None, Event.id)

    assert [e.id for e in page.items] == [three_events[1].id]
    assert page.total_count == 3
    assert page.page == 2
    assert page.page_size == 1


def test_paginate_without_window_returns_everything(db, three_events):
    page = paginate(db, select(Event), PaginationQuery(), None, Event.id)

    assert [e.id for e in page.items] == [e.id for e in three_events]
    assert page.page == 1
    assert page.page_size == 3


def test_paginate_sorts_descending(db, three_events):
    sort = resolve_sort("name", FIELDS)
    page = paginate(db, select(Event), PaginationQuery(sort_by="name", descending=True), sort, Event.id)

    assert [e.name for e in page.items] == ["Event 3", "Event 2", "Event 1"]


def test_paginate_empty_collection(db):
    page = paginate(db, select(Event), PaginationQuery(), None, Event.id)

    assert page.items == []
    assert page.total_count == 0
    assert page.page_size == 0
