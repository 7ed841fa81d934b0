# app/schemas/pagination.py
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# limite das colunas INTEGER (ids, page, pageSize, capacity)
INT_MAX = 2**31 - 1


class CamelModel(BaseModel):
    """Base for request/response bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PaginationQuery(CamelModel):
    page: Optional[int] = Field(default=None, ge=1, le=INT_MAX)
    page_size: Optional[int] = Field(default=None, ge=1, le=INT_MAX)
    sort_by: Optional[str] = None
    descending: bool = False

    @model_validator(mode="after")
    def _page_and_size_together(self):
        if (self.page is None) != (self.page_size is None):
            raise ValueError("Both Page and PageSize must be provided together.")
        return self


class PagedResult(CamelModel, Generic[T]):
    items: List[T]
    total_count: int
    page: int
    page_size: int
