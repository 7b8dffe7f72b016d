from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel




T = TypeVar("T")


class SCamelModel(BaseModel):
    """Базовая схема: snake_case в коде, camelCase в JSON"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SApiResult(SCamelModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    page_index: int
    page_size: int
    total_count: int
    total_pages: int
    sort_column: Optional[str] = None
    sort_direction: Optional[str] = None
    filter_column: Optional[str] = None
    filter_query: Optional[str] = None
