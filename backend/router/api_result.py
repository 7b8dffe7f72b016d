from typing import Optional
from fastapi import Query
from backend.config import MAX_PAGE_SIZE




async def get_paging_params(
    page_index: int = Query(0, ge=0, alias="pageIndex", description="Номер страницы (с нуля)"),
    page_size: int = Query(10, ge=1, le=MAX_PAGE_SIZE, alias="pageSize", description="Размер страницы"),
    sort_column: Optional[str] = Query(None, alias="sortColumn", description="Колонка сортировки"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection", description="asc или desc"),
    filter_column: Optional[str] = Query(None, alias="filterColumn", description="Колонка фильтра"),
    filter_query: Optional[str] = Query(None, alias="filterQuery", description="Начало значения для фильтра"),
) -> dict:
    """Общие параметры пагинации, сортировки и фильтрации"""
    return {
        "page_index": page_index,
        "page_size": page_size,
        "sort_column": sort_column,
        "sort_direction": sort_direction,
        "filter_column": filter_column,
        "filter_query": filter_query,
    }
