import math
from sqlalchemy import Select, String, cast, func, select
from sqlalchemy.sql.elements import ColumnElement
from backend.database import new_session




SORT_DIRECTIONS = ("asc", "desc")


class InvalidColumnError(ValueError):
    """Недопустимое имя колонки для сортировки/фильтрации или направление сортировки"""


def resolve_column(columns: dict[str, ColumnElement], name: str) -> ColumnElement:
    """Найти колонку по публичному имени (camelCase или snake_case, без учёта регистра)"""
    wanted = name.replace("_", "").lower()
    for key, column in columns.items():
        if key.lower() == wanted:
            return column
    raise InvalidColumnError(f"Недопустимое имя колонки: {name}")


class ApiResultRepository:
    @classmethod
    async def fetch_page(
        cls,
        query: Select,
        columns: dict[str, ColumnElement],
        id_column: ColumnElement,
        page_index: int,
        page_size: int,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        filter_column: str | None = None,
        filter_query: str | None = None,
    ) -> dict:
        """Выполнить запрос с фильтрацией, сортировкой и пагинацией.
        
        Все имена колонок проверяются по словарю `columns` до выполнения
        запроса. Возвращает словарь с ключами data (строки Row), total_count,
        total_pages и отражёнными параметрами пагинации.
        """
        if page_index < 0:
            raise ValueError("pageIndex не может быть отрицательным")
        if page_size <= 0:
            raise ValueError("pageSize должен быть больше нуля")
        
        direction = (sort_direction or "asc").lower()
        if direction not in SORT_DIRECTIONS:
            raise InvalidColumnError(f"Недопустимое направление сортировки: {sort_direction}")
        
        sort_by = resolve_column(columns, sort_column) if sort_column else None
        filter_by = resolve_column(columns, filter_column) if filter_column else None
        
        if filter_by is not None and filter_query:
            if not isinstance(filter_by.type, String):
                filter_by = cast(filter_by, String)
            query = query.where(filter_by.startswith(filter_query, autoescape=True))
        
        async with new_session() as session:
            count_query = select(func.count()).select_from(query.subquery())
            total_count = (await session.execute(count_query)).scalar() or 0
            
            order_by = []
            if sort_by is not None:
                order_by.append(sort_by.asc() if direction == "asc" else sort_by.desc())
            order_by.append(id_column.asc())
            
            page_query = query.order_by(*order_by).offset(page_index * page_size).limit(page_size)
            result = await session.execute(page_query)
            rows = result.all()
        
        return {
            "data": rows,
            "page_index": page_index,
            "page_size": page_size,
            "total_count": total_count,
            "total_pages": math.ceil(total_count / page_size),
            "sort_column": sort_column,
            "sort_direction": direction,
            "filter_column": filter_column,
            "filter_query": filter_query,
        }
