import httpx, logging
from typing import Any
from client.config import BACKEND_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)

# "unbounded" page size used for picklists
PICKLIST_PAGE_SIZE = 9999


def create_http_client(base_url: str = BACKEND_URL, timeout: float = HTTP_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def describe_error(error: httpx.HTTPError) -> str:
    """Человекочитаемое описание ошибки запроса (detail из ответа, если есть)."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            detail = error.response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None
        if isinstance(detail, list):
            detail = "; ".join(_describe_validation_item(item) for item in detail)
        if detail:
            return f"{detail} (HTTP {error.response.status_code})"
        return f"HTTP {error.response.status_code}"
    return str(error) or error.__class__.__name__


def _describe_validation_item(item: Any) -> str:
    # FastAPI 422: {"loc": ["body", "lat"], "msg": "...", "type": "..."}
    if not isinstance(item, dict):
        return str(item)
    loc = [str(part) for part in item.get("loc", []) if part not in ("body", "query", "path")]
    msg = item.get("msg") or item.get("type") or "invalid value"
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _paging_params(
    page_index: int,
    page_size: int,
    sort_column: str | None,
    sort_direction: str | None,
    filter_column: str | None,
    filter_query: str | None,
) -> dict:
    params = {"pageIndex": str(page_index), "pageSize": str(page_size)}
    if sort_column:
        params["sortColumn"] = sort_column
        params["sortDirection"] = sort_direction or "asc"
    if filter_column and filter_query:
        params["filterColumn"] = filter_column
        params["filterQuery"] = filter_query
    return params


class BackendClient:
    """Тонкая обёртка над WorldCities API.

    HTTP-клиент передаётся снаружи, поэтому один и тот же BackendClient
    работает и с живым сервером, и с ASGI/Mock транспортом в тестах.
    Ошибки логируются и пробрасываются наружу как httpx.HTTPError.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self._client = http_client

    def _check(self, resp: httpx.Response, action: str, **context: Any) -> None:
        if resp.status_code >= 400:
            try:
                err = resp.json()
            except ValueError:
                err = resp.text
            logger.error("%s failed: %s status=%s error=%s", action, context, resp.status_code, err)
        resp.raise_for_status()

    # ===== Города =====
    async def get_city(self, city_id: int) -> dict | None:
        """Получить город по ID. None, если такого города нет."""
        resp = await self._client.get(f"/api/Cities/{city_id}")
        if resp.status_code == 404:
            logger.info("City not found: city_id=%s", city_id)
            return None
        self._check(resp, "Get city", city_id=city_id)
        return resp.json()

    async def get_cities(
        self,
        page_index: int = 0,
        page_size: int = 10,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        filter_column: str | None = None,
        filter_query: str | None = None,
    ) -> dict:
        """Страница городов: dict с ключами data, totalCount, pageIndex и т.д."""
        params = _paging_params(page_index, page_size, sort_column, sort_direction, filter_column, filter_query)
        resp = await self._client.get("/api/Cities", params=params)
        self._check(resp, "Get cities", params=params)
        return resp.json()

    async def create_city(self, city: dict) -> dict:
        """Создать город. id в теле игнорируется сервером."""
        resp = await self._client.post("/api/Cities", json=city)
        self._check(resp, "Create city", name=city.get("name"))
        return resp.json()

    async def update_city(self, city: dict) -> dict:
        """Обновить город по city['id']."""
        resp = await self._client.put(f"/api/Cities/{city['id']}", json=city)
        self._check(resp, "Update city", city_id=city["id"])
        return resp.json()

    async def delete_city(self, city_id: int) -> dict | None:
        resp = await self._client.delete(f"/api/Cities/{city_id}")
        if resp.status_code == 404:
            return None
        self._check(resp, "Delete city", city_id=city_id)
        return resp.json()

    async def is_dupe_city(self, city: dict) -> bool:
        """Спросить сервер, есть ли другой город с тем же name + countryId."""
        resp = await self._client.post("/api/Cities/IsDupeCity", json=city)
        self._check(resp, "Dupe check", name=city.get("name"), country_id=city.get("countryId"))
        result = resp.json()
        if not isinstance(result, bool):
            raise httpx.DecodingError(f"Unexpected dupe check response: {result!r}", request=resp.request)
        return result

    # ===== Страны =====
    async def get_countries(
        self,
        page_index: int = 0,
        page_size: int = PICKLIST_PAGE_SIZE,
        sort_column: str | None = "name",
        sort_direction: str | None = "asc",
        filter_column: str | None = None,
        filter_query: str | None = None,
    ) -> dict:
        """Страница стран. По умолчанию весь справочник, отсортированный по имени."""
        params = _paging_params(page_index, page_size, sort_column, sort_direction, filter_column, filter_query)
        resp = await self._client.get("/api/Countries", params=params)
        self._check(resp, "Get countries", params=params)
        return resp.json()

    async def aclose(self) -> None:
        await self._client.aclose()
