import httpx

from client.services.backend_client import BackendClient


def mock_backend(handler) -> BackendClient:
    """BackendClient over httpx.MockTransport for failure scenarios."""
    return BackendClient(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test"))


def envelope(rows: list, page_size: int = 9999) -> dict:
    return {
        "data": rows,
        "pageIndex": 0,
        "pageSize": page_size,
        "totalCount": len(rows),
        "totalPages": 1 if rows else 0,
        "sortColumn": "name",
        "sortDirection": "asc",
        "filterColumn": None,
        "filterQuery": None,
    }
