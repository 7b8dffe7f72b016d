import asyncio
import json

import httpx

from client.services.dupe_check import DupeChecker, DupeStatus, check_dupe_city
from tests.helpers import mock_backend


def city(name: str, country_id: int = 1, id: int = 0) -> dict:
    return {"id": id, "name": name, "lat": 1.0, "lon": 1.0, "countryId": country_id}


async def test_check_against_server(backend, seeded):
    assert (await check_dupe_city(backend, city("Tokyo"))).status is DupeStatus.DUPE
    assert (await check_dupe_city(backend, city("Tokyo", id=seeded["tokyo"]))).status is DupeStatus.OK
    assert (await check_dupe_city(backend, city("Kyoto"))).status is DupeStatus.OK


async def test_server_error_is_not_ok():
    backend = mock_backend(lambda request: httpx.Response(500, json={"detail": "boom"}))

    result = await check_dupe_city(backend, city("Tokyo"))

    assert result.status is DupeStatus.ERROR
    assert "boom" in result.error
    assert result.blocks_submit


async def test_transport_error_is_not_ok():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await check_dupe_city(mock_backend(handler), city("Tokyo"))

    assert result.status is DupeStatus.ERROR
    assert result.blocks_submit


async def test_non_boolean_answer_is_error():
    backend = mock_backend(lambda request: httpx.Response(200, json={"duplicate": True}))

    result = await check_dupe_city(backend, city("Tokyo"))

    assert result.status is DupeStatus.ERROR


async def test_last_request_wins():
    release_slow = asyncio.Event()
    seen = []

    async def handler(request):
        name = json.loads(request.content)["name"]
        seen.append(name)
        if name == "Slow":
            await release_slow.wait()
            return httpx.Response(200, json=True)
        return httpx.Response(200, json=False)

    checker = DupeChecker(mock_backend(handler))
    first = asyncio.create_task(checker.check(city("Slow")))
    while not seen:
        await asyncio.sleep(0)

    second = await checker.check(city("Fast"))
    release_slow.set()

    assert second.status is DupeStatus.OK
    assert (await first).status is DupeStatus.STALE
    assert not checker.in_flight


async def test_cancel_marks_pending_check_stale():
    started = asyncio.Event()

    async def handler(request):
        started.set()
        await asyncio.Event().wait()

    checker = DupeChecker(mock_backend(handler))
    pending = asyncio.create_task(checker.check(city("Tokyo")))
    await started.wait()

    checker.cancel()

    assert (await pending).status is DupeStatus.STALE
