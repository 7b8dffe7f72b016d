"""Asynchronous duplicate-city validation.

The server only answers true/false; transport and server failures are kept
apart from "not a duplicate" so the form can show them instead of letting a
possibly duplicate city through.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass

import httpx

from client.services.backend_client import BackendClient, describe_error

logger = logging.getLogger(__name__)


class DupeStatus(str, enum.Enum):
    OK = "ok"
    DUPE = "dupe"
    ERROR = "error"
    STALE = "stale"  # superseded by a newer check, result must be ignored


@dataclass(frozen=True)
class DupeCheckResult:
    status: DupeStatus
    error: str | None = None

    @property
    def is_dupe(self) -> bool:
        return self.status is DupeStatus.DUPE

    @property
    def blocks_submit(self) -> bool:
        return self.status in (DupeStatus.DUPE, DupeStatus.ERROR)


async def check_dupe_city(backend: BackendClient, city: dict) -> DupeCheckResult:
    """Одна проверка без отмены: ok / dupe / error."""
    try:
        is_dupe = await backend.is_dupe_city(city)
    except httpx.HTTPError as e:
        logger.warning("Dupe check error: name=%s country_id=%s error=%s", city.get("name"), city.get("countryId"), e)
        return DupeCheckResult(DupeStatus.ERROR, describe_error(e))
    return DupeCheckResult(DupeStatus.DUPE if is_dupe else DupeStatus.OK)


class DupeChecker:
    """Last-request-wins wrapper around check_dupe_city.

    Starting a check cancels the one in flight; a caller whose check was
    superseded gets a STALE result instead of an outdated answer.
    """

    def __init__(self, backend: BackendClient):
        self._backend = backend
        self._generation = 0
        self._pending: asyncio.Task | None = None

    @property
    def in_flight(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def check(self, city: dict) -> DupeCheckResult:
        self.cancel()
        generation = self._generation
        task = asyncio.ensure_future(check_dupe_city(self._backend, city))
        self._pending = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return DupeCheckResult(DupeStatus.STALE)
            raise
        finally:
            if self._pending is task:
                self._pending = None

        if generation != self._generation:
            return DupeCheckResult(DupeStatus.STALE)
        return result

    def cancel(self) -> None:
        """Invalidate the current check, if any."""
        self._generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
