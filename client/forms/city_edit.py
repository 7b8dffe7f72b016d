"""City edit form controller.

Headless counterpart of the city edit view: it owns the form values, the
country picklist, field validation, the asynchronous duplicate check and the
create/update submission. Rendering is left to the caller.

Lifecycle::

    idle -> loading_countries -> ready(dirty=False) -> ready(dirty=True)
         -> submitting -> submitted            (success, navigates away)
                      `-> ready(dirty=True)   (failure, error surfaced)
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import re
from typing import Any, Callable

import httpx

from client.services.backend_client import BackendClient, describe_error
from client.services.dupe_check import DupeChecker, DupeCheckResult, DupeStatus
from client.states import CityEditStates, CommonStates, FormModes

logger = logging.getLogger(__name__)

FIELDS = ("name", "lat", "lon", "country_id")
# the duplicate key; changing either re-runs the server check
DUPE_KEY_FIELDS = ("name", "country_id")
# Numeric(7, 4) on the server: at most 3 whole digits and 4 decimals
COORDINATE_PATTERN = re.compile(r"-?[0-9]{1,3}(\.[0-9]{1,4})?")
COUNTRY_ID_PATTERN = re.compile(r"[0-9]+")

CITIES_PATH = "/cities"
CREATE_TITLE = "Create a new City"
DUPE_MESSAGE = "A city with this name already exists in the selected country."
STALE_MESSAGE = "The form was changed while it was being checked. Please submit again."


def validate_fields(values: dict[str, str]) -> dict[str, str]:
    """Синхронная валидация полей. Возвращает {поле: сообщение}."""
    errors: dict[str, str] = {}
    if not (values.get("name") or "").strip():
        errors["name"] = "Name is required."
    for field in ("lat", "lon"):
        value = (values.get(field) or "").strip()
        if not value:
            errors[field] = f"{field.capitalize()} is required."
        elif not COORDINATE_PATTERN.fullmatch(value):
            errors[field] = f"{field.capitalize()} must be a number with up to 3 whole digits and 4 decimal places."
    country_id = (values.get("country_id") or "").strip()
    if not country_id:
        errors["country_id"] = "Country is required."
    elif not COUNTRY_ID_PATTERN.fullmatch(country_id) or int(country_id) <= 0:
        errors["country_id"] = "Country must be selected from the list."
    return errors


class CityEditForm:
    def __init__(self, backend: BackendClient, navigate: Callable[[str], Any] | None = None):
        self._backend = backend
        self._navigate = navigate
        self._dupe_checker = DupeChecker(backend)
        self._dupe_task: asyncio.Task | None = None

        self.state = CommonStates.IDLE
        self.mode = FormModes.CREATE
        self.id: int | None = None
        self.city: dict | None = None
        self.title = ""
        self.countries: list[dict] = []
        self.values: dict[str, str] = {field: "" for field in FIELDS}
        self.dirty = False
        self.errors: dict[str, str] = {}
        self.dupe: DupeCheckResult | None = None
        self.error: str | None = None
        self._loaded_key: tuple[str, str] | None = None

    # ===== Загрузка =====
    async def load(self, city_id: int | None = None) -> None:
        """Загрузить справочник стран и, в режиме edit, сам город.

        Falsy city_id означает создание нового города.
        """
        self.state = CityEditStates.LOADING_COUNTRIES
        self.error = None
        self._loaded_key = None
        self.id = city_id or None
        self.mode = FormModes.EDIT if self.id else FormModes.CREATE

        if self.mode == FormModes.EDIT:
            await asyncio.gather(self._load_countries(), self._load_city(self.id))
        else:
            await self._load_countries()
            self.title = CREATE_TITLE

        self.state = CityEditStates.READY

    async def _load_countries(self) -> None:
        try:
            result = await self._backend.get_countries()
        except httpx.HTTPError as e:
            self.error = f"Could not load countries: {describe_error(e)}"
            return
        self.countries = result.get("data", [])

    async def _load_city(self, city_id: int) -> None:
        try:
            city = await self._backend.get_city(city_id)
        except httpx.HTTPError as e:
            self.error = f"Could not load city {city_id}: {describe_error(e)}"
            return
        if city is None:
            self.error = f"City {city_id} was not found."
            return
        self.city = city
        self.title = f"Edit - {city['name']}"
        self._patch(city)

    def _patch(self, city: dict) -> None:
        # loading never marks the form dirty
        self.values = {
            "name": city.get("name") or "",
            "lat": _format_number(city.get("lat")),
            "lon": _format_number(city.get("lon")),
            "country_id": _format_number(city.get("countryId")),
        }
        self._loaded_key = self._dupe_key()
        logger.info("Form model has been loaded.")
        logger.info("Name has been loaded with initial values.")

    # ===== Ввод пользователя =====
    def set_value(self, field: str, value: Any) -> None:
        """Изменить поле от имени пользователя.

        Должно вызываться внутри работающего event loop: изменение name или
        country_id запускает фоновую проверку дубликата.
        """
        if field not in FIELDS:
            raise KeyError(field)
        if self.state != CityEditStates.READY:
            raise RuntimeError(f"Form is not editable in state {self.state!r}")

        self.values[field] = "" if value is None else str(value)
        self.dirty = True
        logger.info("Form was updated by the user.")
        if field == "name":
            logger.info("Name was updated by the user.")

        self.errors = validate_fields(self.values)
        if field in DUPE_KEY_FIELDS:
            self._schedule_dupe_check()

    def _schedule_dupe_check(self) -> None:
        self.dupe = None
        self._cancel_dupe_checks()
        if any(field in self.errors for field in DUPE_KEY_FIELDS):
            # nothing to send yet
            return
        self._dupe_task = asyncio.create_task(self._run_dupe_check())

    async def _run_dupe_check(self) -> DupeCheckResult:
        result = await self._dupe_checker.check(self._dupe_candidate())
        if result.status is not DupeStatus.STALE:
            self.dupe = result
            logger.info("Dupe check finished: %s", result.status.value)
        return result

    async def wait_validation(self) -> DupeCheckResult | None:
        """Дождаться фоновой проверки дубликата, если она есть."""
        task = self._dupe_task
        if task is None:
            return self.dupe
        await asyncio.gather(task, return_exceptions=True)
        return self.dupe

    @property
    def valid(self) -> bool:
        """Поля корректны и проверка дубликата не блокирует отправку.

        Пока name и country_id совпадают с загруженной записью, проверка не
        требуется: запись не может быть дубликатом самой себя.
        """
        if validate_fields(self.values):
            return False
        if self.dupe is None:
            return self._loaded_key is not None and self._loaded_key == self._dupe_key()
        return not self.dupe.blocks_submit

    def _dupe_key(self) -> tuple[str, str]:
        return self.values["name"].strip(), self.values["country_id"].strip()

    def to_city(self) -> dict:
        return {
            "id": self.id or 0,
            "name": self.values["name"].strip(),
            "lat": float(self.values["lat"]),
            "lon": float(self.values["lon"]),
            "countryId": int(self.values["country_id"]),
        }

    def _dupe_candidate(self) -> dict:
        # lat/lon are not part of the duplicate key and may still be invalid here
        candidate = {
            "id": self.id or 0,
            "name": self.values["name"].strip(),
            "lat": 0.0,
            "lon": 0.0,
            "countryId": int(self.values["country_id"]),
        }
        for field in ("lat", "lon"):
            if field not in self.errors:
                candidate[field] = float(self.values[field])
        return candidate

    # ===== Сохранение =====
    async def submit(self) -> bool:
        """Проверить форму и отправить POST (create) или PUT (edit).

        True, если город сохранён и выполнена навигация. При любой ошибке
        форма остаётся в состоянии ready, а причина лежит в self.error.
        """
        if self.state != CityEditStates.READY:
            raise RuntimeError(f"Form cannot be submitted in state {self.state!r}")

        self.error = None
        self.errors = validate_fields(self.values)
        if self.errors:
            return False

        city = self.to_city()
        self._cancel_dupe_checks()
        dupe = await self._dupe_checker.check(city)
        if dupe.status is DupeStatus.STALE:
            # edited while the check was running; the newer check decides
            self.error = STALE_MESSAGE
            return False
        self.dupe = dupe
        if dupe.status is DupeStatus.DUPE:
            self.error = DUPE_MESSAGE
            return False
        if dupe.status is DupeStatus.ERROR:
            self.error = f"Could not check for duplicates: {dupe.error}"
            return False

        self.state = CityEditStates.SUBMITTING
        try:
            if self.id:
                saved = await self._backend.update_city(city)
                logger.info("City %s has been updated.", saved["id"])
            else:
                saved = await self._backend.create_city(city)
                logger.info("City %s has been created.", saved["id"])
        except httpx.HTTPError as e:
            self.error = f"Could not save the city: {describe_error(e)}"
            self.dirty = True
            self.state = CityEditStates.READY
            return False

        self.city = saved
        self.state = CityEditStates.SUBMITTED
        if self._navigate is not None:
            outcome = self._navigate(CITIES_PATH)
            if inspect.isawaitable(outcome):
                await outcome
        return True

    def close(self) -> None:
        """Отменить незавершённые проверки (форма закрыта)."""
        self._cancel_dupe_checks()

    def _cancel_dupe_checks(self) -> None:
        self._dupe_checker.cancel()
        if self._dupe_task is not None and not self._dupe_task.done():
            self._dupe_task.cancel()


def _format_number(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
