from decimal import Decimal

import pytest

from backend.repositories.city import CityRepository
from backend.schemas.city import SCityCreate


def candidate(name: str, country_id: int, id: int = 0) -> SCityCreate:
    return SCityCreate(id=id, name=name, lat=Decimal("1"), lon=Decimal("1"), country_id=country_id)


async def test_get_city(seeded):
    city_existing = await CityRepository.get_city_by_id(1)
    city_not_existing = await CityRepository.get_city_by_id(999)

    assert city_existing is not None
    assert city_existing.name == "Tokyo"
    assert city_not_existing is None


async def test_is_dupe_city_same_name_and_country(seeded):
    assert await CityRepository.is_dupe_city(candidate("Tokyo", 1)) is True


async def test_is_dupe_city_excludes_own_id(seeded):
    assert await CityRepository.is_dupe_city(candidate("Tokyo", 1, id=seeded["tokyo"])) is False


async def test_is_dupe_city_other_name(seeded):
    assert await CityRepository.is_dupe_city(candidate("Kyoto", 1)) is False


async def test_is_dupe_city_same_name_other_country(seeded):
    assert await CityRepository.is_dupe_city(candidate("Tokyo", 2)) is False


async def test_is_dupe_city_ignores_coordinates(seeded):
    city = SCityCreate(name="Tokyo", lat=Decimal("-10.5"), lon=Decimal("20.25"), country_id=1)
    assert await CityRepository.is_dupe_city(city) is True


async def test_create_city_assigns_id(seeded):
    city = await CityRepository.create_city(
        SCityCreate(id=77, name="Kyoto", lat=Decimal("35.0111"), lon=Decimal("135.7669"), country_id=1)
    )

    assert city.id not in (0, 77)
    stored = await CityRepository.get_city_by_id(city.id)
    assert stored.name == "Kyoto"
    assert stored.lat == Decimal("35.0111")


async def test_create_city_unknown_country(seeded):
    with pytest.raises(ValueError):
        await CityRepository.create_city(candidate("Nowhere", 42))


async def test_update_city(seeded):
    city = await CityRepository.update_city(
        seeded["osaka"],
        SCityCreate(name="Osaka-shi", lat=Decimal("34.6936"), lon=Decimal("135.5019"), country_id=1),
    )

    assert city.name == "Osaka-shi"
    assert (await CityRepository.get_city_by_id(seeded["osaka"])).name == "Osaka-shi"


async def test_update_missing_city_returns_none(seeded):
    assert await CityRepository.update_city(999, candidate("Ghost", 1)) is None


async def test_delete_city(seeded):
    deleted = await CityRepository.delete_city(seeded["rome"])

    assert deleted.name == "Rome"
    assert await CityRepository.get_city_by_id(seeded["rome"]) is None
    assert await CityRepository.delete_city(seeded["rome"]) is None
