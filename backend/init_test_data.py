import logging
from decimal import Decimal
from backend.database import new_session
from backend.models.city import CityOrm
from backend.models.country import CountryOrm
from sqlalchemy import select




logger = logging.getLogger(__name__)

TEST_COUNTRIES = [
    ("Japan", "JP", "JPN", [("Tokyo", "35.6897", "139.6922"), ("Osaka", "34.6936", "135.5019")]),
    ("Italy", "IT", "ITA", [("Rome", "41.8931", "12.4828"), ("Milan", "45.4669", "9.1900")]),
    ("Kazakhstan", "KZ", "KAZ", [("Almaty", "43.2775", "76.8958"), ("Astana", "51.1472", "71.4222")]),
    ("Russia", "RU", "RUS", [("Moscow", "55.7558", "37.6178"), ("Novosibirsk", "55.0500", "82.9500")]),
]


async def init_countries_and_cities():
    """Инициализация тестовых стран и городов (только для пустой базы)"""
    async with new_session() as session:
        existing = await session.execute(select(CountryOrm.id).limit(1))
        if existing.scalar() is not None:
            return False
        
        for name, iso2, iso3, cities in TEST_COUNTRIES:
            country = CountryOrm(name=name, iso2=iso2, iso3=iso3)
            country.cities = [
                CityOrm(name=city_name, lat=Decimal(lat), lon=Decimal(lon))
                for city_name, lat, lon in cities
            ]
            session.add(country)
        
        await session.commit()
        return True


async def init_all_test_data():
    """Инициализация всех тестовых данных"""
    if await init_countries_and_cities():
        logger.info("Тестовые данные созданы")
