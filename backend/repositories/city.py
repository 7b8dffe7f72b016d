from backend.database import new_session
from backend.models.city import CityOrm
from backend.models.country import CountryOrm
from backend.repositories.api_result import ApiResultRepository
from backend.schemas.city import SCityCreate
from sqlalchemy import and_, select




# public (camelCase) names accepted by sortColumn / filterColumn
CITY_COLUMNS = {
    "id": CityOrm.id,
    "name": CityOrm.name,
    "lat": CityOrm.lat,
    "lon": CityOrm.lon,
    "countryId": CityOrm.country_id,
    "countryName": CountryOrm.name,
}


class CityRepository:
    @classmethod
    async def get_cities(
        cls,
        page_index: int,
        page_size: int,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        filter_column: str | None = None,
        filter_query: str | None = None,
    ) -> dict:
        """Получить страницу городов с названием страны"""
        query = (
            select(CityOrm, CountryOrm.name.label("country_name"))
            .join(CountryOrm, CityOrm.country_id == CountryOrm.id)
        )
        page = await ApiResultRepository.fetch_page(
            query,
            CITY_COLUMNS,
            CityOrm.id,
            page_index,
            page_size,
            sort_column,
            sort_direction,
            filter_column,
            filter_query,
        )
        page["data"] = [
            {
                "id": city.id,
                "name": city.name,
                "lat": city.lat,
                "lon": city.lon,
                "country_id": city.country_id,
                "country_name": country_name,
            }
            for city, country_name in page["data"]
        ]
        return page
    
    
    @classmethod
    async def get_city_by_id(cls, city_id: int):
        """Получить город по ID (None, если не найден)"""
        async with new_session() as session:
            query = select(CityOrm).where(CityOrm.id == city_id)
            result = await session.execute(query)
            return result.scalars().first()
    
    
    @classmethod
    async def create_city(cls, city_data: SCityCreate):
        """Создать новый город (id из запроса игнорируется)"""
        async with new_session() as session:
            await cls._ensure_country(session, city_data.country_id)
            city = CityOrm(
                name=city_data.name,
                lat=city_data.lat,
                lon=city_data.lon,
                country_id=city_data.country_id
            )
            session.add(city)
            await session.commit()
            await session.refresh(city)
            return city
    
    
    @classmethod
    async def update_city(cls, city_id: int, city_data: SCityCreate):
        """Обновить город; None, если город не найден"""
        async with new_session() as session:
            city = await session.get(CityOrm, city_id)
            if not city:
                return None
            
            await cls._ensure_country(session, city_data.country_id)
            city.name = city_data.name
            city.lat = city_data.lat
            city.lon = city_data.lon
            city.country_id = city_data.country_id
            
            await session.commit()
            await session.refresh(city)
            return city
    
    
    @classmethod
    async def delete_city(cls, city_id: int):
        """Удалить город; возвращает удалённый город или None"""
        async with new_session() as session:
            city = await session.get(CityOrm, city_id)
            if not city:
                return None
            
            await session.delete(city)
            await session.commit()
            return city
    
    
    @classmethod
    async def is_dupe_city(cls, city_data: SCityCreate) -> bool:
        """Проверить, есть ли другой город с тем же названием в той же стране"""
        async with new_session() as session:
            conditions = [
                CityOrm.name == city_data.name,
                CityOrm.country_id == city_data.country_id,
            ]
            if city_data.id:
                conditions.append(CityOrm.id != city_data.id)
            
            query = select(CityOrm.id).where(and_(*conditions)).limit(1)
            result = await session.execute(query)
            return result.scalar() is not None
    
    
    @classmethod
    async def _ensure_country(cls, session, country_id: int):
        if await session.get(CountryOrm, country_id) is None:
            raise ValueError(f"Страна с ID {country_id} не найдена")
