from backend.database import new_session
from backend.models.country import CountryOrm
from backend.repositories.api_result import ApiResultRepository, InvalidColumnError
from backend.schemas.country import SCountryCreate
from sqlalchemy import and_, select




COUNTRY_COLUMNS = {
    "id": CountryOrm.id,
    "name": CountryOrm.name,
    "iso2": CountryOrm.iso2,
    "iso3": CountryOrm.iso3,
}

# fields that IsDupeField may check
DUPE_FIELDS = {
    "name": CountryOrm.name,
    "iso2": CountryOrm.iso2,
    "iso3": CountryOrm.iso3,
}


class CountryRepository:
    @classmethod
    async def get_countries(
        cls,
        page_index: int,
        page_size: int,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        filter_column: str | None = None,
        filter_query: str | None = None,
    ) -> dict:
        """Получить страницу стран"""
        page = await ApiResultRepository.fetch_page(
            select(CountryOrm),
            COUNTRY_COLUMNS,
            CountryOrm.id,
            page_index,
            page_size,
            sort_column,
            sort_direction,
            filter_column,
            filter_query,
        )
        page["data"] = [country for (country,) in page["data"]]
        return page
    
    
    @classmethod
    async def get_country_by_id(cls, country_id: int):
        """Получить страну по ID"""
        async with new_session() as session:
            query = select(CountryOrm).where(CountryOrm.id == country_id)
            result = await session.execute(query)
            return result.scalars().first()
    
    
    @classmethod
    async def create_country(cls, country_data: SCountryCreate):
        """Создать новую страну"""
        async with new_session() as session:
            country = CountryOrm(
                name=country_data.name,
                iso2=country_data.iso2,
                iso3=country_data.iso3
            )
            session.add(country)
            await session.commit()
            await session.refresh(country)
            return country
    
    
    @classmethod
    async def update_country(cls, country_id: int, country_data: SCountryCreate):
        """Обновить страну; None, если не найдена"""
        async with new_session() as session:
            country = await session.get(CountryOrm, country_id)
            if not country:
                return None
            
            country.name = country_data.name
            country.iso2 = country_data.iso2
            country.iso3 = country_data.iso3
            
            await session.commit()
            await session.refresh(country)
            return country
    
    
    @classmethod
    async def is_dupe_field(cls, country_id: int, field_name: str, field_value: str) -> bool:
        """Проверить, занято ли значение поля name/iso2/iso3 другой страной"""
        column = DUPE_FIELDS.get(field_name.lower())
        if column is None:
            raise InvalidColumnError(f"Недопустимое поле для проверки: {field_name}")
        
        async with new_session() as session:
            conditions = [column == field_value]
            if country_id:
                conditions.append(CountryOrm.id != country_id)
            
            query = select(CountryOrm.id).where(and_(*conditions)).limit(1)
            result = await session.execute(query)
            return result.scalar() is not None
