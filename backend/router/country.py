import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from backend.repositories.country import CountryRepository
from backend.router.api_result import get_paging_params
from backend.schemas.api_result import SApiResult
from backend.schemas.country import SCountry, SCountryCreate




logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/Countries",
    tags=["Страны"]
)


@router.get("", response_model=SApiResult[SCountry])
async def get_countries(paging: dict = Depends(get_paging_params)):
    """Получить список стран с пагинацией, сортировкой и фильтрацией"""
    try:
        return await CountryRepository.get_countries(**paging)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Get countries failed: paging=%s", paging)
        raise HTTPException(status_code=500, detail="Ошибка при получении списка стран")


@router.get("/{country_id}", response_model=SCountry)
async def get_country(country_id: int):
    """Получить страну по ID"""
    try:
        country = await CountryRepository.get_country_by_id(country_id)
        if not country:
            raise HTTPException(status_code=404, detail="Страна не найдена")
        return country
    except HTTPException:
        raise
    except Exception:
        logger.exception("Get country failed: country_id=%s", country_id)
        raise HTTPException(status_code=500, detail="Ошибка при получении страны")


@router.post("", response_model=SCountry, status_code=status.HTTP_201_CREATED)
async def create_country(country_data: SCountryCreate):
    """Создать новую страну"""
    try:
        return await CountryRepository.create_country(country_data)
    except Exception:
        logger.exception("Create country failed: name=%s", country_data.name)
        raise HTTPException(status_code=500, detail="Ошибка при создании страны")


@router.put("/{country_id}", response_model=SCountry)
async def update_country(country_id: int, country_data: SCountryCreate):
    """Обновить страну"""
    try:
        if country_data.id and country_data.id != country_id:
            raise HTTPException(status_code=400, detail="ID в пути и в теле запроса не совпадают")
        
        country = await CountryRepository.update_country(country_id, country_data)
        if not country:
            raise HTTPException(status_code=404, detail="Страна не найдена")
        return country
    except HTTPException:
        raise
    except Exception:
        logger.exception("Update country failed: country_id=%s", country_id)
        raise HTTPException(status_code=500, detail="Ошибка при обновлении страны")


@router.post("/IsDupeField", response_model=bool)
async def is_dupe_field(
    field_name: str = Query(alias="fieldName", description="name, iso2 или iso3"),
    field_value: str = Query(alias="fieldValue", description="Проверяемое значение"),
    country_id: int = Query(0, ge=0, alias="countryId", description="ID редактируемой страны (0 для новой)"),
):
    """Проверить, занято ли значение поля другой страной"""
    try:
        return await CountryRepository.is_dupe_field(country_id, field_name, field_value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Dupe field check failed: field=%s", field_name)
        raise HTTPException(status_code=500, detail="Ошибка при проверке поля страны")
