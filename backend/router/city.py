import logging
from fastapi import APIRouter, Depends, HTTPException, status
from backend.repositories.city import CityRepository
from backend.router.api_result import get_paging_params
from backend.schemas.api_result import SApiResult
from backend.schemas.city import SCity, SCityCreate, SCityListItem




logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/Cities",
    tags=["Города"]
)


@router.get("", response_model=SApiResult[SCityListItem])
async def get_cities(paging: dict = Depends(get_paging_params)):
    """Получить список городов с пагинацией, сортировкой и фильтрацией"""
    try:
        return await CityRepository.get_cities(**paging)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Get cities failed: paging=%s", paging)
        raise HTTPException(status_code=500, detail="Ошибка при получении списка городов")


@router.get("/{city_id}", response_model=SCity)
async def get_city(city_id: int):
    """Получить город по ID"""
    try:
        city = await CityRepository.get_city_by_id(city_id)
        if not city:
            raise HTTPException(status_code=404, detail="Город не найден")
        return city
    except HTTPException:
        raise
    except Exception:
        logger.exception("Get city failed: city_id=%s", city_id)
        raise HTTPException(status_code=500, detail="Ошибка при получении города")


@router.post("", response_model=SCity, status_code=status.HTTP_201_CREATED)
async def create_city(city_data: SCityCreate):
    """Создать новый город"""
    try:
        city = await CityRepository.create_city(city_data)
        logger.info("City %s has been created", city.id)
        return city
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Create city failed: name=%s", city_data.name)
        raise HTTPException(status_code=500, detail="Ошибка при создании города")


@router.put("/{city_id}", response_model=SCity)
async def update_city(city_id: int, city_data: SCityCreate):
    """Обновить город"""
    try:
        if city_data.id and city_data.id != city_id:
            raise HTTPException(status_code=400, detail="ID в пути и в теле запроса не совпадают")
        
        city = await CityRepository.update_city(city_id, city_data)
        if not city:
            raise HTTPException(status_code=404, detail="Город не найден")
        logger.info("City %s has been updated", city.id)
        return city
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Update city failed: city_id=%s", city_id)
        raise HTTPException(status_code=500, detail="Ошибка при обновлении города")


@router.delete("/{city_id}", response_model=SCity)
async def delete_city(city_id: int):
    """Удалить город"""
    try:
        city = await CityRepository.delete_city(city_id)
        if not city:
            raise HTTPException(status_code=404, detail="Город не найден")
        logger.info("City %s has been deleted", city_id)
        return city
    except HTTPException:
        raise
    except Exception:
        logger.exception("Delete city failed: city_id=%s", city_id)
        raise HTTPException(status_code=500, detail="Ошибка при удалении города")


@router.post("/IsDupeCity", response_model=bool)
async def is_dupe_city(city_data: SCityCreate):
    """Проверить, существует ли другой город с тем же названием в той же стране"""
    try:
        return await CityRepository.is_dupe_city(city_data)
    except Exception:
        logger.exception("Dupe check failed: name=%s country_id=%s", city_data.name, city_data.country_id)
        raise HTTPException(status_code=500, detail="Ошибка при проверке дубликата города")
