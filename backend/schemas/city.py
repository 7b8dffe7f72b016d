from decimal import Decimal
from typing import Annotated, Optional
from pydantic import Field, PlainSerializer
from backend.schemas.api_result import SCamelModel




Coordinate = Annotated[
    Decimal,
    Field(max_digits=7, decimal_places=4),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class SCityBase(SCamelModel):
    name: str = Field(
        min_length=1,
        description="Название города",
        examples=["Tokyo", "Rome"],
    )
    lat: Coordinate = Field(description="Широта, не более 4 знаков после запятой", examples=[35.6897])
    lon: Coordinate = Field(description="Долгота, не более 4 знаков после запятой", examples=[139.6922])
    country_id: int = Field(gt=0, description="ID страны", examples=[1])


class SCityCreate(SCityBase):
    # 0 for a city that has not been saved yet
    id: int = Field(0, ge=0, description="ID города (0 для нового)")


class SCity(SCityBase):
    id: int


class SCityListItem(SCity):
    country_name: Optional[str] = None
