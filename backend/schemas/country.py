from pydantic import Field
from backend.schemas.api_result import SCamelModel




class SCountryBase(SCamelModel):
    name: str = Field(min_length=1, description="Название страны", examples=["Japan"])
    iso2: str = Field(min_length=2, max_length=2, description="Код ISO 3166-1 alpha-2", examples=["JP"])
    iso3: str = Field(min_length=3, max_length=3, description="Код ISO 3166-1 alpha-3", examples=["JPN"])


class SCountryCreate(SCountryBase):
    id: int = Field(0, ge=0, description="ID страны (0 для новой)")


class SCountry(SCountryBase):
    id: int
