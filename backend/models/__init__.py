from backend.models.country import CountryOrm
from backend.models.city import CityOrm

__all__ = ["CountryOrm", "CityOrm"]
