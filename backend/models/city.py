from decimal import Decimal
from sqlalchemy import ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship
from backend.database import Model




class CityOrm(Model):
    __tablename__ = "cities"
    
    id: Mapped[int] = mapped_column(primary_key=True)
    # (name, country_id) is kept unique by the dupe check, not by the schema
    name: Mapped[str] = mapped_column(nullable=False, index=True)
    lat: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    lon: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False)
    country_id: Mapped[int] = mapped_column(ForeignKey("countries.id"), nullable=False, index=True)
    
    country: Mapped["CountryOrm"] = relationship(back_populates="cities")
