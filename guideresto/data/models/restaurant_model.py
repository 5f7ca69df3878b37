"""SQLAlchemy row model for restaurants."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from .base import Base


class RestaurantModel(Base):
    """
    Row model for RESTAURANTS.

    The embedded address is flattened into ``adresse`` (street) and
    ``fk_vill`` (city).
    """

    __tablename__ = "RESTAURANTS"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    name = Column("nom", String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    website = Column("site_web", String(100), nullable=True)
    street = Column("adresse", String(100), nullable=False)
    city_id = Column("fk_vill", Integer, ForeignKey("VILLES.numero"), nullable=False, index=True)
    type_id = Column("fk_type", Integer, ForeignKey("TYPES_GASTRONOMIQUES.numero"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<RestaurantModel(numero={self.id}, nom={self.name})>"
