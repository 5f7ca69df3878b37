"""SQLAlchemy row models for reference data: cities, types, criteria."""

from sqlalchemy import Column, Integer, String, Text

from .base import Base


class CityModel(Base):
    """Row model for VILLES."""

    __tablename__ = "VILLES"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    zip_code = Column("code_postal", String(100), nullable=False, index=True)
    city_name = Column("nom_ville", String(100), nullable=False)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<CityModel(numero={self.id}, code_postal={self.zip_code}, nom_ville={self.city_name})>"


class RestaurantTypeModel(Base):
    """Row model for TYPES_GASTRONOMIQUES."""

    __tablename__ = "TYPES_GASTRONOMIQUES"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    label = Column("libelle", String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<RestaurantTypeModel(numero={self.id}, libelle={self.label})>"


class EvaluationCriteriaModel(Base):
    """Row model for CRITERES_EVALUATION."""

    __tablename__ = "CRITERES_EVALUATION"

    id = Column("numero", Integer, primary_key=True, autoincrement=False)
    name = Column("nom", String(100), nullable=False, unique=True)
    description = Column(String(512), nullable=True)
    version = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<EvaluationCriteriaModel(numero={self.id}, nom={self.name})>"
