"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass
from typing import Generator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from guideresto.data.uow import UnitOfWork, create_uow
from guideresto.domain.entities import City, EvaluationCriteria, RestaurantType
from guideresto.infrastructure.database import build_engine, create_session_factory, init_database

from tests.factories import add_restaurant


@dataclass
class ReferenceData:
    """Ids of the rows created by the ``reference_data`` fixture."""
    neuchatel_id: int
    lausanne_id: int
    italian_id: int
    swiss_id: int
    service_id: int
    food_id: int
    setting_id: int


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """File-backed SQLite database, one per test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'guideresto-test.db'}")
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return create_session_factory(engine)


@pytest.fixture
def uow(session_factory) -> Generator[UnitOfWork, None, None]:
    with create_uow(session_factory) as uow:
        yield uow


@pytest.fixture
def reference_data(session_factory) -> ReferenceData:
    """Two cities, two types and three criteria, committed."""
    with create_uow(session_factory) as uow:
        neuchatel = uow.cities.create(City(zip_code="2000", city_name="Neuchâtel"))
        lausanne = uow.cities.create(City(zip_code="1000", city_name="Lausanne"))
        italian = uow.restaurant_types.create(RestaurantType(label="Italien", description="Cuisine italienne"))
        swiss = uow.restaurant_types.create(RestaurantType(label="Suisse", description="Cuisine du terroir"))
        service = uow.evaluation_criteria.create(EvaluationCriteria(name="Service"))
        food = uow.evaluation_criteria.create(EvaluationCriteria(name="Cuisine"))
        setting = uow.evaluation_criteria.create(EvaluationCriteria(name="Cadre"))
        uow.commit()
    return ReferenceData(
        neuchatel_id=neuchatel.id,
        lausanne_id=lausanne.id,
        italian_id=italian.id,
        swiss_id=swiss.id,
        service_id=service.id,
        food_id=food.id,
        setting_id=setting.id,
    )


@pytest.fixture
def restaurant_id(session_factory, reference_data) -> int:
    """Id of a committed "Da Mario" restaurant in Neuchâtel."""
    with create_uow(session_factory) as uow:
        restaurant = add_restaurant(uow, "Da Mario", reference_data.neuchatel_id, reference_data.italian_id)
        uow.commit()
    return restaurant.id
