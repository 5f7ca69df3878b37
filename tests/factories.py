"""Builders for test data, written through the mappers."""

from datetime import date
from typing import Dict

from sqlalchemy import text
from sqlalchemy.orm import Session

from guideresto.data.uow import UnitOfWork
from guideresto.domain.entities import BasicEvaluation, CompleteEvaluation, Grade, Restaurant
from guideresto.domain.value_objects import Localisation


def add_restaurant(uow: UnitOfWork, name: str, city_id: int, type_id: int,
                   street: str = "Rue du Seyon 1") -> Restaurant:
    restaurant = Restaurant(
        name=name,
        description=f"{name} description",
        website=None,
        address=Localisation(street=street, city=uow.cities.find_by_id(city_id)),
        type=uow.restaurant_types.find_by_id(type_id),
    )
    return uow.restaurants.create(restaurant)


def add_like(uow: UnitOfWork, restaurant: Restaurant, like: bool = True, ip_address: str = "10.0.0.1",
             visit_date: date = date(2024, 5, 1)) -> BasicEvaluation:
    return uow.basic_evaluations.create(
        BasicEvaluation(visit_date=visit_date, restaurant=restaurant, like_restaurant=like, ip_address=ip_address)
    )


def add_comment(uow: UnitOfWork, restaurant: Restaurant, visit_date: date, grades: Dict[int, int],
                username: str = "alice") -> CompleteEvaluation:
    """Create a complete evaluation; ``grades`` maps criteria id to score."""
    evaluation = CompleteEvaluation(
        visit_date=visit_date, restaurant=restaurant, comment=f"Visit of {visit_date}", username=username
    )
    for criteria_id, score in grades.items():
        criteria = uow.evaluation_criteria.find_by_id(criteria_id)
        evaluation.grades.add(Grade(grade=score, evaluation=evaluation, criteria=criteria))
    return uow.complete_evaluations.create(evaluation)


def count_rows(session: Session, table: str, where: str = "1=1", **params) -> int:
    """Count rows with plain SQL, bypassing every identity cache."""
    return session.execute(text(f'SELECT COUNT(*) FROM "{table}" WHERE {where}'), params).scalar_one()
