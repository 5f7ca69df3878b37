"""
End-to-End Demo: restaurant lifecycle

This demonstrates the complete workflow:
1. Create a city and a gastronomic type
2. Create a restaurant
3. Look it up by name
4. Like it twice, from two addresses
5. Add a graded evaluation
6. Delete the restaurant with everything it owns

Runs against a throw-away SQLite file.
"""
import logging
import tempfile
from pathlib import Path

from guideresto.application.dtos import (
    AddEvaluationRequest,
    AppreciationRequest,
    CreateCityRequest,
    CreateRestaurantRequest,
    GradeRequest,
)
from guideresto.bootstrap import create_application
from guideresto.data.uow import create_uow
from guideresto.domain.entities import EvaluationCriteria, RestaurantType
from guideresto.settings import AppSettings, DatabaseSettings

logger = logging.getLogger(__name__)


def seed_reference_data(app) -> None:
    """Gastronomic types and criteria are reference data: written straight through the mappers."""
    with create_uow(app.session_factory, app.settings.database.sequence_strategy) as uow:
        uow.restaurant_types.create(RestaurantType(label="Italien", description="Pizzas et pâtes"))
        uow.evaluation_criteria.create(EvaluationCriteria(name="Service", description="Qualité du service"))
        uow.evaluation_criteria.create(EvaluationCriteria(name="Cuisine", description="Qualité de la nourriture"))
        uow.commit()


def demo_restaurant_lifecycle(database_path: Path) -> None:
    print("\n" + "=" * 80)
    print("DEMO: Restaurant lifecycle")
    print("=" * 80 + "\n")

    settings = AppSettings()
    settings.database = DatabaseSettings(url=f"sqlite:///{database_path}")
    app = create_application(settings)

    try:
        print("📦 Seeding reference data...")
        seed_reference_data(app)
        italian = app.restaurants.get_type_by_label("italien")

        city = app.restaurants.create_city(CreateCityRequest(zip_code="2000", city_name="Neuchâtel")).value
        print(f"✅ City created: #{city.id} {city.zip_code} {city.city_name}\n")

        result = app.restaurants.add_restaurant(
            CreateRestaurantRequest(
                name="Da Mario",
                description="Trattoria",
                website="http://www.damario.ch",
                street="Rue du Seyon 12",
                city_id=city.id,
                type_id=italian.id,
            )
        )
        restaurant = result.value
        print(f"✅ Restaurant created: #{restaurant.id} {restaurant.name}\n")

        found = app.restaurants.get_restaurant_by_name("Da Mario")
        print(f"🔎 Found by name: {found.name}, city zip {found.city.zip_code}\n")

        for ip_address in ("10.0.0.1", "10.0.0.2"):
            app.evaluations.like_restaurant(AppreciationRequest(restaurant_id=restaurant.id, ip_address=ip_address))
        print(f"👍 Likes: {app.evaluations.count_likes(restaurant.id)}, "
              f"dislikes: {app.evaluations.count_dislikes(restaurant.id)}\n")

        criteria = app.evaluations.get_all_criteria()
        evaluation = app.evaluations.add_evaluation(
            AddEvaluationRequest(
                restaurant_id=restaurant.id,
                username="alice",
                comment="Excellentes pâtes",
                grades=[GradeRequest(criteria_id=c.id, grade=5) for c in criteria],
            )
        )
        print(f"📝 Evaluation #{evaluation.value.id} with {len(evaluation.value.grades)} grades\n")

        deleted = app.restaurants.delete_restaurant(restaurant.id)
        print(f"🗑️ Deleted: {deleted.value}")
        print(f"🔎 Found after delete: {app.restaurants.get_restaurant_by_name('Da Mario')}")
        print(f"👍 Likes after delete: {app.evaluations.count_likes(restaurant.id)}")
    finally:
        app.close()

    print("\n" + "=" * 80)
    print("✅ DEMO COMPLETE")
    print("=" * 80 + "\n")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as directory:
        demo_restaurant_lifecycle(Path(directory) / "guideresto-demo.db")
