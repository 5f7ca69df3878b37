"""Tests for RestaurantMapper: identity, finders, relinking, cascade delete, conflicts."""

from datetime import date

import pytest
from sqlalchemy import text

from guideresto.data.uow import create_uow
from guideresto.domain.entities import City, Restaurant
from guideresto.domain.exceptions import ConflictError, ConstraintViolationError, EntityNotFoundError, MappingError
from guideresto.domain.value_objects import Localisation

from tests.factories import add_comment, add_like, add_restaurant, count_rows


class TestIdentity:
    """Test that one id maps to one live instance per unit of work."""

    def test_same_id_returns_same_object(self, uow, restaurant_id):
        first = uow.restaurants.find_by_id(restaurant_id)
        second = uow.restaurants.find_by_id(restaurant_id)

        assert first is second

    def test_mutation_is_visible_through_every_handle(self, uow, restaurant_id):
        first = uow.restaurants.find_by_id(restaurant_id)
        from_search = uow.restaurants.find_by_name("Da Mario")

        first.description = "Changed in memory"

        assert from_search is first
        assert from_search.description == "Changed in memory"

    def test_references_resolve_through_their_own_cache(self, uow, restaurant_id, reference_data):
        restaurant = uow.restaurants.find_by_id(restaurant_id)

        assert restaurant.city is uow.cities.find_by_id(reference_data.neuchatel_id)
        assert restaurant.type is uow.restaurant_types.find_by_id(reference_data.italian_id)
        assert restaurant.address.city.zip_code == "2000"

    def test_each_unit_of_work_has_its_own_instances(self, session_factory, restaurant_id):
        with create_uow(session_factory) as first:
            in_first = first.restaurants.find_by_id(restaurant_id)
        with create_uow(session_factory) as second:
            in_second = second.restaurants.find_by_id(restaurant_id)

        assert in_first is not in_second
        assert in_first.name == in_second.name

    def test_inverse_sets_hold_loaded_restaurants(self, uow, restaurant_id, reference_data):
        restaurant = uow.restaurants.find_by_id(restaurant_id)

        assert restaurant in uow.cities.find_by_id(reference_data.neuchatel_id).restaurants
        assert restaurant in uow.restaurant_types.find_by_id(reference_data.italian_id).restaurants


class TestFinders:
    """Test the restaurant search operations."""

    @pytest.fixture
    def directory(self, session_factory, reference_data):
        with create_uow(session_factory) as uow:
            add_restaurant(uow, "Da Mario", reference_data.neuchatel_id, reference_data.italian_id)
            add_restaurant(uow, "Pizzeria Roma", reference_data.lausanne_id, reference_data.italian_id)
            add_restaurant(uow, "Chez Fritz", reference_data.neuchatel_id, reference_data.swiss_id)
            uow.commit()
        return reference_data

    def test_find_by_name_ignores_case(self, uow, directory):
        assert uow.restaurants.find_by_name("da mario").name == "Da Mario"
        assert uow.restaurants.find_by_name("Mario") is None

    def test_find_by_name_like(self, uow, directory):
        names = [r.name for r in uow.restaurants.find_by_name_like("Z")]

        assert names == ["Pizzeria Roma", "Chez Fritz"]

    def test_find_by_city_name(self, uow, directory):
        names = [r.name for r in uow.restaurants.find_by_city_name("neuch")]

        assert names == ["Da Mario", "Chez Fritz"]

    def test_find_by_city_and_type_id(self, uow, directory):
        assert [r.name for r in uow.restaurants.find_by_city_id(directory.lausanne_id)] == ["Pizzeria Roma"]
        assert [r.name for r in uow.restaurants.find_by_type_id(directory.swiss_id)] == ["Chez Fritz"]

    def test_find_by_type_label(self, uow, directory):
        names = [r.name for r in uow.restaurants.find_by_type_label("italien")]

        assert names == ["Da Mario", "Pizzeria Roma"]

    def test_empty_results(self, uow, directory):
        assert uow.restaurants.find_by_city_name("Genève") == []
        assert uow.restaurants.find_by_type_label("Japonais") == []


class TestWrites:
    """Test create and update of restaurants."""

    def test_create_links_inverse_sets(self, uow, reference_data):
        restaurant = add_restaurant(uow, "Da Mario", reference_data.neuchatel_id, reference_data.italian_id)

        assert restaurant in restaurant.city.restaurants
        assert restaurant in restaurant.type.restaurants

    def test_create_with_unsaved_city_is_rejected(self, uow, reference_data):
        restaurant = Restaurant(
            name="Nowhere",
            description=None,
            website=None,
            address=Localisation(street="Rue 1", city=City(zip_code="9999", city_name="Nulle part")),
            type=uow.restaurant_types.find_by_id(reference_data.italian_id),
        )

        with pytest.raises(ValueError):
            uow.restaurants.create(restaurant)
        assert restaurant.id is None

    def test_create_with_missing_city_row_is_a_constraint_violation(self, uow, reference_data):
        restaurant = Restaurant(
            name="Ghost",
            description=None,
            website=None,
            address=Localisation(street="Rue 1", city=City(zip_code="9999", city_name="Ghost", id=999)),
            type=uow.restaurant_types.find_by_id(reference_data.italian_id),
        )

        with pytest.raises(ConstraintViolationError):
            uow.restaurants.create(restaurant)
        assert restaurant.id is None
        assert uow.restaurants.count() == 0

    def test_relocation_moves_restaurant_between_city_sets(self, uow, restaurant_id, reference_data):
        restaurant = uow.restaurants.find_by_id(restaurant_id)
        neuchatel = restaurant.city
        lausanne = uow.cities.find_by_id(reference_data.lausanne_id)

        restaurant.relocate("Place de la Palud 1", lausanne)
        uow.restaurants.update(restaurant)

        assert restaurant not in neuchatel.restaurants
        assert restaurant in lausanne.restaurants
        assert [r.id for r in uow.restaurants.find_by_city_id(lausanne.id)] == [restaurant_id]

    def test_update_of_deleted_row_raises_not_found(self, uow, restaurant_id):
        restaurant = uow.restaurants.find_by_id(restaurant_id)
        uow.session.execute(text('DELETE FROM "RESTAURANTS" WHERE numero = :id'), {"id": restaurant_id})

        with pytest.raises(EntityNotFoundError):
            uow.restaurants.update(restaurant)


class TestOptimisticLocking:
    """Test version compare-and-swap on update and delete."""

    def test_stale_update_is_a_conflict(self, session_factory, restaurant_id):
        with create_uow(session_factory) as first:
            stale = first.restaurants.find_by_id(restaurant_id)
            first.commit()

            with create_uow(session_factory) as second:
                fresh = second.restaurants.find_by_id(restaurant_id)
                fresh.name = "Chez Mario"
                second.restaurants.update(fresh)
                second.commit()

            stale.name = "Da Mario II"
            with pytest.raises(ConflictError) as excinfo:
                first.restaurants.update(stale)

        assert excinfo.value.expected_version == 0
        assert excinfo.value.actual_version == 1
        with create_uow(session_factory) as check:
            assert check.restaurants.find_by_id(restaurant_id).name == "Chez Mario"

    def test_stale_delete_is_a_conflict(self, session_factory, restaurant_id):
        with create_uow(session_factory) as first:
            stale = first.restaurants.find_by_id(restaurant_id)
            first.commit()

            with create_uow(session_factory) as second:
                fresh = second.restaurants.find_by_id(restaurant_id)
                second.restaurants.update(fresh)
                second.commit()

            with pytest.raises(ConflictError):
                first.restaurants.delete(stale)
            assert first.restaurants.exists(restaurant_id)

    def test_successive_updates_in_one_unit_of_work(self, uow, restaurant_id):
        restaurant = uow.restaurants.find_by_id(restaurant_id)

        uow.restaurants.update(restaurant)
        uow.restaurants.update(restaurant)

        assert restaurant.version == 2
        assert count_rows(uow.session, "RESTAURANTS", "version = 2") == 1


class TestCascadeDelete:
    """Test the ordered grades -> comments -> likes -> restaurant delete."""

    @pytest.fixture
    def evaluated_restaurant_id(self, session_factory, restaurant_id, reference_data):
        with create_uow(session_factory) as uow:
            restaurant = uow.restaurants.find_by_id(restaurant_id)
            add_like(uow, restaurant, True, "10.0.0.1")
            add_like(uow, restaurant, False, "10.0.0.2")
            add_comment(uow, restaurant, date(2024, 3, 1), {reference_data.service_id: 4, reference_data.food_id: 5})
            add_comment(uow, restaurant, date(2024, 4, 1), {reference_data.setting_id: 3})
            uow.commit()
        return restaurant_id

    @staticmethod
    def _dependent_rows(session, restaurant_id):
        return {
            "LIKES": count_rows(session, "LIKES", "fk_rest = :id", id=restaurant_id),
            "COMMENTAIRES": count_rows(session, "COMMENTAIRES", "fk_rest = :id", id=restaurant_id),
            "NOTES": count_rows(
                session,
                "NOTES",
                'fk_comm IN (SELECT numero FROM "COMMENTAIRES" WHERE fk_rest = :id)',
                id=restaurant_id,
            ),
        }

    def test_steps_are_ordered_by_dependency(self, uow, restaurant_id):
        restaurant = uow.restaurants.find_by_id(restaurant_id)

        labels = [step.label for step in uow.restaurants.cascade_steps(restaurant)]

        assert labels == ["grades", "complete evaluations", "basic evaluations"]

    def test_delete_leaves_no_dependent_rows(self, session_factory, evaluated_restaurant_id):
        with create_uow(session_factory) as uow:
            assert self._dependent_rows(uow.session, evaluated_restaurant_id) == {
                "LIKES": 2,
                "COMMENTAIRES": 2,
                "NOTES": 3,
            }
            assert uow.restaurants.delete_by_id(evaluated_restaurant_id) is True
            uow.commit()

        with create_uow(session_factory) as uow:
            assert self._dependent_rows(uow.session, evaluated_restaurant_id) == {
                "LIKES": 0,
                "COMMENTAIRES": 0,
                "NOTES": 0,
            }
            assert count_rows(uow.session, "NOTES") == 0
            assert uow.restaurants.find_by_id(evaluated_restaurant_id) is None

    def test_delete_evicts_cached_evaluations(self, uow, evaluated_restaurant_id):
        restaurant = uow.restaurants.find_by_id(evaluated_restaurant_id)
        evaluations = uow.evaluations.find_by_restaurant_id(evaluated_restaurant_id)
        assert len(evaluations) == 4

        uow.restaurants.delete(restaurant)

        for evaluation in evaluations:
            assert uow.evaluations.find_by_id(evaluation.id) is None
        assert len(uow.grades.cache) == 0
        assert restaurant.evaluations == set()
        assert restaurant not in restaurant.city.restaurants

    def test_failed_final_delete_removes_nothing(self, engine, session_factory, evaluated_restaurant_id):
        with engine.begin() as conn:
            conn.exec_driver_sql(
                'CREATE TRIGGER block_restaurant_delete BEFORE DELETE ON "RESTAURANTS" '
                "BEGIN SELECT RAISE(ABORT, 'restaurant delete blocked'); END"
            )

        with create_uow(session_factory) as uow:
            restaurant = uow.restaurants.find_by_id(evaluated_restaurant_id)

            with pytest.raises(MappingError):
                uow.restaurants.delete(restaurant)

            assert self._dependent_rows(uow.session, evaluated_restaurant_id) == {
                "LIKES": 2,
                "COMMENTAIRES": 2,
                "NOTES": 3,
            }
            assert uow.restaurants.find_by_id(evaluated_restaurant_id) is restaurant
            assert uow.basic_evaluations.count_likes(evaluated_restaurant_id) == 1

    def test_delete_absent_restaurant_returns_false(self, uow, restaurant_id):
        restaurant = uow.restaurants.find_by_id(restaurant_id)
        assert uow.restaurants.delete(restaurant) is True

        assert uow.restaurants.delete(restaurant) is False
        assert uow.restaurants.delete_by_id(restaurant_id) is False

    def test_detached_copy_delete_evicts_dependents_once(self, uow, evaluated_restaurant_id):
        cached = uow.restaurants.find_by_id(evaluated_restaurant_id)
        copy = Restaurant(
            name=cached.name,
            description=cached.description,
            website=cached.website,
            address=cached.address,
            type=cached.type,
            id=cached.id,
            version=cached.version,
        )
        evicted = []

        class RecordingDependent:
            def evict_for_restaurant(self, restaurant_id):
                evicted.append(restaurant_id)

        uow.restaurants.register_dependent(RecordingDependent())

        assert uow.restaurants.delete(copy) is True

        assert evicted == [evaluated_restaurant_id]
        assert cached not in cached.city.restaurants
        assert uow.restaurants.find_by_id(evaluated_restaurant_id) is None
