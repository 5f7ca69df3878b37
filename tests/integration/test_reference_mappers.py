"""Tests for the City, RestaurantType and EvaluationCriteria mappers."""

import pytest

from guideresto.data.uow import create_uow
from guideresto.domain.entities import City, EvaluationCriteria, RestaurantType
from guideresto.domain.exceptions import ConstraintViolationError

from tests.factories import add_restaurant, count_rows


class TestCityMapper:
    """Test CityMapper."""

    def test_create_assigns_id_and_caches(self, uow):
        city = uow.cities.create(City(zip_code="2000", city_name="Neuchâtel"))

        assert city.id is not None
        assert city.version == 0
        assert uow.cities.find_by_id(city.id) is city

    def test_created_city_is_readable_by_a_later_unit_of_work(self, session_factory):
        with create_uow(session_factory) as uow:
            city_id = uow.cities.create(City(zip_code="2000", city_name="Neuchâtel")).id
            uow.commit()

        with create_uow(session_factory) as uow:
            city = uow.cities.find_by_id(city_id)

        assert (city.zip_code, city.city_name) == ("2000", "Neuchâtel")

    def test_find_by_id_unknown_returns_none(self, uow):
        assert uow.cities.find_by_id(12345) is None

    def test_finders(self, uow, reference_data):
        assert uow.cities.find_by_name("neuchâtel").id == reference_data.neuchatel_id
        assert uow.cities.find_by_zip_code("1000").id == reference_data.lausanne_id
        assert [c.id for c in uow.cities.find_by_name_like("sann")] == [reference_data.lausanne_id]
        assert uow.cities.find_by_name("Genève") is None

    def test_like_pattern_characters_are_literal(self, uow, reference_data):
        assert uow.cities.find_by_name_like("%") == []

    def test_find_all_reuses_cached_instances(self, uow, reference_data):
        neuchatel = uow.cities.find_by_id(reference_data.neuchatel_id)

        cities = uow.cities.find_all()

        assert len(cities) == 2
        assert neuchatel in cities

    def test_find_many_mixes_cache_and_store(self, uow, reference_data):
        neuchatel = uow.cities.find_by_id(reference_data.neuchatel_id)

        found = uow.cities.find_many([reference_data.neuchatel_id, reference_data.lausanne_id, 999])

        assert found[reference_data.neuchatel_id] is neuchatel
        assert found[reference_data.lausanne_id].city_name == "Lausanne"
        assert 999 not in found

    def test_exists_and_count(self, uow, reference_data):
        assert uow.cities.exists(reference_data.neuchatel_id)
        assert not uow.cities.exists(999)
        assert uow.cities.count() == 2

    def test_update_writes_and_bumps_version(self, session_factory, reference_data):
        with create_uow(session_factory) as uow:
            city = uow.cities.find_by_id(reference_data.neuchatel_id)
            city.city_name = "Neuchatel"
            uow.cities.update(city)
            uow.commit()

        assert city.version == 1
        with create_uow(session_factory) as uow:
            reloaded = uow.cities.find_by_id(reference_data.neuchatel_id)
            assert reloaded.city_name == "Neuchatel"
            assert reloaded.version == 1

    def test_delete_unused_city(self, uow, reference_data):
        city = uow.cities.find_by_id(reference_data.lausanne_id)

        assert uow.cities.delete(city) is True
        assert uow.cities.find_by_id(reference_data.lausanne_id) is None
        assert uow.cities.delete_by_id(reference_data.lausanne_id) is False

    def test_delete_city_still_referenced_is_a_constraint_violation(self, uow, reference_data):
        add_restaurant(uow, "Da Mario", reference_data.neuchatel_id, reference_data.italian_id)
        city = uow.cities.find_by_id(reference_data.neuchatel_id)

        with pytest.raises(ConstraintViolationError):
            uow.cities.delete(city)

        assert count_rows(uow.session, "VILLES", "numero = :id", id=city.id) == 1
        assert uow.cities.find_by_id(city.id) is city


class TestRestaurantTypeMapper:
    """Test RestaurantTypeMapper."""

    def test_find_by_label_ignores_case(self, uow, reference_data):
        assert uow.restaurant_types.find_by_label("ITALIEN").id == reference_data.italian_id

    def test_duplicate_label_reports_the_value(self, uow, reference_data):
        with pytest.raises(ConstraintViolationError) as excinfo:
            uow.restaurant_types.create(RestaurantType(label="italien"))

        assert excinfo.value.field == "label"
        assert excinfo.value.value == "italien"
        assert uow.restaurant_types.count() == 2

    def test_renaming_to_an_existing_label_is_rejected(self, uow, reference_data):
        swiss = uow.restaurant_types.find_by_id(reference_data.swiss_id)
        swiss.label = "Italien"

        with pytest.raises(ConstraintViolationError):
            uow.restaurant_types.update(swiss)

    def test_update_keeping_own_label_is_allowed(self, uow, reference_data):
        italian = uow.restaurant_types.find_by_id(reference_data.italian_id)
        italian.description = "Pizzas"

        uow.restaurant_types.update(italian)

        assert italian.version == 1


class TestEvaluationCriteriaMapper:
    """Test EvaluationCriteriaMapper."""

    def test_find_by_name(self, uow, reference_data):
        assert uow.evaluation_criteria.find_by_name("cuisine").id == reference_data.food_id
        assert uow.evaluation_criteria.find_by_name("Prix") is None

    def test_duplicate_name_is_rejected(self, uow, reference_data):
        with pytest.raises(ConstraintViolationError) as excinfo:
            uow.evaluation_criteria.create(EvaluationCriteria(name="SERVICE"))

        assert excinfo.value.field == "name"

    def test_find_all_in_id_order(self, uow, reference_data):
        names = [criteria.name for criteria in uow.evaluation_criteria.find_all()]

        assert names == ["Service", "Cuisine", "Cadre"]
