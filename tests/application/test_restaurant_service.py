"""Tests for RestaurantService."""

import pytest

from guideresto.application.dtos import (
    AppreciationRequest,
    CreateCityRequest,
    CreateRestaurantRequest,
    EditAddressRequest,
    EditRestaurantRequest,
)
from guideresto.application.services import EvaluationService, RestaurantService


@pytest.fixture
def service(session_factory):
    return RestaurantService(session_factory)


def _create(service, reference_data, name="Da Mario"):
    return service.add_restaurant(
        CreateRestaurantRequest(
            name=name,
            description="Trattoria",
            street="Rue du Seyon 12",
            city_id=reference_data.neuchatel_id,
            type_id=reference_data.italian_id,
        )
    )


class TestRestaurantService:
    """Test restaurant use cases."""

    def test_add_and_get_restaurant(self, service, reference_data):
        result = _create(service, reference_data)

        assert result.success
        assert result.execution_id is not None
        restaurant = service.get_restaurant(result.value.id)
        assert restaurant.name == "Da Mario"
        assert restaurant.city.zip_code == "2000"
        assert restaurant.type.label == "Italien"
        assert restaurant.version == 0

    def test_add_restaurant_in_unknown_city_fails_cleanly(self, service, reference_data):
        result = service.add_restaurant(
            CreateRestaurantRequest(name="Ghost", street="Rue 1", city_id=999, type_id=reference_data.italian_id)
        )

        assert not result.success
        assert result.error == "EntityNotFoundError"
        assert service.get_restaurants() == []

    def test_search_use_cases(self, service, reference_data):
        _create(service, reference_data, "Da Mario")
        _create(service, reference_data, "Chez Mario")

        assert service.get_restaurant_by_name("DA MARIO").name == "Da Mario"
        assert [r.name for r in service.find_restaurants_by_name("mario")] == ["Da Mario", "Chez Mario"]
        assert len(service.find_restaurants_by_city_name("Neuch")) == 2
        assert len(service.find_restaurants_by_type_label("italien")) == 2
        assert service.get_restaurant(999) is None

    def test_edit_restaurant(self, service, reference_data):
        created = _create(service, reference_data).value

        result = service.edit_restaurant(
            EditRestaurantRequest(
                restaurant_id=created.id,
                version=created.version,
                name="Da Mario e Figli",
                website="http://damario.ch",
                type_id=reference_data.swiss_id,
            )
        )

        assert result.success
        assert result.value.version == 1
        assert service.get_restaurant(created.id).type.label == "Suisse"

    def test_edit_with_stale_version_reports_conflict(self, service, reference_data):
        created = _create(service, reference_data).value
        request = EditRestaurantRequest(
            restaurant_id=created.id, version=created.version, name="First", type_id=reference_data.italian_id
        )
        assert service.edit_restaurant(request).success

        result = service.edit_restaurant(request.model_copy(update={"name": "Second"}))

        assert not result.success
        assert result.error == "ConflictError"
        assert service.get_restaurant(created.id).name == "First"

    def test_edit_address(self, service, reference_data):
        created = _create(service, reference_data).value

        result = service.edit_address(
            EditAddressRequest(restaurant_id=created.id, street="Place de la Palud 1", city_id=reference_data.lausanne_id)
        )

        assert result.success
        assert result.value.city.city_name == "Lausanne"
        assert [r.id for r in service.find_restaurants_by_city_name("lausanne")] == [created.id]

    def test_delete_restaurant_with_evaluations(self, service, session_factory, reference_data):
        created = _create(service, reference_data).value
        evaluations = EvaluationService(session_factory)
        evaluations.like_restaurant(AppreciationRequest(restaurant_id=created.id, ip_address="10.0.0.1"))

        result = service.delete_restaurant(created.id)

        assert result.success and result.value is True
        assert service.get_restaurant(created.id) is None
        assert evaluations.count_likes(created.id) == 0
        assert service.delete_restaurant(created.id).value is False


class TestReferenceDataUseCases:
    """Test city and type use cases."""

    def test_create_city(self, service):
        result = service.create_city(CreateCityRequest(zip_code="2000", city_name="Neuchâtel"))

        assert result.success
        assert service.get_city_by_zip_code("2000") == result.value
        assert [c.city_name for c in service.get_cities()] == ["Neuchâtel"]

    def test_types(self, service, reference_data):
        assert [t.label for t in service.get_restaurant_types()] == ["Italien", "Suisse"]
        assert service.get_type_by_label("suisse").id == reference_data.swiss_id
        assert service.get_type_by_label("Japonais") is None
