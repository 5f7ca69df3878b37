"""Application DTOs for restaurants and their reference data."""

from typing import Optional

from pydantic import BaseModel, Field


class CityDTO(BaseModel):
    """Response DTO for a city."""

    id: int = Field(..., description="City number")
    zip_code: str = Field(..., description="Postal code")
    city_name: str = Field(..., description="City name")

    model_config = {"frozen": True}


class RestaurantTypeDTO(BaseModel):
    """Response DTO for a gastronomic type."""

    id: int = Field(..., description="Type number")
    label: str = Field(..., description="Unique label")
    description: Optional[str] = Field(None, description="Free text description")

    model_config = {"frozen": True}


class RestaurantDTO(BaseModel):
    """Response DTO for restaurant details."""

    id: int = Field(..., description="Restaurant number")
    version: int = Field(..., ge=0, description="Row version, send it back when editing")
    name: str = Field(..., description="Restaurant name")
    description: Optional[str] = Field(None, description="Free text description")
    website: Optional[str] = Field(None, description="Website URL")
    street: str = Field(..., description="Street part of the address")
    city: CityDTO = Field(..., description="City of the address")
    type: RestaurantTypeDTO = Field(..., description="Gastronomic type")

    model_config = {"frozen": True}


class CreateCityRequest(BaseModel):
    """Request DTO for creating a city."""

    zip_code: str = Field(..., min_length=1, max_length=100, description="Postal code")
    city_name: str = Field(..., min_length=1, max_length=100, description="City name")

    model_config = {"frozen": True}


class CreateRestaurantRequest(BaseModel):
    """Request DTO for creating a restaurant."""

    name: str = Field(..., min_length=1, max_length=100, description="Restaurant name")
    description: Optional[str] = Field(None, description="Free text description")
    website: Optional[str] = Field(None, max_length=100, description="Website URL")
    street: str = Field(..., min_length=1, max_length=100, description="Street part of the address")
    city_id: int = Field(..., description="Existing city number")
    type_id: int = Field(..., description="Existing gastronomic type number")

    model_config = {"frozen": True}


class EditRestaurantRequest(BaseModel):
    """Request DTO for editing name, description, website and type."""

    restaurant_id: int = Field(..., description="Restaurant number")
    version: Optional[int] = Field(None, ge=0, description="Version read by the caller")
    name: str = Field(..., min_length=1, max_length=100, description="Restaurant name")
    description: Optional[str] = Field(None, description="Free text description")
    website: Optional[str] = Field(None, max_length=100, description="Website URL")
    type_id: int = Field(..., description="Gastronomic type number")

    model_config = {"frozen": True}


class EditAddressRequest(BaseModel):
    """Request DTO for moving a restaurant."""

    restaurant_id: int = Field(..., description="Restaurant number")
    version: Optional[int] = Field(None, ge=0, description="Version read by the caller")
    street: str = Field(..., min_length=1, max_length=100, description="New street")
    city_id: int = Field(..., description="New city number")

    model_config = {"frozen": True}
