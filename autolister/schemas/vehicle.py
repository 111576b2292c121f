from datetime import date
from typing import Any, Literal

from pydantic import Field, field_validator

from autolister.models.base import CamelModel

Condition = Literal["excellent", "good", "fair", "poor"]
Transmission = Literal["automatic", "manual", "cvt"]
FuelType = Literal["gasoline", "hybrid", "electric", "diesel"]

MIN_YEAR = 1900

NULLABLE_FIELDS = {"vin", "trim", "ai_extracted_data"}


def _check_year(value: int | None) -> int | None:
    if value is None:
        return value
    latest = date.today().year + 1
    if not MIN_YEAR <= value <= latest:
        raise ValueError(f"Year must be between {MIN_YEAR} and {latest}")
    return value


class VehicleCreate(CamelModel):
    vin: str | None = None
    year: int
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    trim: str | None = None
    mileage: int = Field(ge=0, le=999999)
    transmission: Transmission
    fuel_type: FuelType
    condition: Condition
    price: int = Field(ge=1, le=999999)
    location: str = Field(min_length=1)
    description: str = Field(min_length=10)
    features: list[str] = []
    images: list[str] = []
    ai_extracted_data: dict[str, Any] | None = None

    @field_validator("year")
    @classmethod
    def check_year(cls, value):
        return _check_year(value)


class VehicleUpdate(CamelModel):
    vin: str | None = None
    year: int | None = None
    make: str | None = Field(default=None, min_length=1)
    model: str | None = Field(default=None, min_length=1)
    trim: str | None = None
    mileage: int | None = Field(default=None, ge=0, le=999999)
    transmission: Transmission | None = None
    fuel_type: FuelType | None = None
    condition: Condition | None = None
    price: int | None = Field(default=None, ge=1, le=999999)
    location: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=10)
    features: list[str] | None = None
    images: list[str] | None = None
    ai_extracted_data: dict[str, Any] | None = None

    @field_validator("year")
    @classmethod
    def check_year(cls, value):
        return _check_year(value)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent; null only clears optional columns."""
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k in NULLABLE_FIELDS}

