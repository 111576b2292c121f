from datetime import datetime
from typing import Any

from autolister.models.base import CamelModel


class Vehicle(CamelModel):
    id: str
    vin: str | None = None
    year: int
    make: str
    model: str
    trim: str | None = None
    mileage: int
    transmission: str
    fuel_type: str
    condition: str
    price: int
    location: str
    description: str
    features: list[str] = []
    images: list[str] = []
    ai_extracted_data: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
