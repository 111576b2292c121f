from autolister.models.base import CamelModel


class VinLookupResult(CamelModel):
    success: bool
    make: str | None = None
    model: str | None = None
    year: int | None = None
    trim: str | None = None
    engine: str | None = None
    transmission: str | None = None
    fuel_type: str | None = None
    body_style: str | None = None
    drivetrain: str | None = None
    source: str | None = None
    error: str | None = None
