from typing import Any

from pydantic import Field

from autolister.models.base import CamelModel
from autolister.models.listing import ListingStatus


class ListingCreate(CamelModel):
    vehicle_id: str | None = None
    title: str = Field(min_length=1)
    platform: str = Field(min_length=1)
    status: ListingStatus = "draft"
    listing_data: dict[str, Any] | None = None


class ListingUpdate(CamelModel):
    vehicle_id: str | None = None
    title: str | None = Field(default=None, min_length=1)
    platform: str | None = Field(default=None, min_length=1)
    status: ListingStatus | None = None
    listing_data: dict[str, Any] | None = None

    def changes(self) -> dict[str, Any]:
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k in ("vehicle_id", "listing_data")}


class GenerateListingRequest(CamelModel):
    vehicle_id: str | None = None
    platform: str = "facebook"
