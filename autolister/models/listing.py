from datetime import datetime
from typing import Any, Literal

from autolister.models.base import CamelModel

ListingStatus = Literal["draft", "published", "sold"]


class Listing(CamelModel):
    id: str
    vehicle_id: str | None = None
    title: str
    platform: str  # facebook, craigslist, ...
    status: ListingStatus = "draft"
    listing_data: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
