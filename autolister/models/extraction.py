from datetime import datetime
from typing import Any

from autolister.models.base import CamelModel


class AiExtraction(CamelModel):
    id: str
    vehicle_id: str | None = None
    image_url: str
    extracted_text: str | None = None
    confidence: int | None = None  # heuristic 0-100, not a probability
    extracted_data: dict[str, Any] | None = None
    created_at: datetime
