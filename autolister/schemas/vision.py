from pydantic import ConfigDict

from autolister.models.base import CamelModel


class VisionAnalysisResult(CamelModel):
    """Best-effort attributes read off one vehicle photo.

    Keys the model volunteers beyond the four known ones (make, color,
    features, ...) are kept as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    license_plate: str | None = None
    damage: str | None = None
    interior: str | None = None
    exterior: str | None = None
    confidence: int
    extracted_text: str
    raw_response: str
