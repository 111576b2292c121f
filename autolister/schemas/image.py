from pydantic import Field

from autolister.models.base import CamelModel


class AnalyzeImageRequest(CamelModel):
    image_base64: str = Field(min_length=1)
    vehicle_id: str | None = None


class ProcessedImage(CamelModel):
    filename: str
    original_name: str
    size: int
    mimetype: str
    base64: str
    url: str


class UploadedExtraction(CamelModel):
    image_url: str
    extracted_text: str
    confidence: int
    extracted_data: dict


class UploadResponse(CamelModel):
    images: list[ProcessedImage]
    ai_extractions: list[UploadedExtraction]
    message: str
