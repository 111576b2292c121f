import logging

from fastapi import APIRouter, Depends, File, UploadFile

from autolister.config import settings
from autolister.schemas.image import AnalyzeImageRequest, UploadedExtraction, UploadResponse
from autolister.services.image_processor import ImageProcessor, get_image_processor
from autolister.services.ollama_service import OllamaError, OllamaService, get_ollama_service
from autolister.storage import MemStorage, get_storage
from autolister.utils.exceptions import AppException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/upload")
async def upload_images(
    images: list[UploadFile] | None = File(default=None),
    processor: ImageProcessor = Depends(get_image_processor),
    ollama: OllamaService = Depends(get_ollama_service),
):
    if not images:
        raise AppException("No images uploaded")
    if len(images) > settings.max_images_per_upload:
        raise AppException(
            f"Too many files. Maximum is {settings.max_images_per_upload} images per upload."
        )

    # Reject the whole batch before anything touches the disk
    files = []
    for upload in images:
        content = await upload.read()
        processor.validate_image_file(upload.content_type or "", len(content))
        files.append((upload, content))

    processed_images = []
    ai_extractions = []
    for upload, content in files:
        content = await processor.optimize_image(content)
        processed = await processor.process_uploaded_image(
            content, upload.filename or "", upload.content_type or ""
        )
        processed_images.append(processed)

        try:
            result = await ollama.analyze_vehicle_image(processed.base64)
        except OllamaError as e:
            logger.warning("AI analysis failed for image %s: %s", processed.filename, e)
            continue

        ai_extractions.append(UploadedExtraction(
            image_url=processed.url,
            extracted_text=result.extracted_text,
            confidence=result.confidence,
            extracted_data=result.model_dump(by_alias=True, exclude_none=True),
        ))

    logger.info(
        "Uploaded %d images, %d analysed", len(processed_images), len(ai_extractions)
    )
    response = UploadResponse(
        images=processed_images,
        ai_extractions=ai_extractions,
        message=f"Successfully uploaded {len(processed_images)} images",
    )
    return response.model_dump(by_alias=True)


@router.post("/analyze")
async def analyze_image(
    payload: AnalyzeImageRequest,
    ollama: OllamaService = Depends(get_ollama_service),
    storage: MemStorage = Depends(get_storage),
):
    try:
        result = await ollama.analyze_vehicle_image(payload.image_base64)
    except OllamaError as e:
        raise AppException(str(e), status_code=400) from e

    data = result.model_dump(by_alias=True, exclude_none=True)
    if payload.vehicle_id:
        storage.extractions.create({
            "vehicle_id": payload.vehicle_id,
            "image_url": "base64_image",
            "extracted_text": result.extracted_text,
            "confidence": result.confidence,
            "extracted_data": data,
        })
    return data
