"""Store uploaded vehicle photos and hand back a base64 copy for inference."""
import base64
import logging
import os
import uuid

from autolister.config import settings
from autolister.schemas.image import ProcessedImage
from autolister.utils.exceptions import AppException

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
PUBLIC_URL_PREFIX = "/uploads/vehicles"


class ImageProcessor:
    def __init__(self, upload_dir: str | None = None, max_size_bytes: int | None = None):
        self.upload_dir = upload_dir or settings.upload_dir
        self.max_size_bytes = max_size_bytes or settings.max_image_size_bytes

    def validate_image_file(self, mimetype: str, size: int) -> None:
        if (mimetype or "").lower() not in ALLOWED_MIME_TYPES:
            raise AppException("Invalid file type. Only JPEG, PNG, and WEBP images are allowed.")
        if size > self.max_size_bytes:
            limit_mb = self.max_size_bytes // (1024 * 1024)
            raise AppException(f"File too large. Maximum size is {limit_mb}MB.")

    async def process_uploaded_image(
        self, content: bytes, original_name: str, mimetype: str
    ) -> ProcessedImage:
        os.makedirs(self.upload_dir, exist_ok=True)

        ext = os.path.splitext(original_name or "")[1]
        filename = f"{uuid.uuid4()}{ext}"
        file_path = os.path.join(self.upload_dir, filename)

        with open(file_path, "wb") as f:
            f.write(content)
        logger.info("Stored upload %s as %s (%d bytes)", original_name, filename, len(content))

        return ProcessedImage(
            filename=filename,
            original_name=original_name,
            size=len(content),
            mimetype=mimetype,
            base64=base64.b64encode(content).decode("utf-8"),
            url=f"{PUBLIC_URL_PREFIX}/{filename}",
        )

    async def optimize_image(self, content: bytes) -> bytes:
        # No resizing or recompression yet.
        return content


def get_image_processor() -> ImageProcessor:
    return ImageProcessor()
