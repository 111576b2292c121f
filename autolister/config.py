from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llava"
    ollama_timeout_seconds: float = 120.0
    vin_api_url: str = "https://vpic.nhtsa.dot.gov/api"
    vin_api_key: str = Field(
        default="",  # empty = commercial fallback disabled
        validation_alias=AliasChoices("vin_api_key", "nhtsa_api_key"),
    )
    vin_timeout_seconds: float = 15.0
    upload_dir: str = "./uploads/vehicles"
    max_image_size_bytes: int = 10 * 1024 * 1024  # 10MB
    max_images_per_upload: int = 10
    cors_origins: list[str] = ["http://localhost:5000", "http://localhost:5173"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
