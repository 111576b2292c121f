import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from autolister.config import settings
from autolister.routers.images import router as images_router
from autolister.routers.listings import router as listings_router
from autolister.routers.ollama import router as ollama_router
from autolister.routers.vehicles import router as vehicles_router
from autolister.routers.vin import router as vin_router
from autolister.services.image_processor import PUBLIC_URL_PREFIX
from autolister.utils.exceptions import register_exception_handlers
from autolister.utils.response import success_response

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    os.makedirs(settings.upload_dir, exist_ok=True)
    logger.info("Serving uploads from %s", settings.upload_dir)
    yield


app = FastAPI(
    title="AutoLister API",
    description="Photo upload, VIN decoding and marketplace listing drafts for used vehicles",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(vehicles_router, prefix="/api")
app.include_router(images_router, prefix="/api")
app.include_router(vin_router, prefix="/api")
app.include_router(listings_router, prefix="/api")
app.include_router(ollama_router, prefix="/api")

# Directory is created by the lifespan hook or the first upload
app.mount(
    PUBLIC_URL_PREFIX,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check():
    return success_response(data={"service": "autolister-api", "version": __version__})
