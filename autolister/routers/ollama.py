import logging

from fastapi import APIRouter, Depends

from autolister.services.ollama_service import OllamaService, get_ollama_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ollama", tags=["ollama"])


@router.get("/health")
async def ollama_health(service: OllamaService = Depends(get_ollama_service)):
    try:
        healthy = await service.check_health()
        models = await service.list_models()
    except Exception as e:
        logger.warning("Ollama health check failed: %s", e)
        return {"healthy": False, "models": [], "status": "Ollama connection failed"}

    return {
        "healthy": healthy,
        "models": models,
        "status": "Local AI Ready" if healthy else "Ollama not available",
    }
