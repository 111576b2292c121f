from fastapi import APIRouter, Depends

from autolister.services.vin_lookup import VinLookupService, get_vin_service

router = APIRouter(prefix="/vin", tags=["vin"])


@router.get("/{vin}")
async def lookup_vin(vin: str, service: VinLookupService = Depends(get_vin_service)):
    """Decode a VIN. Upstream failures come back as ``success: false``, not as errors."""
    result = await service.lookup_vin(vin)
    return result.model_dump(by_alias=True, exclude_none=True)
