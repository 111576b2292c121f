from fastapi import APIRouter, Depends, Response

from autolister.schemas.vehicle import VehicleCreate, VehicleUpdate
from autolister.storage import MemStorage, get_storage
from autolister.utils.exceptions import AppException

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def _dump(record) -> dict:
    return record.model_dump(mode="json", by_alias=True)


@router.get("")
async def get_vehicles(storage: MemStorage = Depends(get_storage)):
    return [_dump(v) for v in storage.vehicles.list()]


@router.get("/{vehicle_id}")
async def get_vehicle(vehicle_id: str, storage: MemStorage = Depends(get_storage)):
    vehicle = storage.vehicles.get(vehicle_id)
    if vehicle is None:
        raise AppException("Vehicle not found", status_code=404)
    return _dump(vehicle)


@router.post("", status_code=201)
async def create_vehicle(payload: VehicleCreate, storage: MemStorage = Depends(get_storage)):
    vehicle = storage.vehicles.create(payload.model_dump())
    return _dump(vehicle)


@router.put("/{vehicle_id}")
async def update_vehicle(
    vehicle_id: str, payload: VehicleUpdate, storage: MemStorage = Depends(get_storage)
):
    vehicle = storage.vehicles.update(vehicle_id, payload.changes())
    if vehicle is None:
        raise AppException("Vehicle not found", status_code=404)
    return _dump(vehicle)


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.vehicles.delete(vehicle_id):
        raise AppException("Vehicle not found", status_code=404)
    return Response(status_code=204)


@router.get("/{vehicle_id}/listings")
async def get_vehicle_listings(vehicle_id: str, storage: MemStorage = Depends(get_storage)):
    return [_dump(listing) for listing in storage.listings_for_vehicle(vehicle_id)]


@router.get("/{vehicle_id}/extractions")
async def get_vehicle_extractions(vehicle_id: str, storage: MemStorage = Depends(get_storage)):
    return [_dump(e) for e in storage.extractions_for_vehicle(vehicle_id)]
