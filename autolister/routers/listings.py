from fastapi import APIRouter, Depends, Response

from autolister.schemas.listing import GenerateListingRequest, ListingCreate, ListingUpdate
from autolister.services.listing_generator import generate_listing_content
from autolister.storage import MemStorage, get_storage
from autolister.utils.exceptions import AppException

router = APIRouter(prefix="/listings", tags=["listings"])


def _dump(listing) -> dict:
    return listing.model_dump(mode="json", by_alias=True)


@router.get("")
async def get_listings(storage: MemStorage = Depends(get_storage)):
    return [_dump(listing) for listing in storage.listings.list()]


@router.post("", status_code=201)
async def create_listing(payload: ListingCreate, storage: MemStorage = Depends(get_storage)):
    listing = storage.listings.create(payload.model_dump())
    return _dump(listing)


@router.post("/generate")
async def generate_listing(
    payload: GenerateListingRequest, storage: MemStorage = Depends(get_storage)
):
    vehicle = storage.vehicles.get(payload.vehicle_id) if payload.vehicle_id else None
    if vehicle is None:
        raise AppException("Vehicle not found", status_code=404)

    content = generate_listing_content(vehicle, payload.platform)
    listing = storage.listings.create({
        "vehicle_id": vehicle.id,
        "title": content["title"],
        "platform": payload.platform,
        "status": "draft",
        "listing_data": content,
    })
    return _dump(listing)


@router.get("/{listing_id}")
async def get_listing(listing_id: str, storage: MemStorage = Depends(get_storage)):
    listing = storage.listings.get(listing_id)
    if listing is None:
        raise AppException("Listing not found", status_code=404)
    return _dump(listing)


@router.put("/{listing_id}")
async def update_listing(
    listing_id: str, payload: ListingUpdate, storage: MemStorage = Depends(get_storage)
):
    listing = storage.listings.update(listing_id, payload.changes())
    if listing is None:
        raise AppException("Listing not found", status_code=404)
    return _dump(listing)


@router.delete("/{listing_id}", status_code=204)
async def delete_listing(listing_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.listings.delete(listing_id):
        raise AppException("Listing not found", status_code=404)
    return Response(status_code=204)
