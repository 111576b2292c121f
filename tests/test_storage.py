from datetime import datetime, timezone

from autolister import storage as storage_module
from autolister.storage import MemStorage


def _vehicle_fields(**overrides):
    fields = {
        "year": 2018,
        "make": "Honda",
        "model": "Civic",
        "mileage": 64000,
        "transmission": "automatic",
        "fuel_type": "gasoline",
        "condition": "good",
        "price": 14500,
        "location": "Austin, TX",
        "description": "One owner, clean title.",
    }
    fields.update(overrides)
    return fields


def test_create_assigns_id_timestamps_and_defaults():
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields())

    assert vehicle.id
    assert vehicle.created_at == vehicle.updated_at
    assert vehicle.features == []
    assert vehicle.images == []
    assert vehicle.trim is None
    assert store.vehicles.get(vehicle.id) == vehicle


def test_listing_defaults_to_draft_and_extraction_has_no_updated_at():
    store = MemStorage()
    listing = store.listings.create({"title": "Civic", "platform": "facebook"})
    extraction = store.extractions.create({"image_url": "/uploads/vehicles/a.jpg"})

    assert listing.status == "draft"
    assert extraction.vehicle_id is None
    assert not hasattr(extraction, "updated_at")


def test_get_unknown_returns_none():
    assert MemStorage().vehicles.get("missing") is None


def test_list_is_newest_first():
    store = MemStorage()
    first = store.vehicles.create(_vehicle_fields(model="First"))
    second = store.vehicles.create(_vehicle_fields(model="Second"))
    third = store.vehicles.create(_vehicle_fields(model="Third"))

    assert [v.id for v in store.vehicles.list()] == [third.id, second.id, first.id]


def test_list_breaks_timestamp_ties_by_insertion(monkeypatch):
    frozen = datetime(2024, 5, 1, tzinfo=timezone.utc)
    monkeypatch.setattr(storage_module, "_utcnow", lambda: frozen)
    store = MemStorage()
    a = store.listings.create({"title": "A", "platform": "facebook"})
    b = store.listings.create({"title": "B", "platform": "facebook"})

    assert [listing.id for listing in store.listings.list()] == [b.id, a.id]


def test_update_merges_over_existing(monkeypatch):
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields(features=["Backup camera"]))

    later = datetime(2030, 1, 1, tzinfo=timezone.utc)
    monkeypatch.setattr(storage_module, "_utcnow", lambda: later)
    updated = store.vehicles.update(vehicle.id, {"price": 13900, "features": ["Sunroof"]})

    assert updated.price == 13900
    assert updated.features == ["Sunroof"]
    assert updated.make == "Honda"
    assert updated.created_at == vehicle.created_at
    assert updated.updated_at == later
    assert store.vehicles.get(vehicle.id).price == 13900


def test_update_copies_list_fields():
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields())
    features = ["Heated seats"]
    store.vehicles.update(vehicle.id, {"features": features})
    features.append("Tow hitch")

    assert store.vehicles.get(vehicle.id).features == ["Heated seats"]


def test_update_ignores_id_and_created_at():
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields())
    updated = store.vehicles.update(vehicle.id, {"id": "other", "created_at": None})

    assert updated.id == vehicle.id
    assert updated.created_at == vehicle.created_at


def test_update_unknown_returns_none():
    assert MemStorage().vehicles.update("missing", {"price": 1}) is None


def test_delete():
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields())

    assert store.vehicles.delete(vehicle.id) is True
    assert store.vehicles.get(vehicle.id) is None
    assert store.vehicles.delete(vehicle.id) is False


def test_delete_vehicle_does_not_cascade():
    store = MemStorage()
    vehicle = store.vehicles.create(_vehicle_fields())
    store.listings.create({"vehicle_id": vehicle.id, "title": "Civic", "platform": "facebook"})
    store.extractions.create({"vehicle_id": vehicle.id, "image_url": "base64_image"})

    store.vehicles.delete(vehicle.id)

    assert len(store.listings_for_vehicle(vehicle.id)) == 1
    assert len(store.extractions_for_vehicle(vehicle.id)) == 1


def test_collection_by_kind():
    store = MemStorage()
    assert store.collection("vehicle") is store.vehicles
    assert store.collection("listing") is store.listings
    assert store.collection("extraction") is store.extractions
