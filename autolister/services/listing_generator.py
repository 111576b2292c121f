from typing import Any

from autolister.models import Vehicle

CLOSING_LINE = "Serious inquiries only. Cash, financing, or trade considered."


def build_title(vehicle: Vehicle) -> str:
    trim = f" {vehicle.trim}" if vehicle.trim else ""
    return f"{vehicle.year} {vehicle.make} {vehicle.model}{trim} - ${vehicle.price:,}"


def build_description(vehicle: Vehicle) -> str:
    features_text = ""
    if vehicle.features:
        features_text = "\n\nFeatures:\n• " + "\n• ".join(vehicle.features)

    return (
        f"{vehicle.description}{features_text}\n"
        "\n"
        f"📍 Location: {vehicle.location}\n"
        f"🚗 Mileage: {vehicle.mileage:,} miles\n"
        f"⚙️ Transmission: {vehicle.transmission}\n"
        f"⛽ Fuel Type: {vehicle.fuel_type}\n"
        f"✨ Condition: {vehicle.condition}\n"
        "\n"
        f"{CLOSING_LINE}"
    )


def generate_listing_content(vehicle: Vehicle, platform: str = "facebook") -> dict[str, Any]:
    """Marketplace copy for one vehicle. Same text for every platform for now."""
    return {
        "title": build_title(vehicle),
        "description": build_description(vehicle),
        "platform": platform,
        "price": vehicle.price,
        "location": vehicle.location,
        "images": list(vehicle.images),
        "features": list(vehicle.features),
        "vehicleDetails": {
            "year": vehicle.year,
            "make": vehicle.make,
            "model": vehicle.model,
            "trim": vehicle.trim,
            "mileage": vehicle.mileage,
            "transmission": vehicle.transmission,
            "fuelType": vehicle.fuel_type,
            "condition": vehicle.condition,
        },
    }
