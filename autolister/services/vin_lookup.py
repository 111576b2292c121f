"""Decode VINs against the NHTSA vPIC registry, with an optional commercial fallback.

Providers are tried in order; the first successful decode wins. A provider
that blows up (network error, non-2xx, unreadable body) counts as a failed
attempt rather than an error for the caller.
"""
import logging
import re
from typing import Any, Protocol

import httpx

from autolister.config import settings
from autolister.schemas.vin import VinLookupResult

logger = logging.getLogger(__name__)

_VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$", re.IGNORECASE)

INVALID_FORMAT_ERROR = "Invalid VIN format. VIN must be 17 characters."
LOOKUP_FAILED_ERROR = "VIN lookup failed. Please try again or enter information manually."

# NOTE: anything missing from this table falls back to "gasoline", so e.g.
# "Compressed Natural Gas" or "Hydrogen" come out as gasoline. Kept because
# the vehicle form only accepts these four values; see _map_fuel_type.
FUEL_TYPE_MAPPINGS = {
    "gasoline": "gasoline",
    "gas": "gasoline",
    "electric": "electric",
    "hybrid": "hybrid",
    "diesel": "diesel",
    "flex fuel": "gasoline",
    "e85": "gasoline",
}
DEFAULT_FUEL_TYPE = "gasoline"


class VinLookupError(Exception):
    """A provider could not produce an answer at all."""


class VinProvider(Protocol):
    name: str

    async def lookup(self, vin: str) -> VinLookupResult: ...


def is_valid_vin(vin: str) -> bool:
    return bool(_VIN_PATTERN.match(vin or ""))


def _map_fuel_type(fuel_type: str | None) -> str | None:
    if not fuel_type:
        return None
    normalized = fuel_type.strip().lower()
    mapped = FUEL_TYPE_MAPPINGS.get(normalized)
    if mapped is None:
        logger.warning("Unmapped fuel type %r, defaulting to %s", fuel_type, DEFAULT_FUEL_TYPE)
        return DEFAULT_FUEL_TYPE
    return mapped


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _year(value: Any) -> int | None:
    try:
        return int(str(value).strip()) or None
    except (TypeError, ValueError):
        return None


class NhtsaProvider:
    name = "NHTSA"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def lookup(self, vin: str) -> VinLookupResult:
        url = f"{self.base_url}/vehicles/DecodeVinValues/{vin}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params={"format": "json"})
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            raise VinLookupError(f"NHTSA API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise VinLookupError(f"NHTSA API unreachable: {e}") from e
        except ValueError as e:
            raise VinLookupError("Invalid JSON from NHTSA") from e

        results = body.get("Results") if isinstance(body, dict) else None
        result = results[0] if results else None

        if not result or str(result.get("ErrorCode")) != "0":
            error_text = _text(result.get("ErrorText")) if result else None
            return VinLookupResult(
                success=False,
                error=error_text or "VIN not found in NHTSA database",
            )

        engine_hp = _text(result.get("EngineHP"))
        return VinLookupResult(
            success=True,
            make=_text(result.get("Make")),
            model=_text(result.get("Model")),
            year=_year(result.get("ModelYear")),
            trim=_text(result.get("Trim")),
            engine=f"{engine_hp} HP" if engine_hp else None,
            transmission=_text(result.get("TransmissionStyle")),
            fuel_type=_map_fuel_type(result.get("FuelTypePrimary")),
            body_style=_text(result.get("BodyClass")),
            drivetrain=_text(result.get("DriveType")),
            source=self.name,
        )


class CommercialProvider:
    """Placeholder for a paid decoder (VINquery, CarQuery, AutoCheck...)."""

    name = "commercial"

    def __init__(self, api_key: str):
        self.api_key = api_key

    async def lookup(self, vin: str) -> VinLookupResult:
        return VinLookupResult(success=False, error="Commercial VIN API not configured")


class VinLookupService:
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.vin_api_key if api_key is None else api_key
        self.providers: list[VinProvider] = [
            NhtsaProvider(
                base_url or settings.vin_api_url,
                timeout=timeout or settings.vin_timeout_seconds,
                transport=transport,
            )
        ]
        if self.api_key:
            self.providers.append(CommercialProvider(self.api_key))

    async def lookup_vin(self, vin: str) -> VinLookupResult:
        if not is_valid_vin(vin):
            return VinLookupResult(success=False, error=INVALID_FORMAT_ERROR)

        vin = vin.upper()
        last = VinLookupResult(success=False, error=LOOKUP_FAILED_ERROR)
        for provider in self.providers:
            try:
                result = await provider.lookup(vin)
            except VinLookupError as e:
                logger.warning("VIN lookup via %s failed for %s: %s", provider.name, vin, e)
                last = VinLookupResult(success=False, error=LOOKUP_FAILED_ERROR)
                continue
            if result.success:
                logger.info("Decoded VIN %s via %s", vin, provider.name)
                return result
            last = result
        return last


def get_vin_service() -> VinLookupService:
    return VinLookupService()
