"""In-process record store.

Every entity kind lives in its own ``Collection``: a plain dict keyed by a
generated id. Nothing is durable; a restart empties the store. Methods are
synchronous so a mutation always completes without yielding to the event
loop, which is all the serialization the single-process server needs.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Generic, Literal, Protocol, TypeVar

from autolister.models import AiExtraction, Listing, Vehicle
from autolister.models.base import CamelModel

RecordT = TypeVar("RecordT", bound=CamelModel)

EntityKind = Literal["vehicle", "listing", "extraction"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _copy_lists(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: list(v) if isinstance(v, list) else v for k, v in fields.items()}


class RecordStore(Protocol[RecordT]):
    """What callers rely on. Swap the backend by implementing this."""

    def create(self, fields: dict[str, Any]) -> RecordT: ...

    def get(self, record_id: str) -> RecordT | None: ...

    def list(self) -> list[RecordT]: ...

    def update(self, record_id: str, fields: dict[str, Any]) -> RecordT | None: ...

    def delete(self, record_id: str) -> bool: ...


class Collection(Generic[RecordT]):
    def __init__(self, record_type: type[RecordT], defaults: dict[str, Any] | None = None):
        self.record_type = record_type
        self._defaults = defaults or {}
        self._records: dict[str, RecordT] = {}
        self._tracks_updates = "updated_at" in record_type.model_fields

    def create(self, fields: dict[str, Any]) -> RecordT:
        now = _utcnow()
        values = {**self._defaults, **{k: v for k, v in fields.items() if v is not None}}
        values = _copy_lists(values)
        values["id"] = str(uuid.uuid4())
        values["created_at"] = now
        if self._tracks_updates:
            values["updated_at"] = now
        record = self.record_type(**values)
        self._records[record.id] = record
        return record

    def get(self, record_id: str) -> RecordT | None:
        return self._records.get(record_id)

    def list(self) -> list[RecordT]:
        """All records, newest first. Equal timestamps keep the later insert first."""
        newest_inserted_first = list(reversed(self._records.values()))
        return sorted(newest_inserted_first, key=lambda r: r.created_at, reverse=True)

    def update(self, record_id: str, fields: dict[str, Any]) -> RecordT | None:
        existing = self._records.get(record_id)
        if existing is None:
            return None
        changes = _copy_lists({k: v for k, v in fields.items() if k not in ("id", "created_at")})
        if self._tracks_updates:
            changes["updated_at"] = _utcnow()
        updated = existing.model_copy(update=changes)
        self._records[record_id] = updated
        return updated

    def delete(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def filter_by(self, **criteria: Any) -> list[RecordT]:
        return [
            r for r in self._records.values()
            if all(getattr(r, k) == v for k, v in criteria.items())
        ]

    def __len__(self) -> int:
        return len(self._records)


class MemStorage:
    def __init__(self) -> None:
        self.vehicles: Collection[Vehicle] = Collection(
            Vehicle, defaults={"features": [], "images": []}
        )
        self.listings: Collection[Listing] = Collection(Listing, defaults={"status": "draft"})
        self.extractions: Collection[AiExtraction] = Collection(AiExtraction)

    def collection(self, kind: EntityKind) -> RecordStore:
        return {
            "vehicle": self.vehicles,
            "listing": self.listings,
            "extraction": self.extractions,
        }[kind]

    def listings_for_vehicle(self, vehicle_id: str) -> list[Listing]:
        return self.listings.filter_by(vehicle_id=vehicle_id)

    def extractions_for_vehicle(self, vehicle_id: str) -> list[AiExtraction]:
        return self.extractions.filter_by(vehicle_id=vehicle_id)


storage = MemStorage()


def get_storage() -> MemStorage:
    return storage
