from __future__ import annotations

import time
from typing import Any

from catalog_seeder.monitoring.logger import NullLogger, StructuredLogger
from catalog_seeder.schemas import EntityKind, FieldSet
from catalog_seeder.store.base import CatalogStore


class CreationFailed(RuntimeError):
    def __init__(self, message: str, kind: EntityKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class CreationDispatcher:
    """Submits field-sets to the catalog store, one create request per call."""

    def __init__(self, store: CatalogStore, logger: StructuredLogger | None = None) -> None:
        self.store = store
        self.logger = logger or NullLogger()

    def create(self, kind: EntityKind, field_set: FieldSet | dict[str, Any]) -> int:
        payload = field_set.to_payload() if isinstance(field_set, FieldSet) else dict(field_set)
        start = time.perf_counter()
        response = self.store.create(kind, payload)
        duration_ms = (time.perf_counter() - start) * 1000
        if response.error is not None:
            self._log_failure(kind, response.error, duration_ms)
            raise CreationFailed(response.error, kind)
        new_id = response.data.get("id")
        if isinstance(new_id, bool) or not isinstance(new_id, int):
            message = f"Store response for {kind.value} did not include an id"
            self._log_failure(kind, message, duration_ms)
            raise CreationFailed(message, kind)
        self.logger.log_event(
            {
                "event": "create",
                "kind": kind.value,
                "id": new_id,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return new_id

    def _log_failure(self, kind: EntityKind, error: str, duration_ms: float) -> None:
        self.logger.log_event(
            {
                "event": "create_failed",
                "kind": kind.value,
                "error": error,
                "duration_ms": round(duration_ms, 2),
            },
        )
