from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from catalog_seeder.utils.io import append_jsonl


class StructuredLogger:
    def __init__(self, jsonl_path: Path | None) -> None:
        self.jsonl_path = jsonl_path

    def log_event(self, payload: dict[str, Any]) -> None:
        if self.jsonl_path is None:
            return
        enriched = {"timestamp": datetime.utcnow().isoformat(), **payload}
        append_jsonl(enriched, self.jsonl_path)


class NullLogger(StructuredLogger):
    """Logger without a sink; every event is dropped."""

    def __init__(self) -> None:
        super().__init__(None)
