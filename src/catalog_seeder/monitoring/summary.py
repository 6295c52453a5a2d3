from __future__ import annotations

import json
import math
from collections import Counter, deque
from pathlib import Path
from typing import TypeAlias, cast

from catalog_seeder.schemas import GenerationSummary

LogRecord: TypeAlias = dict[str, object]

CREATE_EVENTS = {"create", "create_failed"}


def _read_log_tail(path: Path, limit: int) -> list[LogRecord]:
    if not path.exists() or limit <= 0:
        return []
    window: deque[LogRecord] = deque(maxlen=limit)
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                if isinstance(data, dict):
                    window.append(cast(LogRecord, data))
            except json.JSONDecodeError:
                continue
    return list(window)


def _percentile(values: list[float], percentile: float) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    k = (len(sorted_vals) - 1) * percentile
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return float(sorted_vals[int(k)])
    d0 = sorted_vals[f] * (c - k)
    d1 = sorted_vals[c] * (k - f)
    return float(d0 + d1)


def _as_float(value: object | None, default: float = 0.0) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def compute_generation_summary(path: Path, limit: int = 10000) -> GenerationSummary:
    entries = _read_log_tail(path, limit)
    create_events = [e for e in entries if e.get("event") in CREATE_EVENTS]
    latencies = [_as_float(e.get("duration_ms")) for e in create_events]
    failures = [e for e in create_events if e.get("event") == "create_failed"]
    counter = Counter(
        str(e["kind"])
        for e in create_events
        if e.get("event") == "create" and isinstance(e.get("kind"), str)
    )
    total_requests = len(create_events)
    failure_rate = (len(failures) / total_requests) if total_requests else 0.0
    return GenerationSummary(
        total_requests=total_requests,
        failures=len(failures),
        failure_rate=round(failure_rate, 4),
        created_by_kind=dict(sorted(counter.items())),
        p50_latency_ms=round(_percentile(latencies, 0.5), 2),
        p95_latency_ms=round(_percentile(latencies, 0.95), 2),
    )
