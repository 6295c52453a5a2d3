from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path

from catalog_seeder.utils.io import parse_id_list

_DEFAULT_BASE_DIR = Path(__file__).resolve().parents[2]


class UniqueScope(str, Enum):
    SHARED = "shared"
    PER_KIND = "per_kind"


def _env_int(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_optional_int(key: str) -> int | None:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_ids(key: str) -> list[int]:
    try:
        return parse_id_list(os.environ.get(key))
    except ValueError:
        return []


def _env_scope(key: str) -> UniqueScope:
    value = os.environ.get(key, UniqueScope.SHARED.value).strip().lower()
    try:
        return UniqueScope(value)
    except ValueError:
        return UniqueScope.SHARED


@dataclass
class Settings:
    """Runtime settings derived from environment variables with sensible defaults."""

    base_dir: Path = _DEFAULT_BASE_DIR
    outputs_dir: Path = base_dir / "outputs"
    logs_dir: Path = outputs_dir / "logs"
    jobs_dir: Path = outputs_dir / "jobs"
    logs_file: Path = logs_dir / "seeding.jsonl"
    store_url: str | None = None
    consumer_key: str | None = None
    consumer_secret: str | None = None
    store_timeout_s: int = 10
    seed: int | None = None
    locale: str = "en_US"
    unique_scope: UniqueScope = UniqueScope.SHARED
    store_attachment_ids: list[int] = field(default_factory=list)
    store_brand_ids: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._refresh_paths()
        self.store_timeout_s = max(1, self.store_timeout_s)
        if self.store_url:
            self.store_url = self.store_url.rstrip("/")

    @property
    def uses_remote_store(self) -> bool:
        return bool(self.store_url)

    def _refresh_paths(self) -> None:
        self.outputs_dir = self.base_dir / "outputs"
        self.logs_dir = self.outputs_dir / "logs"
        self.jobs_dir = self.outputs_dir / "jobs"
        self.logs_file = self.logs_dir / "seeding.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    base_dir = Path(os.environ.get("SEEDER_BASE_DIR", _DEFAULT_BASE_DIR))
    settings = Settings(
        base_dir=base_dir,
        store_url=os.environ.get("SEEDER_STORE_URL") or None,
        consumer_key=os.environ.get("SEEDER_CONSUMER_KEY") or None,
        consumer_secret=os.environ.get("SEEDER_CONSUMER_SECRET") or None,
        store_timeout_s=_env_int("SEEDER_STORE_TIMEOUT_S", 10),
        seed=_env_optional_int("SEEDER_SEED"),
        locale=os.environ.get("SEEDER_LOCALE", "en_US"),
        unique_scope=_env_scope("SEEDER_UNIQUE_SCOPE"),
        store_attachment_ids=_env_ids("SEEDER_STORE_ATTACHMENT_IDS"),
        store_brand_ids=_env_ids("SEEDER_STORE_BRAND_IDS"),
    )
    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    settings.jobs_dir.mkdir(parents=True, exist_ok=True)
    return settings
