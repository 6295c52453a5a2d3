from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from catalog_seeder.config import get_settings
from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import StoreResponse


@pytest.fixture(scope="session", autouse=True)
def base_dir(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    base = tmp_path_factory.mktemp("seeder-tests")
    previous = os.environ.get("SEEDER_BASE_DIR")
    os.environ["SEEDER_BASE_DIR"] = str(base)
    os.environ.pop("SEEDER_STORE_URL", None)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield base
    if previous is None:
        os.environ.pop("SEEDER_BASE_DIR", None)
    else:
        os.environ["SEEDER_BASE_DIR"] = previous
    get_settings.cache_clear()  # type: ignore[attr-defined]


class FixedContent(RandomContentProvider):
    """Faker-backed provider with some draws pinned to fixed values."""

    def __init__(
        self,
        numbers: dict[tuple[int, int], int] | None = None,
        flag: bool | None = None,
        seed: int = 1234,
    ) -> None:
        super().__init__(seed=seed)
        self.numbers = numbers or {}
        self.flag = flag

    def number_between(self, low: int, high: int) -> int:
        if (low, high) in self.numbers:
            return self.numbers[(low, high)]
        return super().number_between(low, high)

    def boolean(self, chance_of_getting_true: int = 50) -> bool:
        if self.flag is not None:
            return self.flag
        return super().boolean(chance_of_getting_true)


class StubStore:
    """Records submissions and answers each with a canned response."""

    def __init__(self, response: StoreResponse) -> None:
        self.response = response
        self.calls: list[tuple[EntityKind, dict[str, Any]]] = []

    def create(self, kind: EntityKind, field_set: dict[str, Any]) -> StoreResponse:
        self.calls.append((kind, field_set))
        return self.response


@pytest.fixture()
def content() -> RandomContentProvider:
    return RandomContentProvider(seed=42)
