from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from catalog_seeder.schemas import EntityKind

ROUTES: dict[EntityKind, str] = {
    EntityKind.REVIEW: "products/reviews",
    EntityKind.CATEGORY: "products/categories",
    EntityKind.TAG: "products/tags",
    EntityKind.PRODUCT: "products",
}


@dataclass
class StoreResponse:
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> StoreResponse:
        return cls(error=message)


class CatalogStore(Protocol):
    def create(self, kind: EntityKind, field_set: dict[str, Any]) -> StoreResponse: ...


def route_for(kind: EntityKind) -> str:
    try:
        return ROUTES[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown entity kind {kind}") from exc


def kind_for_route(route: str) -> EntityKind:
    for kind, path in ROUTES.items():
        if path == route.strip("/"):
            return kind
    raise ValueError(f"Unknown catalog route {route}")
