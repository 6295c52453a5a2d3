from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from catalog_seeder.config import get_settings
from catalog_seeder.monitoring.logger import StructuredLogger
from catalog_seeder.schemas import EntityKind, StoreError
from catalog_seeder.store.base import ROUTES
from catalog_seeder.store.http import API_PREFIX
from catalog_seeder.store.memory import InMemoryCatalogStore, StoreRejection
from catalog_seeder.store.middleware import CatalogRequestMiddleware

CreateHandler = Callable[[Request, dict[str, Any]], Awaitable[JSONResponse]]
ListHandler = Callable[[], Awaitable[list[dict[str, Any]]]]


def _rejection_response(exc: StoreRejection) -> JSONResponse:
    error = StoreError(
        code=exc.code,
        message=exc.message,
        data={"status": status.HTTP_400_BAD_REQUEST},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.model_dump())


def _create_handler(catalog: InMemoryCatalogStore, kind: EntityKind) -> CreateHandler:
    async def create(request: Request, payload: dict[str, Any]) -> JSONResponse:
        try:
            record = catalog.create_record(kind, payload)
        except StoreRejection as exc:
            request.state.rejection_code = exc.code
            return _rejection_response(exc)
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=record)

    return create


def _list_handler(catalog: InMemoryCatalogStore, kind: EntityKind) -> ListHandler:
    async def list_items() -> list[dict[str, Any]]:
        return catalog.list_records(kind)

    return list_items


def create_app(
    catalog: InMemoryCatalogStore | None = None,
    logger: StructuredLogger | None = None,
) -> FastAPI:
    """Serve an in-memory catalog over WooCommerce-shaped REST routes."""
    settings = get_settings()
    catalog = catalog or InMemoryCatalogStore(
        attachment_ids=settings.store_attachment_ids,
        brand_ids=settings.store_brand_ids,
    )
    logger = logger or StructuredLogger(settings.logs_file)
    app = FastAPI(title="Catalog Seeder Local Store", version="0.1.0")
    app.add_middleware(CatalogRequestMiddleware, logger=logger)
    app.state.catalog = catalog

    for kind, route in ROUTES.items():
        app.add_api_route(
            f"{API_PREFIX}/{route}",
            _create_handler(catalog, kind),
            methods=["POST"],
            name=f"create_{kind.value}",
        )
        app.add_api_route(
            f"{API_PREFIX}/{route}",
            _list_handler(catalog, kind),
            methods=["GET"],
            name=f"list_{kind.value}",
        )

    @app.get("/health")
    def health() -> dict[str, object]:
        return {
            "status": "ok",
            "counts": {kind.value: catalog.count(kind) for kind in EntityKind},
        }

    return app

