from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from catalog_seeder.monitoring.logger import StructuredLogger
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import kind_for_route
from catalog_seeder.store.http import API_PREFIX


def _kind_for_path(path: str) -> EntityKind | None:
    prefix = f"{API_PREFIX}/"
    if not path.startswith(prefix):
        return None
    try:
        return kind_for_route(path[len(prefix) :])
    except ValueError:
        return None


class CatalogRequestMiddleware(BaseHTTPMiddleware):
    """Tags every store request with an id and logs which entity kind it touched.

    Handlers that reject a submission put the store's error code on
    ``request.state.rejection_code`` so it lands in the same event.
    """

    def __init__(self, app: ASGIApp, logger: StructuredLogger) -> None:
        super().__init__(app)
        self.logger = logger

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        request.state.rejection_code = None
        kind = _kind_for_path(request.url.path)
        event: dict[str, object] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "kind": kind.value if kind else None,
        }
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:  # pragma: no cover - logged for visibility
            self.logger.log_event({"event": "request_error", **event, "error": str(exc)})
            raise
        event["status"] = response.status_code
        event["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
        if response.status_code >= 400:
            event["rejection_code"] = getattr(request.state, "rejection_code", None)
        self.logger.log_event({"event": "request_complete", **event})
        response.headers["X-Request-ID"] = request_id
        return response
