from __future__ import annotations

from typing import Any

import httpx

from catalog_seeder.config import Settings
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import StoreResponse, route_for

API_PREFIX = "/wp-json/wc/v3"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()


class HttpCatalogStore:
    """Catalog store reached over a WooCommerce-compatible REST API."""

    def __init__(self, client: httpx.Client, api_prefix: str = API_PREFIX) -> None:
        self.client = client
        self.api_prefix = api_prefix.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpCatalogStore:
        if not settings.store_url:
            raise ValueError("SEEDER_STORE_URL is not configured")
        auth: httpx.BasicAuth | None = None
        if settings.consumer_key and settings.consumer_secret:
            auth = httpx.BasicAuth(settings.consumer_key, settings.consumer_secret)
        client = httpx.Client(
            base_url=settings.store_url,
            auth=auth,
            timeout=float(settings.store_timeout_s),
        )
        return cls(client)

    def create(self, kind: EntityKind, field_set: dict[str, Any]) -> StoreResponse:
        path = f"{self.api_prefix}/{route_for(kind)}"
        try:
            response = self.client.post(path, json=field_set)
        except httpx.HTTPError as exc:
            return StoreResponse.failure(f"{type(exc).__name__}: {exc}")
        if response.is_error:
            return StoreResponse.failure(_error_message(response))
        try:
            body = response.json()
        except ValueError:
            return StoreResponse.failure("Store returned a non-JSON response")
        if not isinstance(body, dict):
            return StoreResponse(data={})
        return StoreResponse(data=body)

    def close(self) -> None:
        self.client.close()
