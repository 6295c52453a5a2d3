from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.generation.dispatcher import CreationFailed
from catalog_seeder.generation.generator import CatalogGenerator
from catalog_seeder.monitoring.logger import NullLogger, StructuredLogger
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.app import create_app
from catalog_seeder.store.http import HttpCatalogStore
from catalog_seeder.store.memory import InMemoryCatalogStore


@pytest.fixture()
def catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(attachment_ids=[101, 102, 103], brand_ids=[7])


@pytest.fixture()
def api_client(catalog: InMemoryCatalogStore) -> TestClient:
    return TestClient(create_app(catalog, logger=NullLogger()))


def test_memory_store_assigns_sequential_ids(catalog: InMemoryCatalogStore) -> None:
    first = catalog.create(EntityKind.TAG, {"name": "One", "description": ""})
    second = catalog.create(EntityKind.CATEGORY, {"name": "Two", "description": ""})
    assert first.data["id"] == 1
    assert second.data["id"] == 2


def test_memory_store_rejects_duplicate_term_names(catalog: InMemoryCatalogStore) -> None:
    catalog.create(EntityKind.TAG, {"name": "Sale", "description": ""})
    response = catalog.create(EntityKind.TAG, {"name": "sale", "description": ""})
    assert response.error == "A term with the name provided already exists."
    assert catalog.count(EntityKind.TAG) == 1


def test_memory_store_rejects_duplicate_sku(catalog: InMemoryCatalogStore) -> None:
    product = {"name": "Lamp", "description": "", "sku": "ABC123"}
    assert catalog.create(EntityKind.PRODUCT, product).error is None
    duplicate = catalog.create(EntityKind.PRODUCT, {**product, "name": "Other lamp"})
    assert duplicate.error == "Invalid or duplicated SKU."


def test_memory_store_rejects_unknown_references(catalog: InMemoryCatalogStore) -> None:
    response = catalog.create(
        EntityKind.PRODUCT,
        {"name": "Chair", "description": "", "sku": "X1", "images": [{"id": 999}]},
    )
    assert response.error is not None and "Invalid image ID" in response.error
    review = catalog.create(EntityKind.REVIEW, {"product_id": 404, "review": "ok", "rating": 3})
    assert review.error == "Invalid product ID."


def test_http_store_round_trip(api_client: TestClient, catalog: InMemoryCatalogStore) -> None:
    store = HttpCatalogStore(api_client)
    generator = CatalogGenerator.build(store, content=RandomContentProvider(seed=5))

    category_id = generator.generate_category([101, 102, 103])
    tag_id = generator.generate_tag()
    product_id = generator.generate_product([101, 102, 103], [category_id], [tag_id], [7])
    review_id = generator.generate_review(product_id)

    assert catalog.records[EntityKind.PRODUCT][product_id]["categories"] == [{"id": category_id}]
    assert catalog.records[EntityKind.REVIEW][review_id]["product_id"] == product_id
    listed = api_client.get("/wp-json/wc/v3/products").json()
    assert [item["id"] for item in listed] == [product_id]


def test_http_store_surfaces_rejection_message(api_client: TestClient) -> None:
    store = HttpCatalogStore(api_client)
    payload = {"name": "Clearance", "description": ""}
    assert store.create(EntityKind.TAG, payload).error is None

    response = api_client.post("/wp-json/wc/v3/products/tags", json=payload)
    assert response.status_code == 400
    assert response.json()["code"] == "term_exists"

    generator = CatalogGenerator.build(store, content=RandomContentProvider(seed=5))
    with pytest.raises(CreationFailed, match="Invalid product ID."):
        generator.generate_review(product_id=12345)


def test_health_reports_counts_and_request_id(api_client: TestClient) -> None:
    api_client.post("/wp-json/wc/v3/products/tags", json={"name": "Fresh", "description": ""})
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["counts"]["tag"] == 1
    assert response.headers["X-Request-ID"]


def test_request_log_records_kind_and_rejection_code(
    catalog: InMemoryCatalogStore,
    tmp_path: Path,
) -> None:
    log_path = tmp_path / "store.jsonl"
    client = TestClient(create_app(catalog, logger=StructuredLogger(log_path)))
    payload = {"name": "Clearance", "description": ""}
    assert client.post("/wp-json/wc/v3/products/tags", json=payload).status_code == 201
    assert client.post("/wp-json/wc/v3/products/tags", json=payload).status_code == 400
    client.get("/health")

    events = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    completed = [event for event in events if event["event"] == "request_complete"]
    created, rejected, health = completed
    assert created["kind"] == "tag"
    assert "rejection_code" not in created
    assert rejected["kind"] == "tag"
    assert rejected["status"] == 400
    assert rejected["rejection_code"] == "term_exists"
    assert health["kind"] is None
    assert health["request_id"]


def test_http_store_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(base_url="http://shop.test", transport=httpx.MockTransport(handler))
    response = HttpCatalogStore(client).create(EntityKind.TAG, {"name": "x"})
    assert response.error is not None
    assert "connection refused" in response.error


def test_http_store_maps_server_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/wp-json/wc/v3/products/categories"
        return httpx.Response(500, json={"code": "internal", "message": "Database is down."})

    client = httpx.Client(base_url="http://shop.test", transport=httpx.MockTransport(handler))
    response = HttpCatalogStore(client).create(EntityKind.CATEGORY, {"name": "x"})
    assert response.error == "Database is down."
