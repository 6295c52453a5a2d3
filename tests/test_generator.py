from __future__ import annotations

import pytest
from conftest import FixedContent, StubStore

from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.generation.dispatcher import CreationFailed
from catalog_seeder.generation.generator import CatalogGenerator
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import StoreResponse
from catalog_seeder.store.memory import InMemoryCatalogStore


def test_generate_product_with_attachment_pool_only(content: RandomContentProvider) -> None:
    store = StubStore(StoreResponse(data={"id": 55}))
    generator = CatalogGenerator.build(store, content=content)

    product_id = generator.generate_product([101, 102, 103], [], [], [])

    assert product_id == 55
    kind, payload = store.calls[0]
    assert kind is EntityKind.PRODUCT
    image_ids = [ref["id"] for ref in payload["images"]]
    assert 1 <= len(image_ids) <= 3
    assert set(image_ids) <= {101, 102, 103}
    for absent in ("categories", "tags", "brands"):
        assert absent not in payload


def test_generate_review_with_pinned_draws() -> None:
    store = StubStore(StoreResponse(data={"id": 9}))
    generator = CatalogGenerator.build(store, content=FixedContent(numbers={(0, 5): 4}, flag=True))

    review_id = generator.generate_review(product_id=55)

    assert review_id == 9
    kind, payload = store.calls[0]
    assert kind is EntityKind.REVIEW
    assert set(payload) == {"product_id", "rating", "verified", "review", "reviewer", "reviewer_email"}
    assert payload["product_id"] == 55
    assert payload["rating"] == 4
    assert payload["verified"] is True
    assert payload["review"]
    assert payload["reviewer"]
    assert "@" in payload["reviewer_email"]


def test_generate_tag_propagates_store_rejection(content: RandomContentProvider) -> None:
    message = "A term with the name provided already exists."
    store = StubStore(StoreResponse.failure(message))
    generator = CatalogGenerator.build(store, content=content)

    with pytest.raises(CreationFailed, match=message):
        generator.generate_tag()
    assert len(store.calls) == 1


def test_generated_categories_have_distinct_names(content: RandomContentProvider) -> None:
    store = InMemoryCatalogStore(attachment_ids=[1, 2, 3])
    generator = CatalogGenerator.build(store, content=content)

    ids = [generator.generate_category([1, 2, 3]) for _ in range(25)]

    names = [record["name"] for record in store.list_records(EntityKind.CATEGORY)]
    assert len(set(ids)) == 25
    assert len(set(names)) == 25


def test_product_references_only_existing_entities(content: RandomContentProvider) -> None:
    store = InMemoryCatalogStore(attachment_ids=[101, 102], brand_ids=[7, 8, 9])
    generator = CatalogGenerator.build(store, content=content)
    category_ids = [generator.generate_category([101, 102]) for _ in range(3)]
    tag_ids = [generator.generate_tag() for _ in range(4)]

    product_id = generator.generate_product([101, 102], category_ids, tag_ids, [7, 8, 9])
    review_id = generator.generate_review(product_id)

    product = store.records[EntityKind.PRODUCT][product_id]
    assert {ref["id"] for ref in product["categories"]} <= set(category_ids)
    assert {ref["id"] for ref in product["tags"]} <= set(tag_ids)
    assert set(product["brands"]) <= {7, 8, 9}
    assert store.records[EntityKind.REVIEW][review_id]["product_id"] == product_id


def test_earlier_entities_survive_a_failed_product(content: RandomContentProvider) -> None:
    store = InMemoryCatalogStore()
    generator = CatalogGenerator.build(store, content=content)
    category_id = generator.generate_category()

    with pytest.raises(CreationFailed, match="Invalid category ID"):
        generator.generate_product([], [category_id + 1000], [], [])

    assert store.count(EntityKind.CATEGORY) == 1
    assert store.count(EntityKind.PRODUCT) == 0


def test_reset_session_clears_names(content: RandomContentProvider) -> None:
    generator = CatalogGenerator.build(StubStore(StoreResponse(data={"id": 1})), content=content)
    generator.generate_tag()
    assert content.issued("name")
    generator.reset_session()
    assert not content.issued("name")
