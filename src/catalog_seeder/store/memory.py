from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import StoreResponse


class StoreRejection(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _ref_ids(value: object) -> list[int]:
    if not isinstance(value, list):
        return []
    ids: list[int] = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("id")
        if isinstance(item, int):
            ids.append(item)
    return ids


class InMemoryCatalogStore:
    """Process-local catalog that validates submissions and assigns ids."""

    def __init__(
        self,
        attachment_ids: Iterable[int] = (),
        brand_ids: Iterable[int] = (),
        first_id: int = 1,
    ) -> None:
        self.attachment_ids = set(attachment_ids)
        self.brand_ids = set(brand_ids)
        self.records: dict[EntityKind, dict[int, dict[str, Any]]] = {
            kind: {} for kind in EntityKind
        }
        self._next_id = first_id

    def create(self, kind: EntityKind, field_set: dict[str, Any]) -> StoreResponse:
        try:
            record = self.create_record(kind, field_set)
        except StoreRejection as exc:
            return StoreResponse.failure(exc.message)
        return StoreResponse(data=record)

    def create_record(self, kind: EntityKind, field_set: dict[str, Any]) -> dict[str, Any]:
        match kind:
            case EntityKind.REVIEW:
                self._validate_review(field_set)
            case EntityKind.CATEGORY | EntityKind.TAG:
                self._validate_term(kind, field_set)
            case EntityKind.PRODUCT:
                self._validate_product(field_set)
            case _:
                raise StoreRejection("rest_invalid_kind", f"Unsupported entity kind {kind}")
        new_id = self._next_id
        self._next_id += 1
        record = {"id": new_id, **field_set}
        self.records[kind][new_id] = record
        return record

    def list_records(self, kind: EntityKind) -> list[dict[str, Any]]:
        return list(self.records[kind].values())

    def count(self, kind: EntityKind) -> int:
        return len(self.records[kind])

    def _validate_review(self, field_set: dict[str, Any]) -> None:
        product_id = field_set.get("product_id")
        if product_id not in self.records[EntityKind.PRODUCT]:
            raise StoreRejection(
                "woocommerce_rest_product_invalid_id",
                "Invalid product ID.",
            )
        rating = field_set.get("rating", 0)
        if not isinstance(rating, int) or not 0 <= rating <= 5:
            raise StoreRejection(
                "woocommerce_rest_review_invalid_rating",
                "Rating must be between 0 and 5.",
            )
        if not field_set.get("review"):
            raise StoreRejection("woocommerce_rest_review_invalid", "Review content is empty.")

    def _validate_term(self, kind: EntityKind, field_set: dict[str, Any]) -> None:
        name = str(field_set.get("name") or "").strip()
        if not name:
            raise StoreRejection("empty_term_name", "A name is required for this term.")
        existing = {str(r.get("name", "")).casefold() for r in self.records[kind].values()}
        if name.casefold() in existing:
            raise StoreRejection("term_exists", "A term with the name provided already exists.")
        image_ids = _ref_ids([field_set["image"]]) if field_set.get("image") else []
        self._check_known(image_ids, self.attachment_ids, "Invalid image ID.")

    def _validate_product(self, field_set: dict[str, Any]) -> None:
        if not str(field_set.get("name") or "").strip():
            raise StoreRejection("woocommerce_rest_product_invalid_name", "Product name is empty.")
        sku = str(field_set.get("sku") or "")
        if sku:
            skus = {r.get("sku") for r in self.records[EntityKind.PRODUCT].values()}
            if sku in skus:
                raise StoreRejection("product_invalid_sku", "Invalid or duplicated SKU.")
        self._check_known(
            _ref_ids(field_set.get("images")),
            self.attachment_ids,
            "Invalid image ID.",
        )
        self._check_known(
            _ref_ids(field_set.get("categories")),
            set(self.records[EntityKind.CATEGORY]),
            "Invalid category ID.",
        )
        self._check_known(
            _ref_ids(field_set.get("tags")),
            set(self.records[EntityKind.TAG]),
            "Invalid tag ID.",
        )
        self._check_known(_ref_ids(field_set.get("brands")), self.brand_ids, "Invalid brand ID.")

    @staticmethod
    def _check_known(ids: list[int], known: set[int], message: str) -> None:
        unknown = [ref_id for ref_id in ids if ref_id not in known]
        if unknown:
            raise StoreRejection(
                "woocommerce_rest_invalid_reference",
                f"{message} ({', '.join(str(i) for i in unknown)})",
            )
