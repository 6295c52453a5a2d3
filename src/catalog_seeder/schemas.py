from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer


class EntityKind(str, Enum):
    REVIEW = "review"
    CATEGORY = "category"
    TAG = "tag"
    PRODUCT = "product"


class IdRef(BaseModel):
    id: int


class FieldSet(BaseModel):
    """Attributes of one entity before the store assigns it an id."""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ReviewFields(FieldSet):
    product_id: int
    review: str
    reviewer: str
    reviewer_email: str
    rating: int = Field(ge=0, le=5)
    verified: bool


class CategoryFields(FieldSet):
    name: str = Field(min_length=1)
    description: str
    image: IdRef | None = None


class TagFields(FieldSet):
    name: str = Field(min_length=1)
    description: str


class ProductFields(FieldSet):
    name: str = Field(min_length=1)
    description: str
    status: str = "publish"
    type: str = "simple"
    featured: bool
    sku: str = Field(min_length=1)
    regular_price: int = Field(ge=0)
    images: list[IdRef] | None = None
    categories: list[IdRef] | None = None
    tags: list[IdRef] | None = None
    brands: list[int] | None = None

    @field_serializer("regular_price")
    def _price_as_string(self, value: int) -> str:
        return str(value)


class ComposeParams(BaseModel):
    product_id: int | None = None
    attachment_ids: list[int] = Field(default_factory=list)
    category_ids: list[int] = Field(default_factory=list)
    tag_ids: list[int] = Field(default_factory=list)
    brand_ids: list[int] = Field(default_factory=list)


class SeedPlan(BaseModel):
    categories: int = Field(default=5, ge=0)
    tags: int = Field(default=10, ge=0)
    products: int = Field(default=20, ge=0)
    reviews_per_product: int = Field(default=2, ge=0)
    attachment_ids: list[int] = Field(default_factory=list)
    brand_ids: list[int] = Field(default_factory=list)


class SeedResult(BaseModel):
    job_id: str
    category_ids: list[int] = Field(default_factory=list)
    tag_ids: list[int] = Field(default_factory=list)
    product_ids: list[int] = Field(default_factory=list)
    review_ids: list[int] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "categories": len(self.category_ids),
            "tags": len(self.tag_ids),
            "products": len(self.product_ids),
            "reviews": len(self.review_ids),
        }


class GenerationSummary(BaseModel):
    total_requests: int
    failures: int
    failure_rate: float
    created_by_kind: dict[str, int]
    p50_latency_ms: float
    p95_latency_ms: float


class JobStatus(BaseModel):
    job_id: str
    dag_name: str
    status: str
    queued_at: datetime
    started_at: datetime | None
    finished_at: datetime | None
    duration_ms: float | None
    error: str | None


class StoreError(BaseModel):
    code: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
