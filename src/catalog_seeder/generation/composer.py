from __future__ import annotations

from collections.abc import Sequence

from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.generation.post_content import BodyGenerator, ContentGenerator
from catalog_seeder.generation.sampler import ReferenceSampler
from catalog_seeder.schemas import (
    CategoryFields,
    ComposeParams,
    EntityKind,
    FieldSet,
    IdRef,
    ProductFields,
    ReviewFields,
    TagFields,
)

RATING_RANGE = (0, 5)
PRICE_RANGE = (10, 100)
FEATURED_CHANCE = 10
SKU_PATTERN = "#?#?#?#?#?#?"
TERM_PARAGRAPHS = (1, 3)

IMAGE_CAP = 3
CATEGORY_CAP = 2
TAG_CAP = 3
BRAND_CAP = 2


class EntityComposer:
    """Builds field-sets for each entity kind from random content and id pools."""

    def __init__(
        self,
        content: RandomContentProvider,
        body: BodyGenerator | None = None,
        sampler: ReferenceSampler | None = None,
    ) -> None:
        self.content = content
        self.body = body or ContentGenerator(content)
        self.sampler = sampler or ReferenceSampler(content)

    def compose(self, kind: EntityKind, params: ComposeParams | None = None) -> FieldSet:
        params = params or ComposeParams()
        match kind:
            case EntityKind.REVIEW:
                if params.product_id is None:
                    raise ValueError("A review needs the id of an existing product")
                return self.compose_review(params.product_id)
            case EntityKind.CATEGORY:
                return self.compose_category(params.attachment_ids)
            case EntityKind.TAG:
                return self.compose_tag()
            case EntityKind.PRODUCT:
                return self.compose_product(
                    params.attachment_ids,
                    params.category_ids,
                    params.tag_ids,
                    params.brand_ids,
                )
        raise ValueError(f"Unknown entity kind {kind}")

    def compose_review(self, product_id: int) -> ReviewFields:
        return ReviewFields(
            product_id=product_id,
            review=self.content.paragraph(),
            reviewer=self.content.name(),
            reviewer_email=self.content.email(),
            rating=self.content.number_between(*RATING_RANGE),
            verified=self.content.boolean(),
        )

    def compose_category(self, attachment_ids: Sequence[int]) -> CategoryFields:
        fields = CategoryFields(
            name=self.content.unique_catch_phrase(EntityKind.CATEGORY),
            description=self.body.generate_body(attachment_ids, *TERM_PARAGRAPHS),
        )
        if attachment_ids:
            fields.image = IdRef(id=self.sampler.sample_one(attachment_ids))
        return fields

    def compose_tag(self) -> TagFields:
        # Tags are never illustrated.
        return TagFields(
            name=self.content.unique_catch_phrase(EntityKind.TAG),
            description=self.body.generate_body([], *TERM_PARAGRAPHS),
        )

    def compose_product(
        self,
        attachment_ids: Sequence[int],
        category_ids: Sequence[int],
        tag_ids: Sequence[int],
        brand_ids: Sequence[int],
    ) -> ProductFields:
        fields = ProductFields(
            name=self.content.unique_catch_phrase(EntityKind.PRODUCT),
            description=self.body.generate_body(attachment_ids),
            status="publish",
            type="simple",
            featured=self.content.boolean(FEATURED_CHANCE),
            sku=self.content.unique_sku(SKU_PATTERN),
            regular_price=self.content.number_between(*PRICE_RANGE),
        )
        if attachment_ids:
            fields.images = self._refs(attachment_ids, IMAGE_CAP)
        if category_ids:
            fields.categories = self._refs(category_ids, CATEGORY_CAP)
        if tag_ids:
            fields.tags = self._refs(tag_ids, TAG_CAP)
        if brand_ids:
            fields.brands = self.sampler.sample(brand_ids, 1, BRAND_CAP)
        return fields

    def _refs(self, pool: Sequence[int], cap: int) -> list[IdRef]:
        return [IdRef(id=ref_id) for ref_id in self.sampler.sample(pool, 1, cap)]
