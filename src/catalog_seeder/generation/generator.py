from __future__ import annotations

from collections.abc import Sequence

from catalog_seeder.config import Settings
from catalog_seeder.generation.composer import EntityComposer
from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.generation.dispatcher import CreationDispatcher
from catalog_seeder.monitoring.logger import StructuredLogger
from catalog_seeder.schemas import EntityKind
from catalog_seeder.store.base import CatalogStore


class CatalogGenerator:
    """Creates catalog entities one at a time.

    Every ``generate_*`` call composes a field-set, submits it once and returns
    the id the store assigned. A rejected submission raises
    :class:`~catalog_seeder.generation.dispatcher.CreationFailed`; entities
    created by earlier calls are left in place.
    """

    def __init__(self, composer: EntityComposer, dispatcher: CreationDispatcher) -> None:
        self.composer = composer
        self.dispatcher = dispatcher

    @classmethod
    def build(
        cls,
        store: CatalogStore,
        content: RandomContentProvider | None = None,
        logger: StructuredLogger | None = None,
    ) -> CatalogGenerator:
        composer = EntityComposer(content or RandomContentProvider())
        return cls(composer, CreationDispatcher(store, logger))

    @classmethod
    def from_settings(cls, settings: Settings, store: CatalogStore) -> CatalogGenerator:
        return cls.build(
            store,
            content=RandomContentProvider.from_settings(settings),
            logger=StructuredLogger(settings.logs_file),
        )

    def reset_session(self) -> None:
        self.composer.content.reset()

    def generate_review(self, product_id: int) -> int:
        fields = self.composer.compose_review(product_id)
        return self.dispatcher.create(EntityKind.REVIEW, fields)

    def generate_category(self, attachment_ids: Sequence[int] = ()) -> int:
        fields = self.composer.compose_category(attachment_ids)
        return self.dispatcher.create(EntityKind.CATEGORY, fields)

    def generate_tag(self) -> int:
        fields = self.composer.compose_tag()
        return self.dispatcher.create(EntityKind.TAG, fields)

    def generate_product(
        self,
        attachment_ids: Sequence[int] = (),
        category_ids: Sequence[int] = (),
        tag_ids: Sequence[int] = (),
        brand_ids: Sequence[int] = (),
    ) -> int:
        fields = self.composer.compose_product(attachment_ids, category_ids, tag_ids, brand_ids)
        return self.dispatcher.create(EntityKind.PRODUCT, fields)
