from __future__ import annotations

from typing import cast

from catalog_seeder.generation.generator import CatalogGenerator
from catalog_seeder.monitoring.logger import StructuredLogger
from catalog_seeder.orchestration.dag import DAG, JobContext, Task
from catalog_seeder.orchestration.scheduler import Scheduler
from catalog_seeder.orchestration.state import JobStateStore
from catalog_seeder.schemas import SeedPlan, SeedResult

SEED_DAG = "seed_catalog"


def _created(context: JobContext, key: str) -> list[int]:
    created = cast(dict[str, list[int]], context.setdefault("created_ids", {}))
    return created.setdefault(key, [])


def build_seed_dag(plan: SeedPlan, generator: CatalogGenerator) -> DAG:
    """Seeding steps in dependency order: terms, then products, then reviews."""

    def generate_categories(context: JobContext) -> None:
        ids = _created(context, "categories")
        for _ in range(plan.categories):
            ids.append(generator.generate_category(plan.attachment_ids))

    def generate_tags(context: JobContext) -> None:
        ids = _created(context, "tags")
        for _ in range(plan.tags):
            ids.append(generator.generate_tag())

    def generate_products(context: JobContext) -> None:
        category_ids = list(_created(context, "categories"))
        tag_ids = list(_created(context, "tags"))
        ids = _created(context, "products")
        for _ in range(plan.products):
            ids.append(
                generator.generate_product(
                    plan.attachment_ids,
                    category_ids,
                    tag_ids,
                    plan.brand_ids,
                ),
            )

    def generate_reviews(context: JobContext) -> None:
        ids = _created(context, "reviews")
        for product_id in list(_created(context, "products")):
            for _ in range(plan.reviews_per_product):
                ids.append(generator.generate_review(product_id))

    return DAG(
        name=SEED_DAG,
        tasks=[
            Task("generate_categories", generate_categories),
            Task("generate_tags", generate_tags),
            Task(
                "generate_products",
                generate_products,
                deps=["generate_categories", "generate_tags"],
            ),
            Task("generate_reviews", generate_reviews, deps=["generate_products"]),
        ],
    )


def run_seed_plan(
    plan: SeedPlan,
    generator: CatalogGenerator,
    job_store: JobStateStore | None = None,
    logger: StructuredLogger | None = None,
) -> SeedResult:
    generator.reset_session()
    scheduler = Scheduler({SEED_DAG: build_seed_dag(plan, generator)}, job_store, logger)
    context: JobContext = {}
    job_id = scheduler.run(SEED_DAG, context)
    return SeedResult(
        job_id=job_id,
        category_ids=_created(context, "categories"),
        tag_ids=_created(context, "tags"),
        product_ids=_created(context, "products"),
        review_ids=_created(context, "reviews"),
    )
