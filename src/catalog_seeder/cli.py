from __future__ import annotations

# ruff: noqa: B008
import dataclasses
import json
import os
from importlib import metadata
from pathlib import Path

import typer

from catalog_seeder.config import Settings, get_settings
from catalog_seeder.generation.composer import EntityComposer
from catalog_seeder.generation.content import RandomContentProvider
from catalog_seeder.generation.generator import CatalogGenerator
from catalog_seeder.monitoring.logger import StructuredLogger
from catalog_seeder.monitoring.summary import compute_generation_summary
from catalog_seeder.orchestration.plan import run_seed_plan
from catalog_seeder.orchestration.state import JobStateStore
from catalog_seeder.schemas import ComposeParams, EntityKind, SeedPlan, SeedResult
from catalog_seeder.store.base import CatalogStore
from catalog_seeder.store.http import HttpCatalogStore
from catalog_seeder.store.memory import InMemoryCatalogStore
from catalog_seeder.utils.io import dump_json, parse_id_list

app = typer.Typer(help="Catalog fixture data generator")
jobs_app = typer.Typer(help="Seeding job insights")

app.add_typer(jobs_app, name="jobs")

PACKAGE_NAME = "catalog-seeder"


def _ids_option(raw: str | None, option: str) -> list[int]:
    try:
        return parse_id_list(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"{option} must be a comma separated list of integers") from exc


def _build_store(settings: Settings, plan: SeedPlan) -> CatalogStore:
    if settings.uses_remote_store:
        return HttpCatalogStore.from_settings(settings)
    return InMemoryCatalogStore(attachment_ids=plan.attachment_ids, brand_ids=plan.brand_ids)


def _summary_payload(result: SeedResult, settings: Settings) -> dict[str, object]:
    return {
        "job_id": result.job_id,
        "store": settings.store_url or "memory",
        "seed": settings.seed,
        "unique_scope": settings.unique_scope.value,
        "counts": result.counts(),
        "ids": result.model_dump(exclude={"job_id"}),
    }


@app.command("seed")
def seed(  # noqa: PLR0913 - CLI needs tuneable knobs
    categories: int = typer.Option(5, min=0, help="Number of categories to create"),
    tags: int = typer.Option(10, min=0, help="Number of tags to create"),
    products: int = typer.Option(20, min=0, help="Number of products to create"),
    reviews_per_product: int = typer.Option(2, min=0, help="Reviews to create per product"),
    attachment_ids: str = typer.Option("", help="Existing attachment ids, e.g. 101,102"),
    brand_ids: str = typer.Option("", help="Existing brand ids, e.g. 7,8"),
    seed_value: int | None = typer.Option(None, "--seed", help="Faker seed"),
    store_url: str | None = typer.Option(None, help="Store base URL; in-memory when unset"),
    out: Path | None = typer.Option(None, help="Write the run summary JSON here"),
) -> None:
    """Create categories, tags, products and reviews in dependency order."""
    plan = SeedPlan(
        categories=categories,
        tags=tags,
        products=products,
        reviews_per_product=reviews_per_product,
        attachment_ids=_ids_option(attachment_ids, "--attachment-ids"),
        brand_ids=_ids_option(brand_ids, "--brand-ids"),
    )
    settings = get_settings()
    overrides: dict[str, object] = {}
    if seed_value is not None:
        overrides["seed"] = seed_value
    if store_url:
        overrides["store_url"] = store_url
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    store = _build_store(settings, plan)
    logger = StructuredLogger(settings.logs_file)
    generator = CatalogGenerator.from_settings(settings, store)
    try:
        result = run_seed_plan(plan, generator, JobStateStore(settings.jobs_dir), logger)
    except Exception as exc:
        typer.echo(f"Seeding failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        if isinstance(store, HttpCatalogStore):
            store.close()

    payload = _summary_payload(result, settings)
    if out is not None:
        dump_json(payload, out)
        typer.echo(f"Run summary written to {out}")
    counts = result.counts()
    typer.echo(
        "Seeded categories={categories} tags={tags} products={products} "
        "reviews={reviews} (job {job})".format(job=result.job_id, **counts),
    )


@app.command("preview")
def preview(
    kind: EntityKind = typer.Argument(..., help="review, category, tag or product"),
    product_id: int = typer.Option(1, help="Product id for reviews"),
    attachment_ids: str = typer.Option("", help="Candidate attachment ids"),
    category_ids: str = typer.Option("", help="Candidate category ids"),
    tag_ids: str = typer.Option("", help="Candidate tag ids"),
    brand_ids: str = typer.Option("", help="Candidate brand ids"),
    seed_value: int | None = typer.Option(None, "--seed", help="Faker seed"),
) -> None:
    """Compose one field-set without submitting it."""
    settings = get_settings()
    content = RandomContentProvider(
        seed=seed_value if seed_value is not None else settings.seed,
        locale=settings.locale,
        unique_scope=settings.unique_scope,
    )
    params = ComposeParams(
        product_id=product_id,
        attachment_ids=_ids_option(attachment_ids, "--attachment-ids"),
        category_ids=_ids_option(category_ids, "--category-ids"),
        tag_ids=_ids_option(tag_ids, "--tag-ids"),
        brand_ids=_ids_option(brand_ids, "--brand-ids"),
    )
    fields = EntityComposer(content).compose(kind, params)
    typer.echo(json.dumps(fields.to_payload(), indent=2))


@app.command("serve-store")
def serve_store(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8080, help="Bind port"),
    attachment_ids: str = typer.Option("", help="Attachment ids the store accepts"),
    brand_ids: str = typer.Option("", help="Brand ids the store accepts"),
) -> None:
    """Run the in-memory catalog store behind its REST routes."""
    import uvicorn

    if attachment_ids:
        os.environ["SEEDER_STORE_ATTACHMENT_IDS"] = attachment_ids
    if brand_ids:
        os.environ["SEEDER_STORE_BRAND_IDS"] = brand_ids
    get_settings.cache_clear()  # type: ignore[attr-defined]
    uvicorn.run("catalog_seeder.store.app:create_app", host=host, port=port, factory=True)


@app.command("stats")
def stats() -> None:
    """Summarize create requests recorded in the event log."""
    settings = get_settings()
    summary = compute_generation_summary(settings.logs_file)
    typer.echo(json.dumps(summary.model_dump(), indent=2))


@jobs_app.command("list")
def jobs_list(limit: int = typer.Option(5, help="How many jobs to display")) -> None:
    store = JobStateStore()
    jobs = store.list_jobs(limit=limit)
    typer.echo(json.dumps(jobs, indent=2))


@jobs_app.command("show")
def jobs_show(job_id: str = typer.Argument(..., help="Job identifier")) -> None:
    store = JobStateStore()
    try:
        job = store.get_job(job_id)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(job, indent=2))


@app.command("version")
def version() -> None:
    try:
        installed = metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:  # pragma: no cover - local dev
        installed = "0.0.0"
    typer.echo(f"seeder {installed}")


if __name__ == "__main__":
    app()
