"""
affilai: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Open the database and run the flow.
  4. Report the result to stdout; errors go to stderr with exit code 1.

Install and run::

    pip install -e .
    affilai init-db
    affilai import-products config/products.example.json
    affilai analyze 1
    affilai generate-ad 1 --format story --instructions "20% off this week"
    affilai generate-link 1 --platform tiktok
    affilai refresh-link 1
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="affilai",
    help="Affiliate ad recommender: platform discovery, ad-format ranking and ad copy.",
    add_completion=False,
)

_CONFIG_OPTION_HELP = "Path to TOML config file (default: config/default.toml)."


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from affilai.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    from affilai.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _connect(config):
    from affilai.db.connection import connect_from_config

    return connect_from_config(config.database)


def _get_product_or_exit(storage, product_id: int):
    product = storage.get_product(product_id)
    if product is None:
        typer.echo(f"[ERROR] Product {product_id} not found", err=True)
        raise typer.Exit(code=1)
    return product


# ── Database ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run multiple times; all DDL uses IF NOT EXISTS.
    """
    from affilai.db.connection import connect_from_config
    from affilai.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with connect_from_config(config.database, db_path=target_path) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    show_full: bool = typer.Option(False, "--full", help="Print the full config as JSON."),
) -> None:
    """Validate the configuration file and print parsed values."""
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:      {config.database.db_path}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Discovery floor:    {config.discovery.min_audience_match}")
    typer.echo(f"  Max platforms:      {config.discovery.max_platforms}")
    typer.echo(f"  Fallback platform:  {config.discovery.fallback_platform.value}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("import-products")
def import_products(
    products_file: str = typer.Argument(..., help="JSON array of product objects."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Validate products but do not write to the database.",
    ),
) -> None:
    """Import products from a JSON file into the database.

    Every entry is validated before anything is written; a bad entry
    aborts the import and leaves the database untouched.
    """
    from affilai.db.seed import load_products_json, read_products_json

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    path = Path(products_file)
    if not path.exists():
        typer.echo(f"[ERROR] Products file not found: {path}", err=True)
        raise typer.Exit(code=1)

    try:
        if dry_run:
            products = read_products_json(path)
        else:
            with _connect(config) as conn:
                ids = load_products_json(conn, path)
    except (json.JSONDecodeError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if dry_run:
        typer.echo(f"  Validated {len(products)} product(s).")
        typer.echo("[DRY RUN] No products written to database.")
        for p in products:
            typer.echo(f"  {p.name} | {p.category} | trending={p.effective_trending_score}")
        return

    typer.echo(f"  Inserted {len(ids)} product(s).")
    typer.echo("[OK] Products imported.")


# ── Recommendations ───────────────────────────────────────────────────────────

@app.command("discover")
def discover(
    product_id: int = typer.Argument(..., help="Product id."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """List the affiliate platforms that clear the discovery floor."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.recommendations.aggregator import discover_for_product

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _connect(config) as conn:
        product = _get_product_or_exit(SqliteAdStorage(conn), product_id)

    programs = discover_for_product(
        product,
        min_score=config.discovery.min_audience_match,
        limit=config.discovery.max_platforms,
    )

    if not programs:
        typer.echo(f"No platform clears the discovery floor for '{product.name}'.")
        return

    typer.echo(f"Platforms for '{product.name}':")
    for rank, p in enumerate(programs, start=1):
        typer.echo(
            f"  {rank}. {p.platform.value:<10} match={p.audience_match_score:.3f} "
            f"commission={p.commission_rate:.0%} cookie={p.cookie_duration}d"
        )
        typer.echo(f"     {p.program_name}: {p.recommendation_reason}")


@app.command("analyze")
def analyze(
    product_id: int = typer.Argument(..., help="Product id."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Print the market analysis (ad format, platform, tone) for a product."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.recommendations.aggregator import build_market_analysis

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _connect(config) as conn:
        product = _get_product_or_exit(SqliteAdStorage(conn), product_id)

    analysis = build_market_analysis(
        product,
        fallback_platform=config.discovery.fallback_platform,
        min_score=config.discovery.min_audience_match,
        limit=config.discovery.max_platforms,
    )
    ad_type = analysis.ad_type

    typer.echo(f"Market analysis for '{product.name}':")
    typer.echo(f"  Ad format:     {ad_type.recommended_ad_type.value} "
               f"(confidence {ad_type.confidence_score:.0%})")
    typer.echo(f"  Alternatives:  {', '.join(a.value for a in ad_type.alternative_types)}")
    typer.echo(f"  Platform:      {analysis.recommended_platform.value}")
    typer.echo(f"  Tone:          {analysis.suggested_tone}")
    typer.echo(f"  Competition:   {analysis.competition_level}")
    typer.echo(f"  Engagement:    {analysis.estimated_engagement_score:.3f}")
    typer.echo(f"  Reasoning:     {ad_type.reasoning}")


# ── Generation ────────────────────────────────────────────────────────────────

@app.command("generate-ad")
def generate_ad(
    product_id: int = typer.Argument(..., help="Product id."),
    ad_format: Optional[str] = typer.Option(
        None,
        "--format",
        help="Ad format (social_post, story, video_script, carousel, email, sms; "
             "case-insensitive). Other names render the generic template. "
             "Defaults to the recommended format.",
    ),
    instructions: Optional[str] = typer.Option(
        None,
        "--instructions",
        help="Free-text note slotted into the template.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Generate and save ad copy for a product."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.errors import ProductNotFoundError
    from affilai.pipeline.generate import generate_ad_for_product
    from affilai.taxonomy.ad_formats import AdFormat

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    requested = AdFormat.parse(ad_format) or ad_format

    try:
        with _connect(config) as conn:
            result = generate_ad_for_product(
                SqliteAdStorage(conn),
                product_id,
                ad_format=requested,
                custom_instructions=instructions,
                config=config,
            )
    except ProductNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    ad = result.ad_copy
    typer.echo(f"[{ad.ad_format}] {ad.headline}")
    typer.echo("")
    typer.echo(ad.body_text)
    typer.echo("")
    typer.echo(f"CTA: {ad.cta}")
    typer.echo(f"[OK] Saved ad {ad.ad_id} ({ad.variation_name}).")


@app.command("generate-link")
def generate_link(
    product_id: int = typer.Argument(..., help="Product id."),
    platform: Optional[str] = typer.Option(
        None,
        "--platform",
        help="Target platform. Defaults to the best-matching platform.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Generate and save an affiliate tracking link for a product."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.errors import (
        NoPlatformsAvailableError,
        PlatformUnavailableError,
        ProductNotFoundError,
    )
    from affilai.pipeline.generate import generate_affiliate_link, generate_link_for_platform

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _connect(config) as conn:
            storage = SqliteAdStorage(conn)
            if platform:
                link = generate_link_for_platform(storage, product_id, platform, config=config)
            else:
                link = generate_affiliate_link(storage, product_id, config=config)
    except (ProductNotFoundError, PlatformUnavailableError, NoPlatformsAvailableError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"  Platform: {link.platform.value} ({link.program_name})")
    typer.echo(f"  URL:      {link.tracking_url}")
    typer.echo(f"[OK] Saved link {link.link_id}.")


@app.command("generate-all-links")
def generate_all_links(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Create a best-platform link for every product that has none yet."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.pipeline.generate import generate_links_for_all_products

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _connect(config) as conn:
        links = generate_links_for_all_products(SqliteAdStorage(conn), config=config)

    for link in links:
        typer.echo(f"  {link.product_name} → {link.platform.value}: {link.tracking_url}")
    typer.echo(f"[OK] {len(links)} link(s) created.")


@app.command("refresh-link")
def refresh_link(
    link_id: int = typer.Argument(..., help="Affiliate link id."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Re-run discovery and point an existing link at the best platform."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.errors import LinkNotFoundError, NoPlatformsAvailableError, ProductNotFoundError
    from affilai.pipeline.generate import refresh_affiliate_link

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _connect(config) as conn:
            link = refresh_affiliate_link(SqliteAdStorage(conn), link_id, config=config)
    except (LinkNotFoundError, ProductNotFoundError, NoPlatformsAvailableError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"  Platform: {link.platform.value} ({link.program_name})")
    typer.echo(f"  URL:      {link.tracking_url}")
    typer.echo(f"[OK] Refreshed link {link.link_id}.")


@app.command("list-links")
def list_links(
    product_id: Optional[int] = typer.Option(
        None,
        "--product",
        help="Only show links for this product id.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """List affiliate links, newest first."""
    from affilai.db.storage import SqliteAdStorage

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _connect(config) as conn:
        storage = SqliteAdStorage(conn)
        if product_id is None:
            links = storage.list_links()
        else:
            _get_product_or_exit(storage, product_id)
            links = storage.list_links_by_product(product_id)

    if not links:
        typer.echo("No affiliate links saved.")
        return

    for link in links:
        rate = f"{link.commission_rate:.0%}" if link.commission_rate is not None else "-"
        typer.echo(
            f"  #{link.link_id:<4} {link.status:<8} {link.platform.value:<10} "
            f"{rate:>4}  {link.product_name}"
        )
        typer.echo(f"        {link.tracking_url}")


@app.command("delete-link")
def delete_link(
    link_id: int = typer.Argument(..., help="Affiliate link id."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Delete an affiliate link."""
    from affilai.db.storage import SqliteAdStorage
    from affilai.errors import LinkNotFoundError
    from affilai.pipeline.generate import delete_affiliate_link

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        with _connect(config) as conn:
            delete_affiliate_link(SqliteAdStorage(conn), link_id)
    except LinkNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Deleted link {link_id}.")


@app.command("list-ads")
def list_ads(
    product_id: int = typer.Argument(..., help="Product id."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """List saved ads for a product, newest first."""
    from affilai.db.storage import SqliteAdStorage

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _connect(config) as conn:
        storage = SqliteAdStorage(conn)
        _get_product_or_exit(storage, product_id)
        ads = storage.list_by_product(product_id)

    if not ads:
        typer.echo(f"No ads saved for product {product_id}.")
        return

    for ad in ads:
        created = ad.created_at.strftime("%Y-%m-%d %H:%M") if ad.created_at else "-"
        score = f"{ad.performance_score:.3f}" if ad.performance_score is not None else "-"
        typer.echo(f"  #{ad.ad_id:<4} {created}  {ad.ad_format:<13} score={score}  {ad.headline}")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
