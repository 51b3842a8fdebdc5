"""
SQLite schema DDL.

Every statement uses ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent.

Table creation order respects foreign keys:
  1. products          (no FKs)
  2. ad_copies         (→ products, cascade delete)
  3. affiliate_links   (→ products, cascade delete)
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_PRODUCTS = """
CREATE TABLE IF NOT EXISTS products (
    product_id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name                  TEXT    NOT NULL,
    category              TEXT    NOT NULL,
    description           TEXT,
    price_range           TEXT,
    target_audience       TEXT,
    trending_score        INTEGER CHECK (trending_score IS NULL OR trending_score BETWEEN 0 AND 100),
    notes                 TEXT,
    image_url             TEXT,
    product_url           TEXT,
    amazon_asin           TEXT,
    tiktok_product_id     TEXT,
    instagram_product_id  TEXT,
    youtube_video_id      TEXT,
    pinterest_pin_id      TEXT,
    created_at            TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);
"""

_DDL_AD_COPIES = """
CREATE TABLE IF NOT EXISTS ad_copies (
    ad_id                   INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id              INTEGER NOT NULL REFERENCES products(product_id) ON DELETE CASCADE,
    variation_name          TEXT,
    ad_format               TEXT    NOT NULL,
    headline                TEXT    NOT NULL,
    body_text               TEXT    NOT NULL,
    cta                     TEXT    NOT NULL,
    platform_specific_data  TEXT    NOT NULL DEFAULT '{}',
    performance_score       REAL,
    created_at              TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
CREATE INDEX IF NOT EXISTS idx_ad_copies_product ON ad_copies(product_id);
"""

_DDL_AFFILIATE_LINKS = """
CREATE TABLE IF NOT EXISTS affiliate_links (
    link_id          INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id       INTEGER NOT NULL REFERENCES products(product_id) ON DELETE CASCADE,
    product_name     TEXT    NOT NULL,
    platform         TEXT    NOT NULL,
    program_name     TEXT    NOT NULL,
    commission_rate  REAL,
    cookie_duration  INTEGER,
    tracking_url     TEXT    NOT NULL,
    destination_url  TEXT    NOT NULL,
    status           TEXT    NOT NULL DEFAULT 'active'
                     CHECK (status IN ('active', 'expired', 'invalid')),
    created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    updated_at       TEXT
);
CREATE INDEX IF NOT EXISTS idx_affiliate_links_product ON affiliate_links(product_id);
CREATE INDEX IF NOT EXISTS idx_affiliate_links_status ON affiliate_links(status);
CREATE INDEX IF NOT EXISTS idx_affiliate_links_platform ON affiliate_links(platform);
"""

_ALL_DDL = [_DDL_PRODUCTS, _DDL_AD_COPIES, _DDL_AFFILIATE_LINKS]

ALL_TABLE_NAMES = ["products", "ad_copies", "affiliate_links"]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply all DDL statements to ``conn``. Safe to call repeatedly."""
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d tables, indexes created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return the table names present in the database, sorted."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]
