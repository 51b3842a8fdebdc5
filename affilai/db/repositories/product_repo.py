"""
Repository for promotable products.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from affilai.db.repositories.base import BaseRepository
from affilai.models.product import Product

logger = logging.getLogger(__name__)

_COLUMNS = (
    "name", "category", "description", "price_range", "target_audience",
    "trending_score", "notes", "image_url", "product_url", "amazon_asin",
    "tiktok_product_id", "instagram_product_id", "youtube_video_id",
    "pinterest_pin_id",
)


class ProductRepository(BaseRepository):
    """Read/write access to the ``products`` table."""

    def insert(self, product: Product) -> int:
        """Insert a product and return its new ``product_id``.

        ``product.product_id`` is ignored; the database assigns the key.
        """
        product_id = self.insert_row(
            "products", {col: getattr(product, col) for col in _COLUMNS}
        )
        logger.debug("Inserted product %d (%s)", product_id, product.name)
        return product_id

    def get_by_id(self, product_id: int) -> Optional[Product]:
        row = self.fetchone("SELECT * FROM products WHERE product_id = ?;", (product_id,))
        return _row_to_product(row) if row else None

    def list_all(self) -> list[Product]:
        """Return every product ordered by ``product_id``."""
        rows = self.fetchall("SELECT * FROM products ORDER BY product_id;")
        return [_row_to_product(r) for r in rows]

    def count(self) -> int:
        row = self.fetchone("SELECT COUNT(*) AS n FROM products;")
        assert row is not None
        return int(row["n"])


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        product_id=row["product_id"],
        **{col: row[col] for col in _COLUMNS},
    )
