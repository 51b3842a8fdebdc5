"""
Product seed loader: JSON array → ``products`` table.

The file holds a JSON array of product objects using ``Product`` field
names. Every entry is validated through ``Product`` before anything is
written, so a bad entry aborts the whole import.

Usage::

    from affilai.db.seed import load_products_json, read_products_json

    products = read_products_json(Path("config/products.json"))
    with get_connection(db_path) as conn:
        ids = load_products_json(conn, Path("config/products.json"))
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from affilai.db.repositories.product_repo import ProductRepository
from affilai.models.product import Product

logger = logging.getLogger(__name__)


def read_products_json(path: Path) -> list[Product]:
    """Parse and validate a products JSON file without touching the database.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON array, or an entry fails
            validation (the message names the entry index).
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of products.")

    products: list[Product] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: entry {index} is not an object.")
        entry = {k: v for k, v in entry.items() if k != "product_id"}
        try:
            products.append(Product(**entry))
        except ValidationError as exc:
            raise ValueError(f"{path}: entry {index} is invalid: {exc}") from exc
    return products


def load_products_json(conn: sqlite3.Connection, path: Path) -> list[int]:
    """Validate ``path`` and insert every product. Returns the new ids in file order."""
    products = read_products_json(path)
    repo = ProductRepository(conn)
    ids = [repo.insert(p) for p in products]
    logger.info("Imported %d products from %s", len(ids), path)
    return ids
