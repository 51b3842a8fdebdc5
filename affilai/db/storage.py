"""
SQLite-backed ``AdStorage``.

Wraps the three repositories around a single connection. The caller owns
the connection and its transaction (see ``get_connection()``).

Usage::

    with connect_from_config(cfg.database) as conn:
        storage = SqliteAdStorage(conn)
        result  = generate_ad_for_product(storage, product_id=1)
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from affilai.db.repositories.ad_copy_repo import AdCopyRepository
from affilai.db.repositories.link_repo import AffiliateLinkRepository
from affilai.db.repositories.product_repo import ProductRepository
from affilai.models.ad_copy import AffiliateLink, GeneratedAdCopy
from affilai.models.product import Product

logger = logging.getLogger(__name__)


class SqliteAdStorage:
    """``AdStorage`` over the ``products``, ``ad_copies`` and ``affiliate_links`` tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.products = ProductRepository(conn)
        self.ads      = AdCopyRepository(conn)
        self.links    = AffiliateLinkRepository(conn)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.products.get_by_id(product_id)

    def list_products(self) -> list[Product]:
        return self.products.list_all()

    def save_ad(self, ad: GeneratedAdCopy) -> GeneratedAdCopy:
        ad_id = self.ads.insert(ad)
        saved = self.ads.get_by_id(ad_id)
        assert saved is not None
        return saved

    def save_link(self, link: AffiliateLink) -> AffiliateLink:
        link_id = self.links.insert(link)
        saved = self.links.get_by_id(link_id)
        assert saved is not None
        return saved

    def list_by_product(self, product_id: int) -> list[GeneratedAdCopy]:
        return self.ads.list_by_product(product_id)

    def list_links_by_product(self, product_id: int) -> list[AffiliateLink]:
        return self.links.list_by_product(product_id)

    def get_link(self, link_id: int) -> Optional[AffiliateLink]:
        return self.links.get_by_id(link_id)

    def list_links(self) -> list[AffiliateLink]:
        return self.links.list_all()

    def refresh_link(self, link_id: int, link: AffiliateLink) -> Optional[AffiliateLink]:
        if not self.links.refresh(link_id, link):
            return None
        return self.links.get_by_id(link_id)

    def delete_link(self, link_id: int) -> bool:
        return self.links.delete(link_id)
