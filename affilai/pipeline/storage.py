"""
Storage interface consumed by the generation flows.

The flows never open connections or manage transactions; they talk to an
``AdStorage``. ``affilai.db.storage.SqliteAdStorage`` is the SQLite
implementation; tests may pass any object with these methods.
"""

from __future__ import annotations

from typing import Optional, Protocol

from affilai.models.ad_copy import AffiliateLink, GeneratedAdCopy
from affilai.models.product import Product


class AdStorage(Protocol):
    def get_product(self, product_id: int) -> Optional[Product]:
        """Return the product, or ``None`` if it does not exist."""

    def list_products(self) -> list[Product]:
        """Return every stored product."""

    def save_ad(self, ad: GeneratedAdCopy) -> GeneratedAdCopy:
        """Persist ``ad`` and return it with ``ad_id`` and ``created_at`` set."""

    def save_link(self, link: AffiliateLink) -> AffiliateLink:
        """Persist ``link`` and return it with ``link_id`` and ``created_at`` set."""

    def list_by_product(self, product_id: int) -> list[GeneratedAdCopy]:
        """Return the product's ads, newest first."""

    def list_links_by_product(self, product_id: int) -> list[AffiliateLink]:
        """Return the product's affiliate links, newest first."""

    def get_link(self, link_id: int) -> Optional[AffiliateLink]:
        """Return the link, or ``None`` if it does not exist."""

    def list_links(self) -> list[AffiliateLink]:
        """Return every affiliate link, newest first."""

    def refresh_link(self, link_id: int, link: AffiliateLink) -> Optional[AffiliateLink]:
        """Rewrite ``link_id``'s program fields from ``link``; ``None`` if missing."""

    def delete_link(self, link_id: int) -> bool:
        """Delete the link; ``False`` if it did not exist."""
