"""
Repository for affiliate tracking links.

After insertion a link changes only through ``refresh()``, which rewrites
its program fields when discovery is re-run.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from affilai.db.repositories.base import BaseRepository
from affilai.models.ad_copy import AffiliateLink
from affilai.utils.time_utils import parse_db_timestamp

logger = logging.getLogger(__name__)


class AffiliateLinkRepository(BaseRepository):
    """Read/write access to the ``affiliate_links`` table."""

    def insert(self, link: AffiliateLink) -> int:
        """Persist ``link`` and return the new ``link_id``."""
        return self.insert_row(
            "affiliate_links",
            {
                "product_id":      link.product_id,
                "product_name":    link.product_name,
                "platform":        link.platform.value,
                "program_name":    link.program_name,
                "commission_rate": link.commission_rate,
                "cookie_duration": link.cookie_duration,
                "tracking_url":    link.tracking_url,
                "destination_url": link.destination_url,
                "status":          link.status,
            },
        )

    def get_by_id(self, link_id: int) -> Optional[AffiliateLink]:
        row = self.fetchone("SELECT * FROM affiliate_links WHERE link_id = ?;", (link_id,))
        return _row_to_link(row) if row else None

    def list_by_product(self, product_id: int) -> list[AffiliateLink]:
        """Return links for ``product_id``, newest first."""
        rows = self.fetchall(
            """
            SELECT * FROM affiliate_links
            WHERE product_id = ?
            ORDER BY created_at DESC, link_id DESC;
            """,
            (product_id,),
        )
        return [_row_to_link(r) for r in rows]

    def list_all(self) -> list[AffiliateLink]:
        rows = self.fetchall(
            "SELECT * FROM affiliate_links ORDER BY created_at DESC, link_id DESC;"
        )
        return [_row_to_link(r) for r in rows]

    def refresh(self, link_id: int, link: AffiliateLink) -> bool:
        """Overwrite the program fields of ``link_id`` from ``link``.

        The link is reactivated and ``updated_at`` stamped. Product id,
        product name and ``created_at`` are kept. Returns ``False`` if the
        link does not exist.
        """
        return self.affects_row(
            """
            UPDATE affiliate_links
            SET platform = ?, program_name = ?, commission_rate = ?,
                cookie_duration = ?, tracking_url = ?, destination_url = ?,
                status = 'active',
                updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
            WHERE link_id = ?;
            """,
            (
                link.platform.value,
                link.program_name,
                link.commission_rate,
                link.cookie_duration,
                link.tracking_url,
                link.destination_url,
                link_id,
            ),
        )

    def delete(self, link_id: int) -> bool:
        deleted = self.affects_row("DELETE FROM affiliate_links WHERE link_id = ?;", (link_id,))
        if deleted:
            logger.info("Deleted affiliate link %d", link_id)
        return deleted


def _row_to_link(row: sqlite3.Row) -> AffiliateLink:
    return AffiliateLink(
        link_id=row["link_id"],
        product_id=row["product_id"],
        product_name=row["product_name"],
        platform=row["platform"],
        program_name=row["program_name"],
        commission_rate=row["commission_rate"],
        cookie_duration=row["cookie_duration"],
        tracking_url=row["tracking_url"],
        destination_url=row["destination_url"],
        status=row["status"],
        created_at=parse_db_timestamp(row["created_at"]),
        updated_at=parse_db_timestamp(row["updated_at"]),
    )
