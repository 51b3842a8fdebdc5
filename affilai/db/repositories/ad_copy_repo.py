"""
Repository for generated ad copy.

Rows are insert-only: regenerating copy for a product adds a new row.
``platform_specific_data`` is stored as a JSON object string.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Optional

from affilai.db.repositories.base import BaseRepository
from affilai.models.ad_copy import GeneratedAdCopy
from affilai.utils.time_utils import parse_db_timestamp

logger = logging.getLogger(__name__)


class AdCopyRepository(BaseRepository):
    """Read/write access to the ``ad_copies`` table."""

    def insert(self, ad: GeneratedAdCopy) -> int:
        """Persist ``ad`` and return the new ``ad_id``.

        Raises:
            sqlite3.IntegrityError: If ``ad.product_id`` does not exist.
        """
        return self.insert_row(
            "ad_copies",
            {
                "product_id":             ad.product_id,
                "variation_name":         ad.variation_name,
                "ad_format":              ad.ad_format,
                "headline":               ad.headline,
                "body_text":              ad.body_text,
                "cta":                    ad.cta,
                "platform_specific_data": json.dumps(ad.platform_specific_data, sort_keys=True),
                "performance_score":      ad.performance_score,
            },
        )

    def get_by_id(self, ad_id: int) -> Optional[GeneratedAdCopy]:
        row = self.fetchone("SELECT * FROM ad_copies WHERE ad_id = ?;", (ad_id,))
        return _row_to_ad(row) if row else None

    def list_by_product(self, product_id: int) -> list[GeneratedAdCopy]:
        """Return all ads for ``product_id``, newest first."""
        rows = self.fetchall(
            """
            SELECT * FROM ad_copies
            WHERE product_id = ?
            ORDER BY created_at DESC, ad_id DESC;
            """,
            (product_id,),
        )
        return [_row_to_ad(r) for r in rows]


def _row_to_ad(row: sqlite3.Row) -> GeneratedAdCopy:
    return GeneratedAdCopy(
        ad_id=row["ad_id"],
        product_id=row["product_id"],
        variation_name=row["variation_name"],
        ad_format=row["ad_format"],
        headline=row["headline"],
        body_text=row["body_text"],
        cta=row["cta"],
        platform_specific_data=json.loads(row["platform_specific_data"] or "{}"),
        performance_score=row["performance_score"],
        created_at=parse_db_timestamp(row["created_at"]),
    )
