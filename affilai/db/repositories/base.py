"""
Base repository for the affilai tables.

Every affilai table has an integer ``INTEGER PRIMARY KEY AUTOINCREMENT``
key and a database-stamped ``created_at``, so inserts only ever name the
payload columns. ``insert_row`` builds that statement from a column dict
and hands back the new key; ``affects_row`` covers single-row UPDATE and
DELETE by key.

The caller owns the connection and its transaction (see
``get_connection()``).
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...]


class BaseRepository:
    """SQL helpers shared by the product, ad copy and link repositories.

    Attributes:
        conn: The active ``sqlite3.Connection``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        logger.debug("SQL: %s | params: %s", " ".join(sql.split()), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def insert_row(self, table: str, values: dict[str, Any]) -> int:
        """INSERT ``values`` (column → value) into ``table``; return the new key."""
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        cursor = self.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders});",
            tuple(values.values()),
        )
        assert cursor.lastrowid is not None
        return int(cursor.lastrowid)

    def affects_row(self, sql: str, params: Params = ()) -> bool:
        """Run an UPDATE/DELETE and report whether any row matched."""
        return self.execute(sql, params).rowcount > 0
