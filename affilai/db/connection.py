"""
SQLite connection management.

``get_connection()`` yields a connection that:
  - enforces foreign keys, so ad copies and links cannot outlive their product,
  - uses WAL journal mode unless disabled,
  - waits ``busy_timeout_ms`` on lock contention,
  - returns ``sqlite3.Row`` rows,
  - commits on clean exit and rolls back on exception.

``connect_from_config()`` is the same context manager driven by a
``DatabaseConfig``; the CLI opens every connection through it.

Usage::

    from affilai.db.connection import connect_from_config

    with connect_from_config(cfg.database) as conn:
        ProductRepository(conn).list_all()
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Optional

if TYPE_CHECKING:
    from affilai.config import DatabaseConfig

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def _apply_pragmas(conn: sqlite3.Connection, wal_mode: bool, busy_timeout_ms: int) -> None:
    # Must run before any DML/DDL.
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms};")
    if wal_mode and conn.execute("PRAGMA journal_mode = WAL;").fetchone()[0] != "wal":
        logger.debug("WAL journal mode not available; keeping default journal")


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager yielding a configured SQLite connection.

    The database file and its parent directories are created if missing.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.
        wal_mode: Enable WAL journal mode.
        busy_timeout_ms: Milliseconds to wait when the database is locked.

    Yields:
        An open, configured ``sqlite3.Connection``.
    """
    if db_path != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row
    logger.debug("Opened database %s", db_path)

    try:
        _apply_pragmas(conn, wal_mode, busy_timeout_ms)
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def connect_from_config(
    config: "DatabaseConfig",
    db_path: Optional[str] = None,
):
    """``get_connection()`` using ``config``; ``db_path`` overrides ``config.db_path``."""
    return get_connection(
        db_path or config.db_path,
        wal_mode=config.wal_mode,
        busy_timeout_ms=config.busy_timeout_ms,
    )
