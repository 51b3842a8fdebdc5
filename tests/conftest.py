"""
Shared pytest fixtures for the affilai test suite.

Provides:
  - ``in_memory_db``: a fresh in-memory SQLite connection with the schema
    applied. Created anew for each test that requests it.
  - ``storage``: a ``SqliteAdStorage`` over ``in_memory_db``.
  - ``fixed_clock``: a zero-arg clock pinned to 2026-01-01T00:00:00Z.
  - Sample products covering the three reference scoring scenarios.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Callable, Generator

import pytest

from affilai.db.schema import apply_schema
from affilai.db.storage import SqliteAdStorage
from affilai.models.product import Product

FIXED_NOW = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
FIXED_TRACKING_ID = "afl_1767225600000"


# ── Database fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the schema applied.

    Foreign key enforcement is ON. Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def storage(in_memory_db: sqlite3.Connection) -> SqliteAdStorage:
    return SqliteAdStorage(in_memory_db)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


# ── Sample products ───────────────────────────────────────────────────────────

@pytest.fixture
def electronics_product() -> Product:
    """Consumer Electronics, millennial audience, mid trending. Wins video_script."""
    return Product(
        name="Noise Cancelling Earbuds",
        category="Consumer Electronics",
        description="Wireless earbuds with adaptive noise cancelling.",
        price_range="$100-$150",
        target_audience="Age 30-45",
        trending_score=60,
    )


@pytest.fixture
def beauty_product() -> Product:
    """Beauty & Skincare, Gen Z, trending 75. Wins story."""
    return Product(
        name="Snail Mucin Serum",
        category="Beauty & Skincare",
        description="Hydrating essence for glass skin.",
        price_range="$20-30",
        target_audience="Gen Z, Age 18-24",
        trending_score=75,
    )


@pytest.fixture
def wellness_product() -> Product:
    """Health & Wellness, Boomers, low trending. Wins email."""
    return Product(
        name="Joint Support Supplement",
        category="Health & Wellness",
        description="Glucosamine and turmeric formula.",
        price_range="$25-40",
        target_audience="Age 55-70, Boomers",
        trending_score=40,
    )


@pytest.fixture
def wearable_product() -> Product:
    """Premium-tier wearable that ranks YouTube first in discovery."""
    return Product(
        name="Smart Ring",
        category="Wearable Health Technology",
        description="Sleep and recovery tracking ring.",
        price_range="$300-400",
        target_audience="Age 25-45",
        trending_score=95,
    )
