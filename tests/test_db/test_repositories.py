"""Tests for repository round-trip operations using in-memory SQLite."""

from __future__ import annotations

import sqlite3

import pytest

from affilai.db.repositories.ad_copy_repo import AdCopyRepository
from affilai.db.repositories.link_repo import AffiliateLinkRepository
from affilai.db.repositories.product_repo import ProductRepository
from affilai.models.ad_copy import AffiliateLink, GeneratedAdCopy
from affilai.models.product import Product
from affilai.taxonomy.platforms import Platform


# ── Helpers ────────────────────────────────────────────────────────────────────

def _insert_product(conn, **overrides) -> int:
    fields = dict(
        name="Snail Mucin Serum",
        category="Beauty & Skincare",
        trending_score=75,
        tiktok_product_id="tt-1",
    )
    fields.update(overrides)
    return ProductRepository(conn).insert(Product(**fields))


def _ad(product_id: int, headline: str = "Headline") -> GeneratedAdCopy:
    return GeneratedAdCopy(
        product_id=product_id,
        variation_name="Snail Mucin Serum - story Ad",
        ad_format="story",
        headline=headline,
        body_text="Body",
        cta="Swipe Up",
        platform_specific_data={"target_platform": "tiktok", "suggested_tone": "casual"},
        performance_score=0.838,
    )


def _link(product_id: int, platform: Platform = Platform.TIKTOK) -> AffiliateLink:
    return AffiliateLink(
        product_id=product_id,
        product_name="Snail Mucin Serum",
        platform=platform,
        program_name="TikTok Shop Creator Program",
        commission_rate=0.12,
        cookie_duration=14,
        tracking_url="https://affiliate.tiktok.com/x?ref=afl_1",
        destination_url="https://affiliate.tiktok.com/x",
    )


# ── Products ───────────────────────────────────────────────────────────────────

class TestProductRepository:
    def test_insert_and_get(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        product = ProductRepository(in_memory_db).get_by_id(pid)
        assert product is not None
        assert product.product_id == pid
        assert product.name == "Snail Mucin Serum"
        assert product.trending_score == 75
        assert product.has_platform(Platform.TIKTOK)
        assert not product.has_platform(Platform.AMAZON)

    def test_get_missing_returns_none(self, in_memory_db):
        assert ProductRepository(in_memory_db).get_by_id(999) is None

    def test_list_all_in_id_order(self, in_memory_db):
        first = _insert_product(in_memory_db, name="A")
        second = _insert_product(in_memory_db, name="B")
        products = ProductRepository(in_memory_db).list_all()
        assert [p.product_id for p in products] == [first, second]
        assert ProductRepository(in_memory_db).count() == 2

    def test_trending_score_check_constraint(self, in_memory_db):
        with pytest.raises(sqlite3.IntegrityError):
            in_memory_db.execute(
                "INSERT INTO products (name, category, trending_score) VALUES ('X', 'Y', 101);"
            )


# ── Ad copies ──────────────────────────────────────────────────────────────────

class TestAdCopyRepository:
    def test_insert_and_get(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        repo = AdCopyRepository(in_memory_db)
        ad_id = repo.insert(_ad(pid))

        ad = repo.get_by_id(ad_id)
        assert ad is not None
        assert ad.ad_id == ad_id
        assert ad.platform_specific_data == {
            "target_platform": "tiktok", "suggested_tone": "casual",
        }
        assert ad.performance_score == pytest.approx(0.838)
        assert ad.created_at is not None
        assert ad.created_at.tzinfo is not None

    def test_list_by_product_newest_first(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        other = _insert_product(in_memory_db, name="Other")
        repo = AdCopyRepository(in_memory_db)
        first = repo.insert(_ad(pid, "First"))
        second = repo.insert(_ad(pid, "Second"))
        repo.insert(_ad(other, "Elsewhere"))

        ads = repo.list_by_product(pid)
        assert [a.ad_id for a in ads] == [second, first]

    def test_unknown_product_violates_fk(self, in_memory_db):
        with pytest.raises(sqlite3.IntegrityError):
            AdCopyRepository(in_memory_db).insert(_ad(999))

    def test_deleting_product_cascades(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        repo = AdCopyRepository(in_memory_db)
        repo.insert(_ad(pid))
        in_memory_db.execute("DELETE FROM products WHERE product_id = ?;", (pid,))
        assert repo.list_by_product(pid) == []


# ── Affiliate links ────────────────────────────────────────────────────────────

class TestAffiliateLinkRepository:
    def test_insert_and_get(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        repo = AffiliateLinkRepository(in_memory_db)
        link_id = repo.insert(_link(pid))

        link = repo.get_by_id(link_id)
        assert link is not None
        assert link.platform == Platform.TIKTOK
        assert link.status == "active"
        assert link.cookie_duration == 14

    def test_list_by_product_and_all(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        other = _insert_product(in_memory_db, name="Other")
        repo = AffiliateLinkRepository(in_memory_db)
        a = repo.insert(_link(pid))
        b = repo.insert(_link(pid, Platform.AMAZON))
        c = repo.insert(_link(other))

        assert [l.link_id for l in repo.list_by_product(pid)] == [b, a]
        assert [l.link_id for l in repo.list_all()] == [c, b, a]

    def test_refresh_rewrites_program_and_reactivates(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        repo = AffiliateLinkRepository(in_memory_db)
        link_id = repo.insert(_link(pid))
        in_memory_db.execute(
            "UPDATE affiliate_links SET status = 'expired' WHERE link_id = ?;", (link_id,)
        )
        before = repo.get_by_id(link_id)
        assert before.updated_at is None

        replacement = _link(pid, Platform.AMAZON).model_copy(update={
            "program_name": "Amazon Associates",
            "commission_rate": 0.10,
            "cookie_duration": 24,
            "tracking_url": "https://www.amazon.com/dp/XXXXX?ref=afl_2",
            "destination_url": "https://affiliate-program.amazon.com",
        })
        assert repo.refresh(link_id, replacement) is True

        after = repo.get_by_id(link_id)
        assert after.platform == Platform.AMAZON
        assert after.program_name == "Amazon Associates"
        assert after.commission_rate == pytest.approx(0.10)
        assert after.cookie_duration == 24
        assert after.status == "active"
        assert after.updated_at is not None
        assert after.created_at == before.created_at
        assert after.product_name == before.product_name

    def test_refresh_missing_link(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        assert AffiliateLinkRepository(in_memory_db).refresh(999, _link(pid)) is False

    def test_invalid_status_rejected(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        link_id = AffiliateLinkRepository(in_memory_db).insert(_link(pid))
        with pytest.raises(sqlite3.IntegrityError):
            in_memory_db.execute(
                "UPDATE affiliate_links SET status = 'paused' WHERE link_id = ?;", (link_id,)
            )

    def test_delete(self, in_memory_db):
        pid = _insert_product(in_memory_db)
        repo = AffiliateLinkRepository(in_memory_db)
        link_id = repo.insert(_link(pid))

        assert repo.delete(link_id) is True
        assert repo.get_by_id(link_id) is None
        assert repo.delete(link_id) is False
