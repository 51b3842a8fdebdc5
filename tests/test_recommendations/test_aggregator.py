"""
Tests for affilai/recommendations/aggregator.py.

What we test
------------
suggested_tone():
  - "18-25"/"18-30" casual, "45"/"50" professional, else friendly.
competition_level():
  - Exact category table, "low" otherwise.
estimate_engagement():
  - 60/40 blend, capped at 1.0.
build_market_analysis():
  - Recommended platform is discovery's top result.
  - Fallback platform and 0.5 match term when discovery is empty.
  - Ad type comes from the ad-type scorer.
  - Missing product fields use the neutral defaults.
"""

from __future__ import annotations

import pytest

from affilai.models.product import Product
from affilai.recommendations.aggregator import (
    build_market_analysis,
    competition_level,
    discover_for_product,
    estimate_engagement,
    suggested_tone,
)
from affilai.taxonomy.ad_formats import AdFormat
from affilai.taxonomy.platforms import Platform


class TestSuggestedTone:
    @pytest.mark.parametrize(
        "audience, expected",
        [
            ("Age 18-25", "casual and trendy"),
            ("Age 18-30, students", "casual and trendy"),
            ("Age 25-45", "professional and trustworthy"),
            ("Age 50-65", "professional and trustworthy"),
            ("Gen Z, Age 18-24", "friendly and engaging"),
            ("Millennials", "friendly and engaging"),
        ],
    )
    def test_substring_rules(self, audience, expected):
        assert suggested_tone(audience) == expected


class TestCompetitionLevel:
    @pytest.mark.parametrize(
        "category, expected",
        [
            ("Beauty & Skincare", "high"),
            ("Fashion & Apparel", "high"),
            ("Consumer Electronics", "medium"),
            ("Wearable Health Technology", "medium"),
            ("Health & Wellness", "medium"),
            ("Fitness & Recovery", "medium"),
            ("Home & Kitchen", "low"),
            ("beauty & skincare", "low"),
        ],
    )
    def test_table(self, category, expected):
        assert competition_level(category) == expected


class TestEstimateEngagement:
    def test_blend(self):
        assert estimate_engagement(75, 0.97) == pytest.approx(0.45 + 0.388)

    def test_capped_at_one(self):
        assert estimate_engagement(100, 1.0) == pytest.approx(1.0)
        assert estimate_engagement(100, 1.0) <= 1.0


class TestBuildMarketAnalysis:
    def test_wearable(self, wearable_product):
        analysis = build_market_analysis(wearable_product)
        assert analysis.product_name == "Smart Ring"
        assert analysis.recommended_platform == Platform.YOUTUBE
        assert analysis.platforms[0].platform == Platform.YOUTUBE
        assert analysis.suggested_tone == "professional and trustworthy"
        assert analysis.competition_level == "medium"
        assert analysis.estimated_engagement_score == pytest.approx(0.57 + 0.4)

    def test_beauty(self, beauty_product):
        analysis = build_market_analysis(beauty_product)
        assert analysis.recommended_platform == Platform.TIKTOK
        assert analysis.recommended_ad_type == AdFormat.STORY
        assert analysis.ad_type.recommended_ad_type == AdFormat.STORY
        assert analysis.competition_level == "high"
        assert analysis.target_demographic == "Gen Z, Age 18-24"
        assert analysis.key_selling_points[-1] == "Snail Mucin Serum loved by thousands"
        assert analysis.estimated_engagement_score == pytest.approx(0.838)

    def test_empty_discovery_uses_fallback(self, wellness_product):
        analysis = build_market_analysis(wellness_product, min_score=0.95)
        assert analysis.platforms == []
        assert analysis.recommended_platform == Platform.INSTAGRAM
        # 0.6 * 0.40 + 0.4 * 0.5
        assert analysis.estimated_engagement_score == pytest.approx(0.44)
        assert analysis.recommended_ad_type == AdFormat.EMAIL

    def test_custom_fallback_platform(self, wellness_product):
        analysis = build_market_analysis(
            wellness_product, fallback_platform=Platform.FACEBOOK, min_score=0.95
        )
        assert analysis.recommended_platform == Platform.FACEBOOK

    def test_limit_passed_through(self, beauty_product):
        analysis = build_market_analysis(beauty_product, limit=1)
        assert len(analysis.platforms) == 1

    def test_missing_fields_use_defaults(self):
        product = Product(name="Mystery Box", category="Misc")
        analysis = build_market_analysis(product)
        assert analysis.target_demographic == "Age 25-45"
        assert analysis.suggested_tone == "professional and trustworthy"
        assert analysis.competition_level == "low"

    def test_discover_for_product_matches_explicit_defaults(self):
        bare = Product(name="Mystery Box", category="Misc")
        explicit = Product(
            name="Mystery Box",
            category="Misc",
            target_audience="Age 25-45",
            trending_score=50,
            price_range="$50-$100",
        )
        assert discover_for_product(bare) == discover_for_product(explicit)
