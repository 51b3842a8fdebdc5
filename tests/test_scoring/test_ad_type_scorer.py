"""
Tests for affilai/scoring/ad_type_scorer.py.

What we test
------------
Sub-scores:
  - category_score: case-insensitive substring rows, first row wins.
  - audience_score: generation band lookup, neutral 0.5 with no audience,
    ``None`` row for under-18 text.
  - trending_score: descending bands; email inverted.
  - platform_score: ordered presence rules.
FormatScore.total:
  - 30/35/20/15 weighted formula.
analyze_ad_type():
  - The three reference products pick video_script / story / email.
  - Confidence, alternatives (<= 3, distinct, winner excluded).
  - Reasoning clauses and the default sentence.
  - Deterministic output.
"""

from __future__ import annotations

import pytest

from affilai.models.product import Product
from affilai.models.recommendation import FormatScore
from affilai.scoring.ad_type_scorer import (
    analyze_ad_type,
    audience_score,
    category_score,
    platform_score,
    score_formats,
    trending_score,
)
from affilai.taxonomy.ad_formats import AdFormat
from affilai.taxonomy.platforms import Platform


# ── Helpers ────────────────────────────────────────────────────────────────────

def _product(**overrides) -> Product:
    fields = dict(
        name="Test Product",
        category="Pet Supplies",
        target_audience=None,
        trending_score=None,
    )
    fields.update(overrides)
    return Product(**fields)


# ── Sub-scores ─────────────────────────────────────────────────────────────────

class TestCategoryScore:
    def test_video_script_rows(self):
        assert category_score("Consumer Electronics", AdFormat.VIDEO_SCRIPT) == 1.0
        assert category_score("Fitness & Recovery", AdFormat.VIDEO_SCRIPT) == 0.8
        assert category_score("Home & Kitchen", AdFormat.VIDEO_SCRIPT) == 0.6
        assert category_score("Pet Supplies", AdFormat.VIDEO_SCRIPT) == 0.4

    def test_case_insensitive_substring(self):
        assert category_score("VIRAL GADGETS", AdFormat.SOCIAL_POST) == 0.95
        assert category_score("smart home tech", AdFormat.SOCIAL_POST) == 0.7

    def test_first_matching_row_wins(self):
        # "Health & Wellness" hits the fitness/wellness row of story.
        assert category_score("Health & Wellness", AdFormat.STORY) == 0.8
        # Email matches health before electronics.
        assert category_score("Health Electronics", AdFormat.EMAIL) == 0.9

    def test_defaults(self):
        expected = {
            AdFormat.SOCIAL_POST: 0.6, AdFormat.STORY: 0.5, AdFormat.VIDEO_SCRIPT: 0.4,
            AdFormat.CAROUSEL: 0.5, AdFormat.EMAIL: 0.5, AdFormat.SMS: 0.3,
        }
        for fmt, score in expected.items():
            assert category_score("Pet Supplies", fmt) == score


class TestAudienceScore:
    def test_story_by_generation(self):
        assert audience_score("Gen Z", AdFormat.STORY) == 1.0
        assert audience_score("Age 30-40", AdFormat.STORY) == 0.75
        assert audience_score("Gen X", AdFormat.STORY) == 0.4
        assert audience_score("Boomers", AdFormat.STORY) == 0.2

    def test_email_favours_older(self):
        assert audience_score("Age 55-70", AdFormat.EMAIL) == 1.0
        assert audience_score("Age 18-24", AdFormat.EMAIL) == 0.4

    def test_no_audience_is_neutral(self):
        for fmt in AdFormat:
            assert audience_score(None, fmt) == 0.5

    def test_under_18_uses_no_band_row(self):
        assert audience_score("Age 10-14", AdFormat.STORY) == 0.2
        assert audience_score("Age 10-14", AdFormat.EMAIL) == 0.4
        assert audience_score("Age 10-14", AdFormat.SMS) == 0.5


class TestTrendingScore:
    @pytest.mark.parametrize(
        "trending, expected", [(90, 1.0), (80, 1.0), (60, 0.8), (40, 0.6), (39, 0.4)]
    )
    def test_social_post_bands(self, trending, expected):
        assert trending_score(trending, AdFormat.SOCIAL_POST) == expected

    @pytest.mark.parametrize(
        "trending, expected", [(95, 0.6), (70, 0.6), (60, 0.75), (50, 0.75), (49, 0.85)]
    )
    def test_email_is_inverted(self, trending, expected):
        assert trending_score(trending, AdFormat.EMAIL) == expected

    def test_sms_is_flat(self):
        assert trending_score(0, AdFormat.SMS) == trending_score(100, AdFormat.SMS) == 0.6


class TestPlatformScore:
    def test_story_prefers_tiktok_then_instagram(self):
        assert platform_score({Platform.TIKTOK, Platform.INSTAGRAM}, AdFormat.STORY) == 0.95
        assert platform_score({Platform.INSTAGRAM}, AdFormat.STORY) == 0.85
        assert platform_score(set(), AdFormat.STORY) == 0.5

    def test_social_post_rewards_reach(self):
        three = {Platform.TIKTOK, Platform.AMAZON, Platform.YOUTUBE}
        assert platform_score(three, AdFormat.SOCIAL_POST) == 0.9
        assert platform_score({Platform.AMAZON}, AdFormat.SOCIAL_POST) == 0.75
        assert platform_score(set(), AdFormat.SOCIAL_POST) == 0.6

    def test_carousel_both_visual_platforms(self):
        both = {Platform.INSTAGRAM, Platform.PINTEREST}
        assert platform_score(both, AdFormat.CAROUSEL) == 1.0
        assert platform_score({Platform.PINTEREST}, AdFormat.CAROUSEL) == 0.85

    def test_email_amazon(self):
        assert platform_score({Platform.AMAZON}, AdFormat.EMAIL) == 0.8
        assert platform_score(set(), AdFormat.EMAIL) == 0.65


class TestFormatScoreTotal:
    def test_weighted_formula(self):
        s = FormatScore(
            ad_format=AdFormat.EMAIL,
            category_score=0.9,
            audience_score=1.0,
            trending_score=0.85,
            platform_score=0.65,
        )
        assert s.total == pytest.approx(0.27 + 0.35 + 0.17 + 0.0975)

    def test_score_formats_covers_all_in_order(self, electronics_product):
        scores = score_formats(electronics_product)
        assert [s.ad_format for s in scores] == list(AdFormat)


# ── analyze_ad_type ───────────────────────────────────────────────────────────

class TestAnalyzeAdType:
    def test_electronics_picks_video_script(self, electronics_product):
        rec = analyze_ad_type(electronics_product)
        assert rec.recommended_ad_type == AdFormat.VIDEO_SCRIPT
        assert rec.confidence_score == pytest.approx(0.85)
        assert rec.alternative_types == [
            AdFormat.SOCIAL_POST, AdFormat.EMAIL, AdFormat.CAROUSEL,
        ]

    def test_beauty_gen_z_picks_story(self, beauty_product):
        rec = analyze_ad_type(beauty_product)
        assert rec.recommended_ad_type == AdFormat.STORY
        assert rec.confidence_score == pytest.approx(0.9)
        assert rec.alternative_types == [
            AdFormat.CAROUSEL, AdFormat.SOCIAL_POST, AdFormat.VIDEO_SCRIPT,
        ]

    def test_boomer_wellness_picks_email(self, wellness_product):
        rec = analyze_ad_type(wellness_product)
        assert rec.recommended_ad_type == AdFormat.EMAIL
        assert rec.confidence_score == pytest.approx(0.8875)
        assert rec.alternative_types == [
            AdFormat.VIDEO_SCRIPT, AdFormat.SMS, AdFormat.SOCIAL_POST,
        ]

    def test_alternatives_invariants(self, beauty_product, wellness_product):
        for product in (beauty_product, wellness_product, _product()):
            rec = analyze_ad_type(product)
            assert len(rec.alternative_types) <= 3
            assert len(set(rec.alternative_types)) == len(rec.alternative_types)
            assert rec.recommended_ad_type not in rec.alternative_types
            assert 0.0 <= rec.confidence_score <= 1.0

    def test_scores_are_ranked_descending(self, wellness_product):
        rec = analyze_ad_type(wellness_product)
        totals = [s.total for s in rec.scores]
        assert totals == sorted(totals, reverse=True)
        assert rec.scores[0].ad_format == rec.recommended_ad_type
        assert len(rec.scores) == len(AdFormat)

    def test_deterministic(self, beauty_product):
        assert analyze_ad_type(beauty_product) == analyze_ad_type(beauty_product)


class TestReasoning:
    def test_category_and_audience_clauses(self, electronics_product):
        rec = analyze_ad_type(electronics_product)
        assert rec.reasoning == (
            "The 'Consumer Electronics' category aligns strongly with Video Script format. "
            "Target audience 'Age 30-45' responds well to this format."
        )

    def test_low_trending_trust_clause(self, wellness_product):
        rec = analyze_ad_type(wellness_product)
        assert rec.reasoning.endswith(
            "This format builds trust for products needing education."
        )
        assert "Email format" in rec.reasoning

    def test_high_trending_viral_clause(self, beauty_product):
        viral = beauty_product.model_copy(update={"trending_score": 90})
        rec = analyze_ad_type(viral)
        assert rec.recommended_ad_type == AdFormat.STORY
        assert "High trending score suggests viral potential" in rec.reasoning

    def test_platform_clause_names_platforms(self, beauty_product):
        listed = beauty_product.model_copy(
            update={"tiktok_product_id": "tt-1", "instagram_product_id": "ig-1"}
        )
        rec = analyze_ad_type(listed)
        assert rec.recommended_ad_type == AdFormat.STORY
        assert rec.confidence_score == pytest.approx(0.9675)
        assert (
            "Available on TikTok, Instagram which natively supports this format"
            in rec.reasoning
        )

    def test_no_audience_skips_audience_clause(self):
        rec = analyze_ad_type(_product(category="Consumer Electronics"))
        assert "Target audience" not in rec.reasoning

    def test_default_sentence_when_no_clause(self):
        rec = analyze_ad_type(_product(name="Dog Bed"))
        assert rec.recommended_ad_type == AdFormat.EMAIL
        assert rec.confidence_score == pytest.approx(0.5725)
        assert rec.reasoning == (
            "Email selected as the balanced choice for 'Dog Bed' with confidence 57%"
        )
