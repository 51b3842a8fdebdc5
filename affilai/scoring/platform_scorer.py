"""
Platform scorer: ranks affiliate distribution platforms for a product.

Score formula (weighted sum, range 0-1)
---------------------------------------
    audience_match = (
        age_alignment   * 0.50   # platform's core demographic vs. audience
        + category_fit  * 0.25   # how well the category sells there
        + trending_fit  * 0.15   # how much the platform rewards virality
        + price_fit     * 0.10   # price tier vs. typical basket
    )

Every sub-score is a lookup in one of the hand-authored tables below.
Amazon is flat and high on every table (universal reach), so it almost
always clears the floor.

Selection
---------
    1. Score the five platforms in ``SCORED_PLATFORMS`` order.
    2. Keep scores strictly above ``min_score`` (default 0.3).
    3. Sort by audience_match descending; equal scores keep enumeration order.
    4. Truncate to ``limit`` (default 5).

An empty list is a valid answer, not an error.

This is a deterministic stand-in for a model-backed discovery call. Keep
the ``discover_platforms`` signature stable so a model-backed scorer can
replace it without touching the aggregator or the synthesizer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from affilai.models.recommendation import (
    CONFIDENCE_FLOOR,
    CONFIDENCE_SPAN,
    PlatformRecommendation,
)
from affilai.scoring.attributes import (
    AgeRange,
    PriceTier,
    extract_age_range,
    parse_price_tier,
)
from affilai.taxonomy.platforms import (
    PLATFORM_PROFILES,
    SCORED_PLATFORMS,
    Platform,
    commission_rate_for,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 0.3
DEFAULT_LIMIT     = 5

# ── Age alignment: (lo, hi, score) inclusive bands on average age ────────────
# ``None`` leaves a side unbounded. First matching band wins.

_AGE_BANDS: dict[Platform, list[tuple[Optional[int], Optional[int], float]]] = {
    Platform.TIKTOK:    [(18, 30, 1.0), (None, 34, 0.8), (None, 39, 0.5)],
    Platform.INSTAGRAM: [(22, 40, 1.0), (18, 45, 0.8), (None, 49, 0.6)],
    Platform.AMAZON:    [],
    Platform.YOUTUBE:   [(25, 55, 1.0), (18, None, 0.7)],
    Platform.PINTEREST: [(30, 50, 1.0), (25, 55, 0.8)],
}

_AGE_DEFAULT: dict[Platform, float] = {
    Platform.TIKTOK:    0.2,
    Platform.INSTAGRAM: 0.3,
    Platform.AMAZON:    0.9,
    Platform.YOUTUBE:   0.4,
    Platform.PINTEREST: 0.4,
}

# ── Category fit: exact category label → score ────────────────────────────────

_CATEGORY_FIT: dict[Platform, dict[str, float]] = {
    Platform.TIKTOK: {
        "Beauty & Skincare":          1.0,
        "Fashion & Apparel":          1.0,
        "Health & Wellness":          0.9,
        "Fitness & Recovery":         0.9,
        "Consumer Electronics":       0.7,
        "Wearable Health Technology": 0.8,
    },
    Platform.INSTAGRAM: {
        "Beauty & Skincare":  1.0,
        "Fashion & Apparel":  1.0,
        "Home & Kitchen":     0.9,
        "Health & Wellness":  0.9,
        "Fitness & Recovery": 0.8,
    },
    Platform.AMAZON: {},
    Platform.YOUTUBE: {
        "Consumer Electronics":       1.0,
        "Wearable Health Technology": 1.0,
        "Fitness & Recovery":         0.9,
        "Health & Wellness":          0.9,
        "Home & Kitchen":             0.8,
    },
    Platform.PINTEREST: {
        "Home & Kitchen":    1.0,
        "Fashion & Apparel": 1.0,
        "Beauty & Skincare": 0.9,
        "Health & Wellness": 0.8,
    },
}

_CATEGORY_DEFAULT: dict[Platform, float] = {
    Platform.TIKTOK:    0.5,
    Platform.INSTAGRAM: 0.6,
    Platform.AMAZON:    1.0,
    Platform.YOUTUBE:   0.7,
    Platform.PINTEREST: 0.6,
}

# ── Trending fit: (minimum trending score, fit) descending ───────────────────

_TRENDING_BANDS: dict[Platform, list[tuple[int, float]]] = {
    Platform.TIKTOK:    [(85, 1.0), (75, 0.8), (65, 0.5)],
    Platform.INSTAGRAM: [(70, 1.0), (60, 0.8)],
    Platform.AMAZON:    [],
    Platform.YOUTUBE:   [(60, 1.0)],
    Platform.PINTEREST: [(60, 1.0)],
}

_TRENDING_DEFAULT: dict[Platform, float] = {
    Platform.TIKTOK:    0.3,
    Platform.INSTAGRAM: 0.6,
    Platform.AMAZON:    0.9,
    Platform.YOUTUBE:   0.8,
    Platform.PINTEREST: 0.8,
}

# ── Price fit: price tier → score ─────────────────────────────────────────────

_PRICE_FIT: dict[Platform, dict[PriceTier, float]] = {
    Platform.TIKTOK: {
        PriceTier.LOW: 1.0, PriceTier.MEDIUM: 1.0, PriceTier.HIGH: 0.6, PriceTier.PREMIUM: 0.3,
    },
    Platform.INSTAGRAM: {
        PriceTier.LOW: 1.0, PriceTier.MEDIUM: 1.0, PriceTier.HIGH: 1.0, PriceTier.PREMIUM: 0.7,
    },
    Platform.AMAZON: {
        PriceTier.LOW: 1.0, PriceTier.MEDIUM: 1.0, PriceTier.HIGH: 1.0, PriceTier.PREMIUM: 1.0,
    },
    Platform.YOUTUBE: {
        PriceTier.LOW: 0.7, PriceTier.MEDIUM: 1.0, PriceTier.HIGH: 1.0, PriceTier.PREMIUM: 1.0,
    },
    Platform.PINTEREST: {
        PriceTier.LOW: 1.0, PriceTier.MEDIUM: 1.0, PriceTier.HIGH: 0.8, PriceTier.PREMIUM: 0.5,
    },
}

_REASON_TEMPLATES: dict[Platform, str] = {
    Platform.TIKTOK:    "Strong match for ages {lo}-{hi}, {category} performs well on TikTok",
    Platform.INSTAGRAM: "Ideal for ages {lo}-{hi}, visual platform for {category}",
    Platform.AMAZON:    "Universal platform for ages {lo}-{hi}, broad {category} reach",
    Platform.YOUTUBE:   "Great for ages {lo}-{hi}, detailed reviews boost {category} sales",
    Platform.PINTEREST: "Perfect for ages {lo}-{hi}, discovery-driven for {category}",
}


@dataclass
class PlatformScoreComponents:
    """All components of one platform's audience-match score.

    Attributes:
        platform:      The scored platform.
        age_alignment: 0-1, platform demographic vs. average audience age.
        category_fit:  0-1, category performance on the platform.
        trending_fit:  0-1, platform reward for the trending score.
        price_fit:     0-1, price tier vs. platform basket size.
    """

    platform:      Platform
    age_alignment: float
    category_fit:  float
    trending_fit:  float
    price_fit:     float

    @property
    def total(self) -> float:
        """Weighted audience-match score in [0, 1], rounded to 6 places."""
        return round(
            self.age_alignment  * 0.50
            + self.category_fit * 0.25
            + self.trending_fit * 0.15
            + self.price_fit    * 0.10,
            6,
        )


# ── Sub-score lookups ─────────────────────────────────────────────────────────

def age_alignment(platform: Platform, age_range: AgeRange) -> float:
    avg = age_range.average
    for lo, hi, score in _AGE_BANDS.get(platform, []):
        if (lo is None or avg >= lo) and (hi is None or avg <= hi):
            return score
    return _AGE_DEFAULT.get(platform, 0.5)


def category_fit(platform: Platform, category: str) -> float:
    return _CATEGORY_FIT.get(platform, {}).get(
        category, _CATEGORY_DEFAULT.get(platform, 0.5)
    )


def trending_fit(platform: Platform, trending_score: int) -> float:
    for minimum, fit in _TRENDING_BANDS.get(platform, []):
        if trending_score >= minimum:
            return fit
    return _TRENDING_DEFAULT.get(platform, 0.5)


def price_fit(platform: Platform, price_tier: PriceTier) -> float:
    return _PRICE_FIT.get(platform, {}).get(price_tier, 0.5)


def score_platform(
    platform:       Platform,
    category:       str,
    trending_score: int,
    age_range:      AgeRange,
    price_tier:     PriceTier,
) -> PlatformScoreComponents:
    """Compute all sub-scores for one platform."""
    return PlatformScoreComponents(
        platform=platform,
        age_alignment=age_alignment(platform, age_range),
        category_fit=category_fit(platform, category),
        trending_fit=trending_fit(platform, trending_score),
        price_fit=price_fit(platform, price_tier),
    )


def build_recommendation_reason(
    platform:  Platform,
    age_range: AgeRange,
    category:  str,
) -> str:
    template = _REASON_TEMPLATES.get(platform, "Good match for ages {lo}-{hi}")
    return template.format(lo=age_range.min_age, hi=age_range.max_age, category=category)


def build_platform_recommendation(
    product_name: str,
    category:     str,
    components:   PlatformScoreComponents,
    age_range:    AgeRange,
) -> PlatformRecommendation:
    """Turn a scored platform into a ``PlatformRecommendation``."""
    platform = components.platform
    profile  = PLATFORM_PROFILES[platform]
    audience_match = components.total

    return PlatformRecommendation(
        program_name=profile.program_for(product_name),
        platform=platform,
        commission_rate=commission_rate_for(platform, category),
        cookie_duration=profile.cookie_days,
        affiliate_url=profile.url_for(product_name),
        is_official=False,
        confidence_score=CONFIDENCE_FLOOR + audience_match * CONFIDENCE_SPAN,
        audience_match_score=audience_match,
        recommendation_reason=build_recommendation_reason(platform, age_range, category),
    )


def discover_platforms(
    product_name:    str,
    category:        str,
    trending_score:  int,
    target_audience: Optional[str],
    price_range:     Optional[str],
    min_score:       float = DEFAULT_MIN_SCORE,
    limit:           int = DEFAULT_LIMIT,
) -> list[PlatformRecommendation]:
    """Rank distribution platforms for a product.

    Args:
        product_name:    Product name (used in program names and URLs).
        category:        Category label, matched exactly against the tables.
        trending_score:  Popularity signal 0-100.
        target_audience: Free-text audience; parsed by ``extract_age_range``.
        price_range:     Free-text price range; parsed by ``parse_price_tier``.
        min_score:       Exclusive floor on audience match.
        limit:           Maximum number of results.

    Returns:
        Recommendations sorted by ``audience_match_score`` descending. May be
        empty.
    """
    age_range  = extract_age_range(target_audience)
    price_tier = parse_price_tier(price_range)

    candidates: list[PlatformScoreComponents] = []
    for platform in SCORED_PLATFORMS:
        components = score_platform(platform, category, trending_score, age_range, price_tier)
        logger.debug(
            "Platform score | product=%s platform=%s total=%.4f "
            "(age=%.2f cat=%.2f trend=%.2f price=%.2f)",
            product_name, platform.value, components.total,
            components.age_alignment, components.category_fit,
            components.trending_fit, components.price_fit,
        )
        if components.total > min_score:
            candidates.append(components)

    # sorted() is stable, so equal totals keep SCORED_PLATFORMS order.
    ranked = sorted(candidates, key=lambda c: -c.total)

    return [
        build_platform_recommendation(product_name, category, c, age_range)
        for c in ranked[:limit]
    ]
