"""
Recommendation aggregator: one ``MarketAnalysis`` per product snapshot.

Runs platform discovery and the ad-type scorer against the same
``Product`` and derives the copywriting context the content synthesizer
needs.

Derived fields
--------------
recommended_platform:
    Top discovered platform, else the configured fallback (``instagram``).

suggested_tone (substring match on the audience text):
    "18-25" or "18-30"   → "casual and trendy"
    "45" or "50"         → "professional and trustworthy"
    otherwise            → "friendly and engaging"

competition_level (exact category label):
    Beauty & Skincare, Fashion & Apparel                      → high
    Consumer Electronics, Wearable Health Technology,
    Health & Wellness, Fitness & Recovery                     → medium
    otherwise                                                 → low

estimated_engagement_score:
    min(1.0, 0.6 * trending / 100 + 0.4 * top_audience_match)
    with 0.5 as the audience-match term when discovery is empty.
"""

from __future__ import annotations

import logging

from affilai.content.selling_points import key_selling_points
from affilai.models.product import Product
from affilai.models.recommendation import (
    CompetitionLevel,
    MarketAnalysis,
    PlatformRecommendation,
)
from affilai.scoring.ad_type_scorer import analyze_ad_type
from affilai.scoring.platform_scorer import (
    DEFAULT_LIMIT,
    DEFAULT_MIN_SCORE,
    discover_platforms,
)
from affilai.taxonomy.platforms import Platform

logger = logging.getLogger(__name__)

DEFAULT_TARGET_AUDIENCE = "Age 25-45"
DEFAULT_PRICE_RANGE     = "$50-$100"
NO_PLATFORM_MATCH       = 0.5

_COMPETITION_BY_CATEGORY: dict[str, CompetitionLevel] = {
    "Beauty & Skincare":          "high",
    "Fashion & Apparel":          "high",
    "Consumer Electronics":       "medium",
    "Wearable Health Technology": "medium",
    "Health & Wellness":          "medium",
    "Fitness & Recovery":         "medium",
}


def suggested_tone(target_audience: str) -> str:
    if "18-25" in target_audience or "18-30" in target_audience:
        return "casual and trendy"
    if "45" in target_audience or "50" in target_audience:
        return "professional and trustworthy"
    return "friendly and engaging"


def competition_level(category: str) -> CompetitionLevel:
    return _COMPETITION_BY_CATEGORY.get(category, "low")


def estimate_engagement(trending_score: int, top_audience_match: float) -> float:
    """Blend trending (60%) and the best platform's audience match (40%), capped at 1."""
    return min(1.0, (trending_score / 100.0) * 0.6 + top_audience_match * 0.4)


def discover_for_product(
    product: Product,
    *,
    min_score: float = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
) -> list[PlatformRecommendation]:
    """Run platform discovery with the neutral defaults for missing fields."""
    return discover_platforms(
        product.name,
        product.category,
        product.effective_trending_score,
        product.target_audience or DEFAULT_TARGET_AUDIENCE,
        product.price_range or DEFAULT_PRICE_RANGE,
        min_score=min_score,
        limit=limit,
    )


def build_market_analysis(
    product: Product,
    *,
    fallback_platform: Platform = Platform.INSTAGRAM,
    min_score: float = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
) -> MarketAnalysis:
    """Aggregate platform discovery and ad-type ranking for ``product``.

    Args:
        product:           Product snapshot.
        fallback_platform: ``recommended_platform`` when discovery is empty.
        min_score:         Discovery floor (exclusive).
        limit:             Maximum platforms kept.

    Returns:
        A frozen ``MarketAnalysis``.
    """
    audience = product.target_audience or DEFAULT_TARGET_AUDIENCE
    trending = product.effective_trending_score

    platforms = discover_for_product(product, min_score=min_score, limit=limit)
    ad_type = analyze_ad_type(product)

    if platforms:
        top = platforms[0]
        recommended_platform = top.platform
        top_match = top.audience_match_score
    else:
        recommended_platform = fallback_platform
        top_match = NO_PLATFORM_MATCH

    analysis = MarketAnalysis(
        product_name=product.name,
        ad_type=ad_type,
        platforms=platforms,
        recommended_platform=recommended_platform,
        target_demographic=audience,
        key_selling_points=key_selling_points(product.category, product.name),
        suggested_tone=suggested_tone(audience),
        competition_level=competition_level(product.category),
        estimated_engagement_score=estimate_engagement(trending, top_match),
    )

    logger.debug(
        "Market analysis | product=%s ad_type=%s platform=%s platforms=%d engagement=%.3f",
        product.name,
        analysis.recommended_ad_type.value,
        recommended_platform.value,
        len(platforms),
        analysis.estimated_engagement_score,
    )
    return analysis
