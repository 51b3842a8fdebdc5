"""
Ad-type scorer: ranks the six ad formats for a product.

Score formula (weighted sum, range 0-1)
---------------------------------------
    total = (
        category_score   * 0.30   # category keywords in the product category
        + audience_score * 0.35   # generation band of the target audience
        + trending_score * 0.20   # banded trending score (email inverted)
        + platform_score * 0.15   # which platform ids the product already has
    )

Component tables
----------------
category_score:
    Case-insensitive substring match against the category text. Each format
    has an ordered keyword table; the first matching row wins.

audience_score:
    Target audience collapsed into a ``Generation`` band, then looked up per
    format. No band (under-18 average, no keyword) uses the ``None`` row. No
    audience text at all scores a flat 0.5 for every format.

trending_score:
    Product trending score (default 50) against descending minimum bands.
    Email is inverted: low-trending products need trust building.

platform_score:
    Presence of tiktok/instagram/youtube/pinterest/amazon ids. Rules are
    ordered; the first satisfied rule wins.

Ranking
-------
All six formats are sorted by total descending. Equal totals keep
``AdFormat`` enumeration order. The winner's total (clamped to [0, 1]) is
the confidence; the next three are the alternatives.
"""

from __future__ import annotations

import logging
from typing import Optional

from affilai.models.product import Product
from affilai.models.recommendation import AdTypeRecommendation, FormatScore
from affilai.scoring.attributes import Generation, classify_generation
from affilai.taxonomy.ad_formats import AdFormat
from affilai.taxonomy.platforms import PLATFORM_PROFILES, Platform

logger = logging.getLogger(__name__)

NEUTRAL_AUDIENCE_SCORE = 0.5
MAX_ALTERNATIVES = 3

# ── Category table: ordered (keywords, score) rows, then the default ─────────

_CATEGORY_TABLE: dict[AdFormat, list[tuple[tuple[str, ...], float]]] = {
    AdFormat.SOCIAL_POST: [
        (("trending", "viral"), 0.95),
        (("gadget", "tech"),    0.7),
    ],
    AdFormat.STORY: [
        (("beauty", "skincare"),  0.95),
        (("fashion", "apparel"),  0.9),
        (("food", "beverage"),    0.85),
        (("fitness", "wellness"), 0.8),
    ],
    AdFormat.VIDEO_SCRIPT: [
        (("electronics", "tech", "wearable", "gadget"), 1.0),
        (("fitness", "health"),                         0.8),
        (("home", "kitchen"),                           0.6),
    ],
    AdFormat.CAROUSEL: [
        (("fashion", "apparel", "clothing"),   1.0),
        (("beauty", "skincare", "cosmetic"),   0.9),
        (("home", "decor", "furniture"),       0.85),
        (("jewelry", "accessories"),           0.9),
    ],
    AdFormat.EMAIL: [
        (("health", "wellness", "supplement"), 0.9),
        (("finance", "insurance"),             0.95),
        (("electronics", "appliance"),         0.7),
    ],
    AdFormat.SMS: [
        (("food", "restaurant"), 0.9),
        (("deal", "flash"),      0.95),
        (("local", "service"),   0.8),
    ],
}

_CATEGORY_DEFAULT: dict[AdFormat, float] = {
    AdFormat.SOCIAL_POST:  0.6,
    AdFormat.STORY:        0.5,
    AdFormat.VIDEO_SCRIPT: 0.4,
    AdFormat.CAROUSEL:     0.5,
    AdFormat.EMAIL:        0.5,
    AdFormat.SMS:          0.3,
}

# ── Audience table: generation band → score (None = no band) ─────────────────

_AUDIENCE_TABLE: dict[AdFormat, dict[Optional[Generation], float]] = {
    AdFormat.SOCIAL_POST: {
        Generation.GEN_Z: 0.9, Generation.MILLENNIAL: 0.85,
        Generation.GEN_X: 0.6, Generation.BOOMER: 0.4, None: 0.4,
    },
    AdFormat.STORY: {
        Generation.GEN_Z: 1.0, Generation.MILLENNIAL: 0.75,
        Generation.GEN_X: 0.4, Generation.BOOMER: 0.2, None: 0.2,
    },
    AdFormat.VIDEO_SCRIPT: {
        Generation.GEN_Z: 0.7, Generation.MILLENNIAL: 0.9,
        Generation.GEN_X: 0.85, Generation.BOOMER: 0.6, None: 0.6,
    },
    AdFormat.CAROUSEL: {
        Generation.GEN_Z: 0.8, Generation.MILLENNIAL: 0.9,
        Generation.GEN_X: 0.7, Generation.BOOMER: 0.5, None: 0.5,
    },
    AdFormat.EMAIL: {
        Generation.GEN_Z: 0.4, Generation.MILLENNIAL: 0.7,
        Generation.GEN_X: 0.9, Generation.BOOMER: 1.0, None: 0.4,
    },
    AdFormat.SMS: {
        Generation.GEN_Z: 0.5, Generation.MILLENNIAL: 0.6,
        Generation.GEN_X: 0.8, Generation.BOOMER: 0.75, None: 0.5,
    },
}

# ── Trending table: (minimum trending score, score) descending, then default ─

_TRENDING_TABLE: dict[AdFormat, list[tuple[int, float]]] = {
    AdFormat.SOCIAL_POST:  [(80, 1.0), (60, 0.8), (40, 0.6)],
    AdFormat.STORY:        [(75, 0.95), (50, 0.75)],
    AdFormat.VIDEO_SCRIPT: [(60, 0.8)],
    AdFormat.CAROUSEL:     [(70, 0.85), (50, 0.7)],
    AdFormat.EMAIL:        [(70, 0.6), (50, 0.75)],
    AdFormat.SMS:          [],
}

_TRENDING_DEFAULT: dict[AdFormat, float] = {
    AdFormat.SOCIAL_POST:  0.4,
    AdFormat.STORY:        0.55,
    AdFormat.VIDEO_SCRIPT: 0.7,
    AdFormat.CAROUSEL:     0.6,
    AdFormat.EMAIL:        0.85,
    AdFormat.SMS:          0.6,
}

# ── Platform table: ordered (required ids, minimum id count, score) rules ────

_PlatformRule = tuple[frozenset[Platform], int, float]

_PLATFORM_TABLE: dict[AdFormat, list[_PlatformRule]] = {
    AdFormat.SOCIAL_POST: [
        (frozenset(), 3, 0.9),
        (frozenset(), 1, 0.75),
    ],
    AdFormat.STORY: [
        (frozenset({Platform.TIKTOK}),    0, 0.95),
        (frozenset({Platform.INSTAGRAM}), 0, 0.85),
    ],
    AdFormat.VIDEO_SCRIPT: [
        (frozenset({Platform.YOUTUBE}), 0, 0.95),
        (frozenset({Platform.TIKTOK}),  0, 0.7),
    ],
    AdFormat.CAROUSEL: [
        (frozenset({Platform.INSTAGRAM, Platform.PINTEREST}), 0, 1.0),
        (frozenset({Platform.INSTAGRAM}),                     0, 0.9),
        (frozenset({Platform.PINTEREST}),                     0, 0.85),
    ],
    AdFormat.EMAIL: [
        (frozenset({Platform.AMAZON}), 0, 0.8),
    ],
    AdFormat.SMS: [],
}

_PLATFORM_DEFAULT: dict[AdFormat, float] = {
    AdFormat.SOCIAL_POST:  0.6,
    AdFormat.STORY:        0.5,
    AdFormat.VIDEO_SCRIPT: 0.5,
    AdFormat.CAROUSEL:     0.5,
    AdFormat.EMAIL:        0.65,
    AdFormat.SMS:          0.6,
}

# Platforms named in the reasoning text; amazon ids are not a native format.
_REASONING_PLATFORMS: tuple[Platform, ...] = (
    Platform.TIKTOK,
    Platform.INSTAGRAM,
    Platform.YOUTUBE,
    Platform.PINTEREST,
)


# ── Sub-score lookups ─────────────────────────────────────────────────────────

def category_score(category: str, ad_format: AdFormat) -> float:
    lowered = category.lower()
    for keywords, score in _CATEGORY_TABLE[ad_format]:
        if any(kw in lowered for kw in keywords):
            return score
    return _CATEGORY_DEFAULT[ad_format]


def audience_score(target_audience: Optional[str], ad_format: AdFormat) -> float:
    if target_audience is None:
        return NEUTRAL_AUDIENCE_SCORE
    generation = classify_generation(target_audience)
    return _AUDIENCE_TABLE[ad_format][generation]


def trending_score(trending: int, ad_format: AdFormat) -> float:
    for minimum, score in _TRENDING_TABLE[ad_format]:
        if trending >= minimum:
            return score
    return _TRENDING_DEFAULT[ad_format]


def platform_score(present: set[Platform], ad_format: AdFormat) -> float:
    for required, min_count, score in _PLATFORM_TABLE[ad_format]:
        if required <= present and len(present) >= min_count:
            return score
    return _PLATFORM_DEFAULT[ad_format]


def score_formats(product: Product) -> list[FormatScore]:
    """Score every ``AdFormat`` for a product, in enumeration order."""
    present  = set(product.platforms_present())
    trending = product.effective_trending_score

    return [
        FormatScore(
            ad_format=ad_format,
            category_score=category_score(product.category, ad_format),
            audience_score=audience_score(product.target_audience, ad_format),
            trending_score=trending_score(trending, ad_format),
            platform_score=platform_score(present, ad_format),
        )
        for ad_format in AdFormat
    ]


def build_reasoning(product: Product, best: FormatScore) -> str:
    """Assemble the human-readable explanation for the winning format.

    Clauses are joined with ". " and end with a period. When no clause
    qualifies, a single default sentence names the format, the product and
    the confidence as a whole percentage.
    """
    fmt_name = best.ad_format.display_name
    reasons: list[str] = []

    if best.category_score >= 0.8:
        reasons.append(
            f"The '{product.category}' category aligns strongly with {fmt_name} format"
        )

    if product.target_audience is not None and best.audience_score >= 0.8:
        reasons.append(
            f"Target audience '{product.target_audience}' responds well to this format"
        )

    trending = product.trending_score
    if trending is not None:
        if trending >= 80 and best.trending_score >= 0.9:
            reasons.append("High trending score suggests viral potential")
        elif trending < 50 and best.trending_score >= 0.7:
            reasons.append("This format builds trust for products needing education")

    if best.platform_score >= 0.85:
        names = [
            PLATFORM_PROFILES[p].display_name
            for p in _REASONING_PLATFORMS
            if product.has_platform(p)
        ]
        if names:
            reasons.append(
                f"Available on {', '.join(names)} which natively supports this format"
            )

    if not reasons:
        return (
            f"{fmt_name} selected as the balanced choice for '{product.name}' "
            f"with confidence {best.total * 100:.0f}%"
        )
    return ". ".join(reasons) + "."


def analyze_ad_type(product: Product) -> AdTypeRecommendation:
    """Rank all ad formats for ``product`` and explain the winner.

    Args:
        product: Product snapshot. Only category, target_audience,
            trending_score and platform id presence are read.

    Returns:
        ``AdTypeRecommendation`` with the winner, up to three alternatives
        and the full ranked breakdown.
    """
    scores = score_formats(product)

    # sorted() is stable, so equal totals keep AdFormat order.
    ranked = sorted(scores, key=lambda s: -s.total)
    best = ranked[0]

    for s in ranked:
        logger.debug(
            "Ad format score | product=%s format=%s total=%.4f "
            "(cat=%.2f aud=%.2f trend=%.2f plat=%.2f)",
            product.name, s.ad_format.value, s.total,
            s.category_score, s.audience_score, s.trending_score, s.platform_score,
        )

    return AdTypeRecommendation(
        recommended_ad_type=best.ad_format,
        confidence_score=_clamp(best.total, 0.0, 1.0),
        reasoning=build_reasoning(product, best),
        alternative_types=[s.ad_format for s in ranked[1:1 + MAX_ALTERNATIVES]],
        scores=ranked,
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
