"""
Recommendation output models.

``PlatformRecommendation`` is one ranked affiliate program from platform
discovery. ``AdTypeRecommendation`` is the ranked ad-format verdict with
its per-format score breakdown. ``MarketAnalysis`` bundles both together
with the derived copywriting context (tone, selling points, competition)
that the content synthesizer consumes.

All models are frozen: they are recomputed per request from the current
``Product`` snapshot and never cached or mutated.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from affilai.taxonomy.ad_formats import AdFormat
from affilai.taxonomy.platforms import Platform

CompetitionLevel = Literal["low", "medium", "high"]

# Confidence is a linear rescale of audience match into [0.85, 1.0].
CONFIDENCE_FLOOR = 0.85
CONFIDENCE_SPAN = 0.15


class PlatformRecommendation(BaseModel):
    """One affiliate program suggested by platform discovery.

    Attributes:
        program_name: Program display name, e.g. ``"TikTok Shop Creator Program"``.
        platform: The distribution platform.
        commission_rate: Commission as a fraction of sale value.
        cookie_duration: Attribution window reported by the program.
        affiliate_url: Program landing URL for this product.
        is_official: Whether the program is the brand's own program.
        confidence_score: ``0.85 + audience_match_score * 0.15``.
        audience_match_score: Weighted composite score in [0, 1].
        recommendation_reason: Human-readable justification.
    """

    model_config = ConfigDict(frozen=True)

    program_name: str
    platform: Platform
    commission_rate: float
    cookie_duration: int
    affiliate_url: str
    is_official: bool = False
    confidence_score: float
    audience_match_score: float
    recommendation_reason: str

    @model_validator(mode="after")
    def validate_scores(self) -> "PlatformRecommendation":
        if not 0.0 <= self.audience_match_score <= 1.0:
            raise ValueError(
                f"audience_match_score must be in [0, 1], got {self.audience_match_score}."
            )
        expected = CONFIDENCE_FLOOR + self.audience_match_score * CONFIDENCE_SPAN
        if abs(self.confidence_score - expected) > 1e-9:
            raise ValueError(
                f"confidence_score ({self.confidence_score}) must equal "
                f"0.85 + audience_match_score * 0.15 ({expected})."
            )
        return self


class FormatScore(BaseModel):
    """Sub-scores for one ad format, each in [0, 1].

    Weights: category 30%, audience 35%, trending 20%, platform 15%.
    """

    model_config = ConfigDict(frozen=True)

    ad_format: AdFormat
    category_score: float
    audience_score: float
    trending_score: float
    platform_score: float

    @property
    def total(self) -> float:
        """Weighted total, rounded to 6 places so equal mixes tie exactly."""
        return round(
            self.category_score   * 0.30
            + self.audience_score * 0.35
            + self.trending_score * 0.20
            + self.platform_score * 0.15,
            6,
        )


class AdTypeRecommendation(BaseModel):
    """Winning ad format plus up to three ranked alternatives.

    Attributes:
        recommended_ad_type: Highest-scoring format.
        confidence_score: Winner's total, clamped to [0, 1].
        reasoning: Human-readable explanation.
        alternative_types: Runner-up formats in rank order (at most 3).
        scores: Full breakdown for all formats, in rank order.
    """

    model_config = ConfigDict(frozen=True)

    recommended_ad_type: AdFormat
    confidence_score: float
    reasoning: str
    alternative_types: list[AdFormat]
    scores: list[FormatScore] = []

    @model_validator(mode="after")
    def validate_alternatives(self) -> "AdTypeRecommendation":
        if not 0.0 <= self.confidence_score <= 1.0:
            raise ValueError(
                f"confidence_score must be in [0, 1], got {self.confidence_score}."
            )
        if len(self.alternative_types) > 3:
            raise ValueError("At most 3 alternative_types are allowed.")
        if self.recommended_ad_type in self.alternative_types:
            raise ValueError("alternative_types must not repeat the recommended format.")
        if len(set(self.alternative_types)) != len(self.alternative_types):
            raise ValueError("alternative_types must be distinct.")
        return self


class MarketAnalysis(BaseModel):
    """Aggregated recommendation for one product snapshot.

    Attributes:
        product_name: Name of the analysed product.
        ad_type: Ad-format verdict.
        platforms: Ranked platform discovery results (may be empty).
        recommended_platform: Top discovered platform, or the fallback.
        target_demographic: Audience text used for scoring.
        key_selling_points: Four category-specific selling points.
        suggested_tone: Copy tone derived from the audience text.
        competition_level: ``"low"``, ``"medium"`` or ``"high"``.
        estimated_engagement_score: Blend of trending and best audience match.
    """

    model_config = ConfigDict(frozen=True)

    product_name: str
    ad_type: AdTypeRecommendation
    platforms: list[PlatformRecommendation]
    recommended_platform: Platform
    target_demographic: str
    key_selling_points: list[str]
    suggested_tone: str
    competition_level: CompetitionLevel
    estimated_engagement_score: float

    @field_validator("estimated_engagement_score")
    @classmethod
    def validate_engagement(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"estimated_engagement_score must be in [0, 1], got {v}.")
        return v

    @property
    def recommended_ad_type(self) -> AdFormat:
        return self.ad_type.recommended_ad_type
