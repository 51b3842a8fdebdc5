"""
Product model: the read-only snapshot every scorer works from.

``Product`` is owned by the storage collaborator. The scoring core only
reads it; it never mutates or persists a product. Free-text fields
(``target_audience``, ``price_range``) are parsed by
``affilai.scoring.attributes`` and may contain anything.

Per-platform identifiers only matter by presence: the ad-type scorer
asks "does this product already have a TikTok listing?", never what the
listing id is.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from affilai.taxonomy.platforms import Platform

DEFAULT_TRENDING_SCORE = 50


class Product(BaseModel):
    """A promotable product.

    Attributes:
        product_id: Auto-assigned DB PK; ``None`` before insertion.
        name: Product display name.
        category: Free-text category label, e.g. ``"Beauty & Skincare"``.
        description: Marketing description used in ad copy.
        price_range: Free-text price range, e.g. ``"$50-$100"``.
        target_audience: Free-text audience, e.g. ``"Age 25-45"`` or ``"Gen Z"``.
        trending_score: Popularity signal 0-100, or ``None`` when unknown.
        notes: Internal notes, never used in scoring.
        image_url: Product image URL.
        product_url: Merchant landing page.
        amazon_asin: Amazon listing id (presence only).
        tiktok_product_id: TikTok Shop id (presence only).
        instagram_product_id: Instagram Shopping id (presence only).
        youtube_video_id: YouTube review/demo id (presence only).
        pinterest_pin_id: Pinterest pin id (presence only).
    """

    model_config = ConfigDict(frozen=True)

    product_id: Optional[int] = None
    name: str
    category: str
    description: Optional[str] = None
    price_range: Optional[str] = None
    target_audience: Optional[str] = None
    trending_score: Optional[int] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    product_url: Optional[str] = None

    amazon_asin: Optional[str] = None
    tiktok_product_id: Optional[str] = None
    instagram_product_id: Optional[str] = None
    youtube_video_id: Optional[str] = None
    pinterest_pin_id: Optional[str] = None

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name and category must not be empty.")
        return v.strip()

    @field_validator(
        "description", "price_range", "target_audience", "notes",
        "image_url", "product_url", "amazon_asin", "tiktok_product_id",
        "instagram_product_id", "youtube_video_id", "pinterest_pin_id",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("trending_score")
    @classmethod
    def validate_trending_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 <= v <= 100:
            raise ValueError(f"trending_score must be in [0, 100], got {v}.")
        return v

    @property
    def effective_trending_score(self) -> int:
        """Trending score with the neutral default applied."""
        return self.trending_score if self.trending_score is not None else DEFAULT_TRENDING_SCORE

    def platform_ids(self) -> dict[Platform, Optional[str]]:
        """Map each platform that has an id column to its (possibly absent) id."""
        return {
            Platform.TIKTOK:    self.tiktok_product_id,
            Platform.INSTAGRAM: self.instagram_product_id,
            Platform.YOUTUBE:   self.youtube_video_id,
            Platform.PINTEREST: self.pinterest_pin_id,
            Platform.AMAZON:    self.amazon_asin,
        }

    def has_platform(self, platform: Platform) -> bool:
        return self.platform_ids().get(platform) is not None

    def platforms_present(self) -> list[Platform]:
        """Platforms with an attached id, in tiktok/instagram/youtube/pinterest/amazon order."""
        return [p for p, pid in self.platform_ids().items() if pid is not None]
