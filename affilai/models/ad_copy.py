"""
Persisted output models: generated ad copy and affiliate links.

``GeneratedAdCopy`` is created once per generation request and never
mutated afterwards. Regenerating copy for the same product inserts a new
record; history is kept so copy variants can be compared.

``AffiliateLink`` is a trackable link for one product on one platform.
A refresh rewrites its program fields in place and reactivates it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from affilai.taxonomy.platforms import Platform

LinkStatus = Literal["active", "expired", "invalid"]


class GeneratedAdCopy(BaseModel):
    """Ad copy rendered for one product in one format.

    Attributes:
        ad_id: Auto-assigned DB PK; ``None`` before insertion.
        product_id: FK to ``products.product_id``.
        variation_name: Label such as ``"Oura Ring - story Ad"``.
        ad_format: Format string. Usually an ``AdFormat`` value, but any
            string the caller requested is kept verbatim.
        headline: Headline text.
        body_text: Body text.
        cta: Call to action.
        platform_specific_data: Target platform, tone and competition level.
        performance_score: Estimated engagement score in [0, 1].
        created_at: UTC insertion time; ``None`` before insertion.
    """

    model_config = ConfigDict(frozen=True)

    ad_id: Optional[int] = None
    product_id: int
    variation_name: Optional[str] = None
    ad_format: str
    headline: str
    body_text: str
    cta: str
    platform_specific_data: dict[str, Any] = {}
    performance_score: Optional[float] = None
    created_at: Optional[datetime] = None

    @field_validator("headline")
    @classmethod
    def validate_headline_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("headline must not be empty.")
        return v


class AffiliateLink(BaseModel):
    """Trackable affiliate link for a product.

    Attributes:
        link_id: Auto-assigned DB PK; ``None`` before insertion.
        product_id: FK to ``products.product_id``.
        product_name: Product name at link creation time.
        platform: Platform the link points at.
        program_name: Affiliate program name.
        commission_rate: Program commission, if known.
        cookie_duration: Program attribution window, if known.
        tracking_url: URL with attribution parameters.
        destination_url: Program landing URL before tracking parameters.
        status: ``"active"``, ``"expired"`` or ``"invalid"``.
        created_at: UTC insertion time; ``None`` before insertion.
        updated_at: UTC time of the last refresh; ``None`` if never refreshed.
    """

    model_config = ConfigDict(frozen=True)

    link_id: Optional[int] = None
    product_id: int
    product_name: str
    platform: Platform
    program_name: str
    commission_rate: Optional[float] = None
    cookie_duration: Optional[int] = None
    tracking_url: str
    destination_url: str
    status: LinkStatus = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
