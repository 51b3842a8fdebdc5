"""
Affiliate platform taxonomy.

``Platform`` is the closed set of distribution platforms a product can be
promoted on. Each platform carries a fixed ``PlatformProfile``: baseline
commission rate, cookie window, program name and affiliate URL template.

``SCORED_PLATFORMS`` is the subset (and the order) the platform scorer
walks. Its order is the tie-break when two platforms score the same, so
it must not be reshuffled casually. ``facebook`` is defined for storage
and link generation but is never scored by discovery.

The ``PLATFORM_PROFILES`` dict is the integrity contract:
  - Every ``Platform`` must have an entry.
  - ``url_template`` must contain the ``{slug}`` placeholder or be a fixed URL.

This module has NO imports from any other ``affilai`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class Platform(StrEnum):
    """Distribution platform a product can be promoted on."""

    TIKTOK = "tiktok"
    """TikTok Shop creator program; viral, short-form, skews 18-30."""

    INSTAGRAM = "instagram"
    """Instagram Shopping; visual lifestyle content, skews 22-40."""

    AMAZON = "amazon"
    """Amazon Associates; universal reach, low trending dependency."""

    YOUTUBE = "youtube"
    """YouTube Shopping; reviews and demonstrations, broad 25-55."""

    PINTEREST = "pinterest"
    """Pinterest buyable pins; discovery-driven, skews 30-50."""

    FACEBOOK = "facebook"
    """Facebook Shops; defined for links only, not scored by discovery."""

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Platform"]:
        """Return the member for ``value`` (case-insensitive), or ``None``."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class PlatformProfile:
    """Fixed commercial defaults for one platform.

    Attributes:
        display_name:     Human-readable platform name.
        commission_rate:  Baseline commission as a fraction (0.12 = 12%).
        cookie_days:      Attribution window reported as ``cookie_duration``.
        program_name:     Program name; ``{name}`` is replaced with the
                          product name.
        url_template:     Affiliate landing URL; ``{slug}`` is replaced with
                          the hyphenated product slug.
    """

    display_name:    str
    commission_rate: float
    cookie_days:     int
    program_name:    str
    url_template:    str

    def program_for(self, product_name: str) -> str:
        return self.program_name.replace("{name}", product_name)

    def url_for(self, product_name: str) -> str:
        slug = product_name.lower().replace(" ", "-")
        return self.url_template.replace("{slug}", slug)


PLATFORM_PROFILES: dict[Platform, PlatformProfile] = {
    Platform.TIKTOK: PlatformProfile(
        display_name="TikTok",
        commission_rate=0.12,
        cookie_days=14,
        program_name="TikTok Shop Creator Program",
        url_template="https://affiliate.tiktok.com/{slug}",
    ),
    Platform.INSTAGRAM: PlatformProfile(
        display_name="Instagram",
        commission_rate=0.15,
        cookie_days=30,
        program_name="Instagram Shopping - {name}",
        url_template="https://business.instagram.com/shopping/{slug}",
    ),
    Platform.AMAZON: PlatformProfile(
        display_name="Amazon",
        commission_rate=0.05,
        cookie_days=24,
        program_name="Amazon Associates",
        url_template="https://affiliate-program.amazon.com",
    ),
    Platform.YOUTUBE: PlatformProfile(
        display_name="YouTube",
        commission_rate=0.10,
        cookie_days=30,
        program_name="YouTube Shopping Affiliate",
        url_template="https://shopping.youtube.com/products/{slug}",
    ),
    Platform.PINTEREST: PlatformProfile(
        display_name="Pinterest",
        commission_rate=0.13,
        cookie_days=30,
        program_name="Pinterest Buyable Pins",
        url_template="https://business.pinterest.com/buyable/{slug}",
    ),
    Platform.FACEBOOK: PlatformProfile(
        display_name="Facebook",
        commission_rate=0.05,
        cookie_days=30,
        program_name="Facebook Shops",
        url_template="https://www.facebook.com/shops/{slug}",
    ),
}

# Amazon Associates pays by category; anything unlisted earns the profile rate.
AMAZON_CATEGORY_COMMISSION: dict[str, float] = {
    "Beauty & Skincare":    0.10,
    "Health & Wellness":    0.10,
    "Fashion & Apparel":    0.08,
    "Home & Kitchen":       0.08,
    "Consumer Electronics": 0.04,
}

SCORED_PLATFORMS: tuple[Platform, ...] = (
    Platform.TIKTOK,
    Platform.INSTAGRAM,
    Platform.AMAZON,
    Platform.YOUTUBE,
    Platform.PINTEREST,
)


def commission_rate_for(platform: Platform, category: str) -> float:
    """Return the commission rate for ``platform`` given a product category."""
    if platform is Platform.AMAZON:
        return AMAZON_CATEGORY_COMMISSION.get(
            category, PLATFORM_PROFILES[Platform.AMAZON].commission_rate
        )
    return PLATFORM_PROFILES[platform].commission_rate
