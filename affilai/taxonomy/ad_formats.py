"""
Advertisement format taxonomy.

``AdFormat`` enumerates the ad formats the ad-type scorer ranks and the
content synthesizer renders. Enumeration order is the scorer's tie-break
order: social_post, story, video_script, carousel, email, sms.

This module has NO imports from any other ``affilai`` package.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


class AdFormat(StrEnum):
    """Advertisement format for generated copy."""

    SOCIAL_POST = "social_post"
    """Standard feed post. Viral reach, quick engagement, broad audience."""

    STORY = "story"
    """Ephemeral story (Instagram Stories, TikTok). Gen Z, time-sensitive."""

    VIDEO_SCRIPT = "video_script"
    """Hook/problem/solution video script. Tech products, demonstrations."""

    CAROUSEL = "carousel"
    """Multi-slide image carousel. Fashion, collections, step-by-step."""

    EMAIL = "email"
    """Email campaign. Older audiences, nurture and trust building."""

    SMS = "sms"
    """Text message. Flash sales, urgent offers, high-intent customers."""

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AdFormat"]:
        """Return the member for ``value`` (case-insensitive), or ``None``."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_DISPLAY_NAMES: dict[AdFormat, str] = {
    AdFormat.SOCIAL_POST:  "Social Media Post",
    AdFormat.STORY:        "Story",
    AdFormat.VIDEO_SCRIPT: "Video Script",
    AdFormat.CAROUSEL:     "Carousel",
    AdFormat.EMAIL:        "Email",
    AdFormat.SMS:          "SMS",
}

_DESCRIPTIONS: dict[AdFormat, str] = {
    AdFormat.SOCIAL_POST:  "Best for viral reach and quick engagement",
    AdFormat.STORY:        "Perfect for Gen Z and time-sensitive content",
    AdFormat.VIDEO_SCRIPT: "Ideal for detailed product demonstrations",
    AdFormat.CAROUSEL:     "Great for visual products and collections",
    AdFormat.EMAIL:        "Effective for nurturing and detailed offers",
    AdFormat.SMS:          "Optimal for urgent, high-conversion messages",
}
