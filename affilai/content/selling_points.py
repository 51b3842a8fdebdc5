"""
Category selling points used by the content templates.

Every category maps to exactly four points. Unmapped categories get the
generic list, whose last entry names the product.
"""

from __future__ import annotations

_CATEGORY_SELLING_POINTS: dict[str, list[str]] = {
    "Beauty & Skincare": [
        "Clinically proven results",
        "Natural, clean ingredients",
        "Visible improvement in weeks",
        "{name} loved by thousands",
    ],
    "Health & Wellness": [
        "Science-backed formula",
        "Supports overall wellbeing",
        "Easy to incorporate daily",
        "Trusted by health experts",
    ],
    "Fitness & Recovery": [
        "Accelerate your recovery",
        "Professional-grade quality",
        "Used by athletes worldwide",
        "See results faster",
    ],
    "Consumer Electronics": [
        "Cutting-edge technology",
        "Seamless integration",
        "Track your progress",
        "Premium build quality",
    ],
    "Wearable Health Technology": [
        "Cutting-edge technology",
        "Seamless integration",
        "Track your progress",
        "Premium build quality",
    ],
    "Fashion & Apparel": [
        "Trendsetting style",
        "Premium materials",
        "Versatile for any occasion",
        "Limited availability",
    ],
    "Home & Kitchen": [
        "Transform your space",
        "Built to last",
        "Saves time and effort",
        "Top-rated by customers",
    ],
}

_GENERIC_SELLING_POINTS: list[str] = [
    "Premium quality",
    "Exceptional value",
    "Customer favorite",
    "Discover why {name} is trending",
]


def key_selling_points(category: str, product_name: str) -> list[str]:
    """Return the four selling points for ``category`` (exact label match)."""
    points = _CATEGORY_SELLING_POINTS.get(category, _GENERIC_SELLING_POINTS)
    return [p.replace("{name}", product_name) for p in points]
