"""
Attribute parser: structured signals from free-text product attributes.

Every function here is total. Unparseable text falls back to a documented
default instead of raising:

    extract_age_range("Age 18-24")       -> AgeRange(18, 24)
    extract_age_range("Gen Z shoppers")  -> AgeRange(18, 25)
    extract_age_range("")                -> AgeRange(25, 45)
    parse_price_tier("$30-$40")          -> PriceTier.LOW
    parse_price_tier("$300-400")         -> PriceTier.HIGH
    parse_price_tier("call us")          -> PriceTier.MEDIUM

Generation bands (used by the ad-type scorer)
---------------------------------------------
    gen_z       18-25   keywords: "gen z", "genz", "zoomer"
    millennial  26-40   keywords: "millennial"
    gen_x       41-55   keywords: "gen x", "genx"
    boomer      56+     keywords: "boomer", "senior"

Keywords win over the numeric band. An average age under 18 with no
keyword maps to no band at all.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import NamedTuple, Optional

_AGE_PATTERN   = re.compile(r"(?:ages?\s*)?(\d{2})\s*[-–]\s*(\d{2})", re.IGNORECASE)
_PRICE_PATTERN = re.compile(r"\$?(\d+)")


class AgeRange(NamedTuple):
    min_age: int
    max_age: int

    @property
    def average(self) -> int:
        return (self.min_age + self.max_age) // 2


DEFAULT_AGE_RANGE = AgeRange(25, 45)


class PriceTier(StrEnum):
    """Coarse price bucket derived from the first dollar amount."""

    LOW = "low"          # < $50
    MEDIUM = "medium"    # $50-$149
    HIGH = "high"        # $150-$499
    PREMIUM = "premium"  # $500+


class Generation(StrEnum):
    """Generational audience band."""

    GEN_Z = "gen_z"
    MILLENNIAL = "millennial"
    GEN_X = "gen_x"
    BOOMER = "boomer"


# Ordered: first keyword hit wins, both for age fallback and band override.
_GENERATION_KEYWORDS: list[tuple[Generation, tuple[str, ...], AgeRange]] = [
    (Generation.GEN_Z,      ("gen z", "genz", "zoomer"), AgeRange(18, 25)),
    (Generation.MILLENNIAL, ("millennial",),             AgeRange(26, 40)),
    (Generation.GEN_X,      ("gen x", "genx"),           AgeRange(41, 55)),
    (Generation.BOOMER,     ("boomer", "senior"),        AgeRange(56, 70)),
]

# (upper price bound exclusive, tier); anything above the last bound is premium.
_PRICE_TIER_BOUNDS: list[tuple[int, PriceTier]] = [
    (50,  PriceTier.LOW),
    (150, PriceTier.MEDIUM),
    (500, PriceTier.HIGH),
]


def extract_age_range(text: Optional[str]) -> AgeRange:
    """Extract a ``(min_age, max_age)`` range from audience text.

    Looks for ``NN-NN`` (hyphen or en-dash, optionally preceded by
    "age"/"ages"), then generation keywords, then the default ``(25, 45)``.
    """
    if not text:
        return DEFAULT_AGE_RANGE

    match = _AGE_PATTERN.search(text)
    if match:
        return AgeRange(int(match.group(1)), int(match.group(2)))

    keyword_hit = _match_generation_keyword(text)
    if keyword_hit is not None:
        return keyword_hit[1]

    return DEFAULT_AGE_RANGE


def parse_price_tier(text: Optional[str]) -> PriceTier:
    """Map the first number in ``text`` to a ``PriceTier``; ``MEDIUM`` if none."""
    if not text:
        return PriceTier.MEDIUM

    match = _PRICE_PATTERN.search(text)
    if not match:
        return PriceTier.MEDIUM

    price = int(match.group(1))
    for bound, tier in _PRICE_TIER_BOUNDS:
        if price < bound:
            return tier
    return PriceTier.PREMIUM


def classify_generation(text: Optional[str]) -> Optional[Generation]:
    """Collapse audience text into a single ``Generation`` band.

    Returns ``None`` when the text is empty or the average age is under 18
    with no generation keyword.
    """
    if not text:
        return None

    keyword_hit = _match_generation_keyword(text)
    if keyword_hit is not None:
        return keyword_hit[0]

    avg = extract_age_range(text).average
    if 18 <= avg <= 25:
        return Generation.GEN_Z
    if 26 <= avg <= 40:
        return Generation.MILLENNIAL
    if 41 <= avg <= 55:
        return Generation.GEN_X
    if avg > 55:
        return Generation.BOOMER
    return None


def _match_generation_keyword(text: str) -> Optional[tuple[Generation, AgeRange]]:
    lowered = text.lower()
    for generation, keywords, age_range in _GENERATION_KEYWORDS:
        if any(kw in lowered for kw in keywords):
            return generation, age_range
    return None
