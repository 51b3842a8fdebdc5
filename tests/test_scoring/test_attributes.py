"""
Tests for affilai/scoring/attributes.py.

What we test
------------
extract_age_range():
  - "NN-NN" with optional "Age"/"Ages" prefix, hyphen or en-dash.
  - Numeric range wins over generation keywords.
  - Generation keyword fallback and the (25, 45) default.
parse_price_tier():
  - First number decides the tier; thresholds 50 / 150 / 500.
  - No digits and empty text give MEDIUM.
classify_generation():
  - Keywords override the numeric band.
  - Average-age bands; under-18 with no keyword has no band.
"""

from __future__ import annotations

import pytest

from affilai.scoring.attributes import (
    DEFAULT_AGE_RANGE,
    AgeRange,
    Generation,
    PriceTier,
    classify_generation,
    extract_age_range,
    parse_price_tier,
)


class TestExtractAgeRange:
    def test_age_prefix(self):
        assert extract_age_range("Age 18-24") == (18, 24)

    def test_ages_prefix_and_spaces(self):
        assert extract_age_range("Ages 30 - 45, professionals") == AgeRange(30, 45)

    def test_en_dash(self):
        assert extract_age_range("25–34 urban renters") == (25, 34)

    def test_bare_range_in_longer_text(self):
        assert extract_age_range("women 35-50 who garden") == (35, 50)

    def test_numeric_range_wins_over_keyword(self):
        assert extract_age_range("Gen Z, Age 18-24") == (18, 24)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Gen Z shoppers", (18, 25)),
            ("genz creators", (18, 25)),
            ("Zoomers", (18, 25)),
            ("Millennial parents", (26, 40)),
            ("Gen X homeowners", (41, 55)),
            ("Boomers", (56, 70)),
            ("seniors", (56, 70)),
        ],
    )
    def test_generation_keywords(self, text, expected):
        assert extract_age_range(text) == expected

    def test_empty_and_none_use_default(self):
        assert extract_age_range("") == DEFAULT_AGE_RANGE == (25, 45)
        assert extract_age_range(None) == (25, 45)

    def test_unparseable_uses_default(self):
        assert extract_age_range("everyone who loves coffee") == (25, 45)

    def test_average_floors(self):
        assert AgeRange(18, 25).average == 21
        assert AgeRange(30, 45).average == 37


class TestParsePriceTier:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$30-$40", PriceTier.LOW),
            ("$49", PriceTier.LOW),
            ("$50-$100", PriceTier.MEDIUM),
            ("$149", PriceTier.MEDIUM),
            ("$150-200", PriceTier.HIGH),
            ("$300-400", PriceTier.HIGH),
            ("$500+", PriceTier.PREMIUM),
            ("1200 dollars", PriceTier.PREMIUM),
        ],
    )
    def test_thresholds(self, text, expected):
        assert parse_price_tier(text) == expected

    def test_first_number_decides(self):
        assert parse_price_tier("$20 to $900") == PriceTier.LOW

    def test_no_digits_is_medium(self):
        assert parse_price_tier("call for pricing") == PriceTier.MEDIUM

    def test_empty_is_medium(self):
        assert parse_price_tier("") == PriceTier.MEDIUM
        assert parse_price_tier(None) == PriceTier.MEDIUM


class TestClassifyGeneration:
    def test_keyword_overrides_numeric_band(self):
        # Average 62 would be boomer anyway; "Gen X" must still win.
        assert classify_generation("Gen X, Age 55-70") == Generation.GEN_X

    def test_boomer_keyword(self):
        assert classify_generation("Age 55-70, Boomers") == Generation.BOOMER

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Age 18-24", Generation.GEN_Z),
            ("Age 18-30", Generation.GEN_Z),
            ("Age 25-45", Generation.MILLENNIAL),
            ("Age 30-45", Generation.MILLENNIAL),
            ("Age 40-60", Generation.GEN_X),
            ("Age 55-70", Generation.BOOMER),
        ],
    )
    def test_numeric_bands(self, text, expected):
        assert classify_generation(text) == expected

    def test_under_18_has_no_band(self):
        assert classify_generation("Age 10-14") is None

    def test_unparseable_text_uses_default_range(self):
        # Default (25, 45) averages 35.
        assert classify_generation("everyone") == Generation.MILLENNIAL

    def test_empty_has_no_band(self):
        assert classify_generation("") is None
        assert classify_generation(None) is None
