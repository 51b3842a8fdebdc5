"""
Scoring core: deterministic rankers over a ``Product`` snapshot.

Modules
-------
attributes      : extract_age_range() + parse_price_tier() +
                  classify_generation(). Total functions over free text.
platform_scorer : discover_platforms(): weighted audience match per
                  affiliate platform, floored and ranked.
ad_type_scorer  : analyze_ad_type(): weighted score per ad format, ranked,
                  with threshold-gated reasoning clauses.
"""
