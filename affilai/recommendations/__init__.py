"""
Recommendation layer: combines both scorers into one ``MarketAnalysis``.

Modules
-------
aggregator : discover_for_product() + build_market_analysis() plus the
             tone, competition and engagement helpers. Pure functions,
             no DB or I/O.
"""
