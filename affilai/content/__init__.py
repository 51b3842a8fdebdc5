"""
Ad copy templating.

Modules
-------
selling_points : key_selling_points(): fixed category → four-point table.
synthesizer    : synthesize_ad(): per-format headline / body / CTA templates.
"""
