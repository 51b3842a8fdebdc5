"""
Attribution URL builder.

Builds trackable destination URLs by plain string concatenation:

    tiktok     {dest}?utm_source=tiktok&utm_medium=affiliate&utm_campaign={slug}&ref={id}
    instagram  {dest}?utm_source=instagram&utm_medium=shopping&utm_campaign={slug}&ref={id}
    youtube    {dest}?utm_source=youtube&utm_medium=affiliate&utm_campaign={slug}&ref={id}
    pinterest  {dest}?utm_source=pinterest&utm_medium=pin&utm_campaign={slug}&ref={id}
    amazon     https://www.amazon.com/dp/XXXXX?tag=affilai-20&linkCode=as2&ref={id}
    (other)    {dest}?ref={id}&utm_campaign={slug}

The campaign slug is the lower-cased product name with spaces replaced by
underscores. Nothing is URL-encoded, and a destination that already has a
query string gets a second ``?``.

The tracking id is ``afl_<epoch milliseconds>`` read from an injectable
clock, which keeps the rest of the module deterministic under test.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from affilai.utils.time_utils import utcnow

Clock = Callable[[], datetime]

AMAZON_ASSOCIATE_TAG = "affilai-20"

_UTM_TEMPLATES: dict[str, str] = {
    "tiktok":    "{dest}?utm_source=tiktok&utm_medium=affiliate&utm_campaign={campaign}&ref={ref}",
    "instagram": "{dest}?utm_source=instagram&utm_medium=shopping&utm_campaign={campaign}&ref={ref}",
    "youtube":   "{dest}?utm_source=youtube&utm_medium=affiliate&utm_campaign={campaign}&ref={ref}",
    "pinterest": "{dest}?utm_source=pinterest&utm_medium=pin&utm_campaign={campaign}&ref={ref}",
    "amazon": (
        "https://www.amazon.com/dp/XXXXX?tag=" + AMAZON_ASSOCIATE_TAG
        + "&linkCode=as2&ref={ref}"
    ),
}

_FALLBACK_TEMPLATE = "{dest}?ref={ref}&utm_campaign={campaign}"


def generate_tracking_id(clock: Optional[Clock] = None) -> str:
    """Return ``"afl_<epoch ms>"`` from ``clock`` (defaults to UTC now)."""
    now = (clock or utcnow)()
    return f"afl_{int(now.timestamp() * 1000)}"


def campaign_slug(product_name: str) -> str:
    return product_name.lower().replace(" ", "_")


def build_tracking_url(
    platform:        str,
    program_name:    str,
    product_name:    str,
    destination_url: str,
    clock:           Optional[Clock] = None,
) -> str:
    """Append platform-specific attribution parameters to ``destination_url``.

    Args:
        platform:        Platform slug, e.g. ``"tiktok"``. Unknown slugs get
                         the generic ``ref``/``utm_campaign`` pair.
        program_name:    Affiliate program name. Accepted for interface
                         parity with model-backed builders; unused here.
        product_name:    Product name, used for the campaign slug.
        destination_url: Landing URL. Ignored for amazon.
        clock:           Zero-arg callable returning an aware ``datetime``.

    Returns:
        The tracking URL.
    """
    template = _UTM_TEMPLATES.get(str(platform), _FALLBACK_TEMPLATE)
    return template.format(
        dest=destination_url,
        campaign=campaign_slug(product_name),
        ref=generate_tracking_id(clock),
    )
