"""
Content synthesizer: renders headline, body and call-to-action for one format.

Pure string templating. One renderer per ``AdFormat`` plus a generic
fallback for any format string that is not a known ``AdFormat``.

Every template draws on the product name, the lower-cased category, the
description and the first one to three of ``analysis.key_selling_points``.

Custom instructions slot (when absent or empty)
-----------------------------------------------
    social_post   appended inline; falls back to the first selling point
    story         appended after "sells out! "; left empty
    video_script  trailing "[NOTE] ..." block; omitted
    carousel      trailing paragraph after the slides; left empty
    email         trailing "P.S. ..." line; omitted
    sms           appended after "[LINK]"; omitted
    (fallback)    ignored
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Union

from affilai.models.product import Product
from affilai.models.recommendation import MarketAnalysis
from affilai.taxonomy.ad_formats import AdFormat


class AdContent(NamedTuple):
    headline: str
    body: str
    cta: str


_Renderer = Callable[[Product, list[str], str], AdContent]


def _point(points: list[str], index: int) -> str:
    return points[index] if index < len(points) else ""


def _render_social_post(product: Product, points: list[str], note: str) -> AdContent:
    description = product.description or ""
    tail = note if note else _point(points, 0)
    return AdContent(
        headline=f"Transform your routine with {product.name}",
        body=(
            f"Discover why everyone is talking about {product.name}. "
            f"{description} {tail} #trending #musthave"
        ),
        cta="Shop Now",
    )


def _render_story(product: Product, points: list[str], note: str) -> AdContent:
    return AdContent(
        headline=f"POV: You just discovered {product.name}",
        body=(
            f"The {product.category.lower()} that's breaking the internet. "
            f"Swipe up before it sells out! {note}"
        ),
        cta="Swipe Up",
    )


def _render_video_script(product: Product, points: list[str], note: str) -> AdContent:
    category = product.category.lower()
    benefits = "\n".join(f"- {p}" for p in points[:3])
    note_block = f"\n\n[NOTE] {note}" if note else ""
    return AdContent(
        headline=f"STOP scrolling! You need to see this {category}",
        body=(
            f"[HOOK] Wait, you don't know about {product.name} yet?\n\n"
            f"[PROBLEM] Struggling with your {category}?\n\n"
            f"[SOLUTION] {product.name} is the game-changer you've been waiting for.\n\n"
            f"[BENEFITS]\n{benefits}\n\n"
            f"[CTA] Link in bio - but hurry, it's selling fast!{note_block}"
        ),
        cta="Link in Bio",
    )


def _render_carousel(product: Product, points: list[str], note: str) -> AdContent:
    return AdContent(
        headline=f"5 Reasons {product.name} is a Must-Have",
        body=(
            f"Slide 1: Meet your new favorite {product.category.lower()}\n"
            f"Slide 2: {_point(points, 0)}\n"
            f"Slide 3: {_point(points, 1)}\n"
            f"Slide 4: {_point(points, 2)}\n"
            f"Slide 5: Ready to transform your routine?\n\n"
            f"{note}"
        ),
        cta="Save for Later",
    )


def _render_email(product: Product, points: list[str], note: str) -> AdContent:
    description = product.description or ""
    bullet_list = "\n".join(f"  - {p}" for p in points)
    postscript = f"\n\nP.S. {note}" if note else ""
    return AdContent(
        headline=f"You're going to love {product.name} - Here's why",
        body=(
            "Hi there,\n\n"
            f"We noticed you've been looking for the perfect {product.category.lower()}. "
            "Well, search no more!\n\n"
            f"Introducing {product.name} - {description}\n\n"
            f"What makes it special:\n{bullet_list}\n\n"
            "Don't miss out on this opportunity to upgrade your routine.\n\n"
            f"Best,\nThe Team{postscript}"
        ),
        cta="Shop Now",
    )


def _render_sms(product: Product, points: list[str], note: str) -> AdContent:
    suffix = f" {note}" if note else ""
    return AdContent(
        headline=product.name,
        body=(
            f"Hey! {product.name} is finally back in stock. "
            f"{_point(points, 0)} Get yours: [LINK]{suffix}"
        ),
        cta="Reply STOP to unsubscribe",
    )


def _render_generic(product: Product, points: list[str], note: str) -> AdContent:
    return AdContent(
        headline=f"Discover {product.name}",
        body=f"{product.name} - {product.description or ''}",
        cta="Learn More",
    )


_RENDERERS: dict[AdFormat, _Renderer] = {
    AdFormat.SOCIAL_POST:  _render_social_post,
    AdFormat.STORY:        _render_story,
    AdFormat.VIDEO_SCRIPT: _render_video_script,
    AdFormat.CAROUSEL:     _render_carousel,
    AdFormat.EMAIL:        _render_email,
    AdFormat.SMS:          _render_sms,
}


def synthesize_ad(
    product:             Product,
    ad_format:           Union[AdFormat, str],
    analysis:            MarketAnalysis,
    custom_instructions: Optional[str] = None,
) -> AdContent:
    """Render ad copy for ``product`` in ``ad_format``.

    Args:
        product:             Product snapshot.
        ad_format:           An ``AdFormat`` or a raw format string. Strings
                             that are not an exact ``AdFormat`` value use the
                             generic template.
        analysis:            Aggregated recommendation; supplies selling points.
        custom_instructions: Optional free text slotted in per format.

    Returns:
        ``AdContent(headline, body, cta)``.
    """
    try:
        fmt: Optional[AdFormat] = AdFormat(ad_format)
    except ValueError:
        fmt = None

    renderer = _RENDERERS[fmt] if fmt is not None else _render_generic
    return renderer(product, list(analysis.key_selling_points), custom_instructions or "")
