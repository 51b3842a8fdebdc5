"""
Generation flows: product id in, persisted ad copy or affiliate link out.

Each flow reads a product from an ``AdStorage``, runs the pure
recommendation core and hands the result back to the storage for
persistence. Flows never open connections themselves.

Flows
-----
generate_ad_for_product          analysis → synthesized copy → saved ad
generate_affiliate_link          best discovered platform → saved link
generate_link_for_platform       named platform (must clear discovery) → saved link
refresh_affiliate_link           existing link → best discovered platform, rewritten in place
delete_affiliate_link            remove a link
generate_links_for_all_products  one best link for every product without a link
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from affilai.config import AppConfig, DiscoveryConfig
from affilai.content.synthesizer import synthesize_ad
from affilai.errors import (
    LinkNotFoundError,
    NoPlatformsAvailableError,
    PlatformUnavailableError,
    ProductNotFoundError,
)
from affilai.models.ad_copy import AffiliateLink, GeneratedAdCopy
from affilai.models.product import Product
from affilai.models.recommendation import MarketAnalysis, PlatformRecommendation
from affilai.pipeline.storage import AdStorage
from affilai.recommendations.aggregator import build_market_analysis, discover_for_product
from affilai.taxonomy.ad_formats import AdFormat
from affilai.taxonomy.platforms import Platform
from affilai.tracking.urls import Clock, build_tracking_url

logger = logging.getLogger(__name__)


class AdGenerationResult(BaseModel):
    """Saved ad copy plus the analysis it was rendered from."""

    model_config = ConfigDict(frozen=True)

    ad_copy: GeneratedAdCopy
    market_analysis: MarketAnalysis


def _discovery(config: Optional[AppConfig]) -> DiscoveryConfig:
    return config.discovery if config is not None else DiscoveryConfig()


def _require_product(storage: AdStorage, product_id: int) -> Product:
    product = storage.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


# ── Ad copy ───────────────────────────────────────────────────────────────────

def generate_ad_for_product(
    storage:             AdStorage,
    product_id:          int,
    ad_format:           Union[AdFormat, str, None] = None,
    custom_instructions: Optional[str] = None,
    config:              Optional[AppConfig] = None,
) -> AdGenerationResult:
    """Analyse a product, render copy and persist it.

    Args:
        storage:             Storage collaborator.
        product_id:          Product to advertise.
        ad_format:           Format to render. ``None`` uses the recommended
                             format. Unknown strings render the generic
                             template and are stored verbatim.
        custom_instructions: Optional free text slotted into the template.
        config:              Supplies discovery thresholds; defaults apply
                             when ``None``.

    Returns:
        ``AdGenerationResult`` holding the saved ad and its analysis.

    Raises:
        ProductNotFoundError: If ``product_id`` is not stored.
    """
    product = _require_product(storage, product_id)
    discovery = _discovery(config)

    analysis = build_market_analysis(
        product,
        fallback_platform=discovery.fallback_platform,
        min_score=discovery.min_audience_match,
        limit=discovery.max_platforms,
    )

    final_format = str(ad_format) if ad_format is not None else analysis.recommended_ad_type.value
    content = synthesize_ad(product, final_format, analysis, custom_instructions)

    ad = GeneratedAdCopy(
        product_id=product_id,
        variation_name=f"{product.name} - {final_format} Ad",
        ad_format=final_format,
        headline=content.headline,
        body_text=content.body,
        cta=content.cta,
        platform_specific_data={
            "target_platform":   analysis.recommended_platform.value,
            "suggested_tone":    analysis.suggested_tone,
            "competition_level": analysis.competition_level,
        },
        performance_score=analysis.estimated_engagement_score,
    )
    saved = storage.save_ad(ad)

    logger.info(
        "Generated %s ad %s for product %d (engagement=%.3f)",
        final_format, saved.ad_id, product_id, analysis.estimated_engagement_score,
        extra={"product_id": product_id, "ad_id": saved.ad_id},
    )
    return AdGenerationResult(ad_copy=saved, market_analysis=analysis)


# ── Affiliate links ───────────────────────────────────────────────────────────

def _program_link(
    product_id:   int,
    product_name: str,
    program:      PlatformRecommendation,
    clock:        Optional[Clock],
) -> AffiliateLink:
    tracking_url = build_tracking_url(
        program.platform.value,
        program.program_name,
        product_name,
        program.affiliate_url,
        clock=clock,
    )
    return AffiliateLink(
        product_id=product_id,
        product_name=product_name,
        platform=program.platform,
        program_name=program.program_name,
        commission_rate=program.commission_rate,
        cookie_duration=program.cookie_duration,
        tracking_url=tracking_url,
        destination_url=program.affiliate_url,
    )


def _save_program_link(
    storage: AdStorage,
    product: Product,
    product_id: int,
    program: PlatformRecommendation,
    clock: Optional[Clock],
) -> AffiliateLink:
    saved = storage.save_link(_program_link(product_id, product.name, program, clock))
    logger.info(
        "Created %s link %s for product %d", program.platform.value, saved.link_id, product_id,
        extra={"product_id": product_id, "link_id": saved.link_id},
    )
    return saved


def _best_program(
    product: Product,
    product_id: int,
    config: Optional[AppConfig],
) -> PlatformRecommendation:
    discovery = _discovery(config)
    programs = discover_for_product(
        product, min_score=discovery.min_audience_match, limit=discovery.max_platforms
    )
    if not programs:
        raise NoPlatformsAvailableError(product_id)
    # Discovery is already sorted by audience match; the head is the best.
    return programs[0]


def generate_affiliate_link(
    storage:    AdStorage,
    product_id: int,
    clock:      Optional[Clock] = None,
    config:     Optional[AppConfig] = None,
) -> AffiliateLink:
    """Create a tracking link on the product's best-matching platform.

    Raises:
        ProductNotFoundError:      If ``product_id`` is not stored.
        NoPlatformsAvailableError: If no platform clears the discovery floor.
    """
    product = _require_product(storage, product_id)
    program = _best_program(product, product_id, config)
    return _save_program_link(storage, product, product_id, program, clock)


def generate_link_for_platform(
    storage:    AdStorage,
    product_id: int,
    platform:   Union[Platform, str],
    clock:      Optional[Clock] = None,
    config:     Optional[AppConfig] = None,
) -> AffiliateLink:
    """Create a tracking link on a named platform.

    ``platform`` is matched case-insensitively, ignoring surrounding
    whitespace.

    Raises:
        ProductNotFoundError:     If ``product_id`` is not stored.
        PlatformUnavailableError: If ``platform`` is unknown or not among
            the discovered platforms for this product.
    """
    product = _require_product(storage, product_id)
    discovery = _discovery(config)

    wanted = Platform.parse(str(platform))
    if wanted is not None:
        programs = discover_for_product(
            product, min_score=discovery.min_audience_match, limit=discovery.max_platforms
        )
        for program in programs:
            if program.platform is wanted:
                return _save_program_link(storage, product, product_id, program, clock)

    raise PlatformUnavailableError(product_id, str(platform).strip())


def refresh_affiliate_link(
    storage: AdStorage,
    link_id: int,
    clock:   Optional[Clock] = None,
    config:  Optional[AppConfig] = None,
) -> AffiliateLink:
    """Re-run discovery for a link's product and point the link at the best platform.

    The link keeps its id, product and ``created_at``; platform, program,
    commission, cookie window and both URLs are rebuilt, and the status
    returns to ``"active"``. The campaign slug uses the product name stored
    on the link.

    Raises:
        LinkNotFoundError:         If ``link_id`` is not stored.
        ProductNotFoundError:      If the link's product is gone.
        NoPlatformsAvailableError: If no platform clears the discovery floor.
    """
    existing = storage.get_link(link_id)
    if existing is None:
        raise LinkNotFoundError(link_id)

    product = _require_product(storage, existing.product_id)
    program = _best_program(product, existing.product_id, config)

    fresh = _program_link(existing.product_id, existing.product_name, program, clock)
    refreshed = storage.refresh_link(link_id, fresh)
    if refreshed is None:
        raise LinkNotFoundError(link_id)

    logger.info(
        "Refreshed link %d: %s -> %s", link_id, existing.platform.value, program.platform.value,
        extra={"product_id": existing.product_id, "link_id": link_id},
    )
    return refreshed


def delete_affiliate_link(storage: AdStorage, link_id: int) -> None:
    """Delete a link.

    Raises:
        LinkNotFoundError: If ``link_id`` is not stored.
    """
    if not storage.delete_link(link_id):
        raise LinkNotFoundError(link_id)


def generate_links_for_all_products(
    storage: AdStorage,
    clock:   Optional[Clock] = None,
    config:  Optional[AppConfig] = None,
) -> list[AffiliateLink]:
    """Create one best-platform link for every product that has none yet.

    Per-product failures are logged and skipped; the batch continues.

    Returns:
        The links created in this call, in product order.
    """
    created: list[AffiliateLink] = []
    skipped = 0

    for product in storage.list_products():
        assert product.product_id is not None
        if storage.list_links_by_product(product.product_id):
            skipped += 1
            continue
        try:
            created.append(
                generate_affiliate_link(storage, product.product_id, clock=clock, config=config)
            )
        except (RuntimeError, ValueError) as exc:
            logger.warning(
                "Failed to generate link for product %d: %s", product.product_id, exc,
                extra={"product_id": product.product_id},
            )

    logger.info(
        "Batch link generation: %d created, %d already linked", len(created), skipped
    )
    return created
