"""
Domain errors raised by the generation flows.

Scorers never raise on malformed text; these errors only surface at the
caller level, where a product, link or platform the request names is missing.
"""

from __future__ import annotations


class ProductNotFoundError(RuntimeError):
    """Raised when a product id has no stored product.

    Attributes:
        product_id: The id that was looked up.
    """

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class PlatformUnavailableError(RuntimeError):
    """Raised when a requested platform did not clear the discovery floor.

    Attributes:
        product_id: The product the link was requested for.
        platform:   The requested platform slug.
    """

    def __init__(self, product_id: int, platform: str) -> None:
        self.product_id = product_id
        self.platform   = platform
        super().__init__(f"Platform {platform} not available for this product")


class NoPlatformsAvailableError(RuntimeError):
    """Raised when discovery returns no platform for a product.

    Attributes:
        product_id: The product the link was requested for.
    """

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"No affiliate platforms available for product {product_id}")


class LinkNotFoundError(RuntimeError):
    """Raised when an affiliate link id has no stored link.

    Attributes:
        link_id: The id that was looked up.
    """

    def __init__(self, link_id: int) -> None:
        self.link_id = link_id
        super().__init__(f"Affiliate link {link_id} not found")
