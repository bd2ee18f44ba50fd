from typing import Optional

from commerce_adaptor.adapters.implementations.ecommerce.commercetools import (
    CommercetoolsNormalizer,
    CommercetoolsProductClient,
)
from commerce_adaptor.core.logging import get_logger
from commerce_adaptor.domain.models.product import ProductData
from commerce_adaptor.infrastructure.error.handler import ErrorHandler

logger = get_logger(__name__)


class ProductService:
    """
    Resolves products by SKU from commercetools.

    Callers only ever see a product or ``None``. Configuration, authentication
    and transport failures are logged with their category and then reported
    as absence, the same as a search with no match.
    """

    def __init__(
        self,
        client: CommercetoolsProductClient,
        normalizer: CommercetoolsNormalizer,
        default_locale: str = "en-US",
        error_handler: Optional[ErrorHandler] = None,
    ):
        """Initialize with the search client and normalizer."""
        self.client = client
        self.normalizer = normalizer
        self.default_locale = default_locale
        self.error_handler = error_handler or ErrorHandler(logger)

    async def get_product_by_sku(self, sku: str, locale: Optional[str] = None) -> Optional[ProductData]:
        """Gets product by SKU, or None if it cannot be resolved."""
        locale = locale or self.default_locale
        logger.info(f"Getting product {sku} for locale {locale}")

        try:
            raw_product = await self.client.search_by_sku(sku)
            if raw_product is None:
                logger.info(f"Product {sku} not found")
                return None

            product = self.normalizer.normalize_product(raw_product, sku, locale)

        except Exception as e:
            self.error_handler.handle_error(
                e,
                source="product_service",
                context={"sku": sku, "locale": locale}
            )
            return None

        logger.debug(f"Resolved product {sku} to {product.id}")
        return product
