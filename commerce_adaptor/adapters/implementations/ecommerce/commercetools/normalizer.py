from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from commerce_adaptor.adapters.interfaces.normalizer import DataNormalizer
from commerce_adaptor.domain.models.commercetools import Price, ProductVariant, RawProduct
from commerce_adaptor.domain.models.product import ProductData

DEFAULT_PRODUCT_NAME = "Product"
CENTS_PER_UNIT = Decimal(100)


def localized_value(
    values: Optional[Dict[str, str]],
    locales: Iterable[str],
    default: str = "",
) -> str:
    """
    Pick the first non-empty entry of a localized string along a locale chain.

    Args:
        values: Locale-keyed strings, possibly absent
        locales: Locales to try, in order
        default: Returned when no locale in the chain has a value

    Returns:
        The selected string
    """
    if not values:
        return default
    for locale in locales:
        value = values.get(locale)
        if value:
            return value
    return default


def select_variant(product: RawProduct, sku: str) -> ProductVariant:
    """Variant carrying ``sku``, master first; the master variant if none does."""
    if product.master_variant.sku == sku:
        return product.master_variant
    for variant in product.variants:
        if variant.sku == sku:
            return variant
    return product.master_variant


def select_image_url(variant: ProductVariant) -> str:
    if variant.images:
        return variant.images[0].url or ""
    return ""


def select_price(prices: Sequence[Price], preferred_currency: str) -> Optional[Price]:
    """Price in the preferred currency, else the first price, else None."""
    for price in prices:
        if price.value.currency_code == preferred_currency:
            return price
    return prices[0] if prices else None


class CommercetoolsNormalizer(DataNormalizer[RawProduct, ProductData]):
    """Maps a commercetools product projection onto ``ProductData``."""

    def __init__(
        self,
        preferred_currency: str = "USD",
        fallback_locales: Optional[List[str]] = None,
    ):
        self.preferred_currency = preferred_currency
        self.fallback_locales = fallback_locales if fallback_locales is not None else ["en-US", "en-GB"]

    def locale_chain(self, locale: str) -> List[str]:
        return [locale] + [fallback for fallback in self.fallback_locales if fallback != locale]

    def normalize_product(self, raw_data: RawProduct, sku: str, locale: str) -> ProductData:
        variant = select_variant(raw_data, sku)
        price = select_price(variant.prices, self.preferred_currency)

        if price is None:
            amount = Decimal(0)
            currency = self.preferred_currency
        else:
            amount = Decimal(price.effective_cent_amount) / CENTS_PER_UNIT
            currency = price.value.currency_code or self.preferred_currency

        chain = self.locale_chain(locale)

        return ProductData(
            id=raw_data.id,
            name=localized_value(raw_data.name, chain, DEFAULT_PRODUCT_NAME),
            description=localized_value(raw_data.description, chain),
            image_url=select_image_url(variant),
            price=amount,
            currency=currency,
            sku=sku,
        )
