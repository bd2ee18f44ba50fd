"""
Commercetools integration: product-projection search and normalization.
"""

from commerce_adaptor.adapters.implementations.ecommerce.commercetools.connector import (
    CommercetoolsProductClient,
    build_sku_predicate,
)
from commerce_adaptor.adapters.implementations.ecommerce.commercetools.normalizer import (
    CommercetoolsNormalizer,
    localized_value,
    select_image_url,
    select_price,
    select_variant,
)

__all__ = [
    "CommercetoolsProductClient",
    "CommercetoolsNormalizer",
    "build_sku_predicate",
    "localized_value",
    "select_image_url",
    "select_price",
    "select_variant",
]
