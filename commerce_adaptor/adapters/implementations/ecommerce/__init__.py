"""
E-commerce adapters package for integrating with e-commerce platforms.
"""

from commerce_adaptor.adapters.implementations.ecommerce.commercetools import (
    CommercetoolsNormalizer,
    CommercetoolsProductClient,
)

__all__ = [
    "CommercetoolsNormalizer",
    "CommercetoolsProductClient",
]
