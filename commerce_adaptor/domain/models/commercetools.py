"""
Typed records for the commercetools product-projection payload.

Only the fields the product resolver reads are declared; everything else
in the upstream response is ignored. Optional blocks (discounts, locale
entries, images, prices) are explicit so that callers never need chained
optional access on raw dictionaries.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CommercetoolsModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    class Config:
        populate_by_name = True
        extra = "ignore"


class Money(CommercetoolsModel):
    currency_code: Optional[str] = Field(default=None, alias="currencyCode")
    cent_amount: int = Field(alias="centAmount")
    type: Optional[str] = None
    fraction_digits: Optional[int] = Field(default=None, alias="fractionDigits")


class DiscountedPrice(CommercetoolsModel):
    value: Money


class Price(CommercetoolsModel):
    value: Money
    country: Optional[str] = None
    discounted: Optional[DiscountedPrice] = None

    @property
    def effective_cent_amount(self) -> int:
        """Discounted amount when a discount block is present, otherwise the standard amount."""
        if self.discounted is not None:
            return self.discounted.value.cent_amount
        return self.value.cent_amount


class Image(CommercetoolsModel):
    url: Optional[str] = None


class ProductVariant(CommercetoolsModel):
    id: Optional[int] = None
    sku: Optional[str] = None
    images: List[Image] = Field(default_factory=list)
    prices: List[Price] = Field(default_factory=list)


class RawProduct(CommercetoolsModel):
    """A product projection as returned by the commercetools search endpoint."""

    id: str
    name: Optional[Dict[str, str]] = None
    description: Optional[Dict[str, str]] = None
    master_variant: ProductVariant = Field(alias="masterVariant")
    variants: List[ProductVariant] = Field(default_factory=list)


class ProductProjectionPage(CommercetoolsModel):
    """Paged search response wrapper."""

    limit: Optional[int] = None
    count: Optional[int] = None
    total: Optional[int] = None
    results: List[RawProduct] = Field(default_factory=list)


class OAuthTokenResponse(BaseModel):
    """Body of a successful client-credentials grant."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    scope: Optional[str] = None
