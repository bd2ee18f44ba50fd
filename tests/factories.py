"""Fakes and payload builders for the commercetools tests."""

import asyncio
from typing import Any, Dict, List, Optional

import httpx


AUTH_URL = "https://auth.test.commercetools.com"
API_URL = "https://api.test.commercetools.com"
PROJECT_KEY = "demo-project"


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds * 1000


class FakeCommercetools:
    """In-process stand-in for the commercetools auth and product APIs."""

    def __init__(self):
        self.token_requests: List[httpx.Request] = []
        self.search_requests: List[httpx.Request] = []
        self.expires_in = 300
        self.token_status = 200
        self.search_status = 200
        self.results: List[Dict[str, Any]] = []
        self.token_delay = 0.0
        self.search_error: Optional[Exception] = None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            self.token_requests.append(request)
            if self.token_delay:
                await asyncio.sleep(self.token_delay)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(200, json={
                "access_token": f"token-{len(self.token_requests)}",
                "token_type": "Bearer",
                "expires_in": self.expires_in,
                "scope": f"view_products:{PROJECT_KEY}",
            })

        if request.url.path == f"/{PROJECT_KEY}/product-projections":
            self.search_requests.append(request)
            if self.search_error is not None:
                raise self.search_error
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"message": "boom"})
            return httpx.Response(200, json={
                "limit": 1,
                "count": len(self.results),
                "total": len(self.results),
                "results": self.results,
            })

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_product(
    product_id: str = "prod_1",
    master_sku: str = "SKU-1",
    name: Optional[Dict[str, str]] = None,
    description: Optional[Dict[str, str]] = None,
    images: Optional[List[str]] = None,
    prices: Optional[List[Dict[str, Any]]] = None,
    variants: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Build a product projection payload the way commercetools returns it."""
    product = {
        "id": product_id,
        "version": 3,
        "name": {"en-US": "Chair"} if name is None else name,
        "masterVariant": make_variant(1, master_sku, images, prices),
        "variants": variants or [],
    }
    if description is not None:
        product["description"] = description
    return product


def make_variant(
    variant_id: int,
    sku: str,
    images: Optional[List[str]] = None,
    prices: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "id": variant_id,
        "sku": sku,
        "images": [{"url": url, "dimensions": {"w": 800, "h": 600}} for url in (images or [])],
        "prices": prices or [],
    }


def make_price(currency: str, cent_amount: int, discounted: Optional[int] = None) -> Dict[str, Any]:
    price = {
        "value": {
            "type": "centPrecision",
            "currencyCode": currency,
            "centAmount": cent_amount,
            "fractionDigits": 2,
        }
    }
    if discounted is not None:
        price["discounted"] = {
            "value": {"currencyCode": currency, "centAmount": discounted},
            "discount": {"typeId": "product-discount", "id": "disc_1"},
        }
    return price


