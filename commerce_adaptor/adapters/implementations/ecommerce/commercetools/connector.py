from typing import Optional

import httpx
from pydantic import ValidationError

from commerce_adaptor.core.config import Settings
from commerce_adaptor.core.exceptions import IntegrationException
from commerce_adaptor.core.logging import get_logger
from commerce_adaptor.domain.models.commercetools import ProductProjectionPage, RawProduct
from commerce_adaptor.infrastructure.auth.oauth import CredentialManager

logger = get_logger(__name__)


def quote_predicate_value(value: str) -> str:
    """Quote a string literal for a commercetools query predicate."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_sku_predicate(sku: str) -> str:
    """
    Build the ``where`` predicate matching a SKU on any variant.

    Args:
        sku: Exact SKU to match

    Returns:
        Predicate matching the master variant or any alternate variant
    """
    quoted = quote_predicate_value(sku)
    return f"masterVariant(sku={quoted}) or variants(sku={quoted})"


class CommercetoolsProductClient:
    """Queries the commercetools product-projection search endpoint."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        credential_manager: CredentialManager,
    ):
        self.settings = settings
        self.http_client = http_client
        self.credential_manager = credential_manager

    @property
    def projections_url(self) -> str:
        api_url = self.settings.COMMERCETOOLS_API_URL.rstrip("/")
        return f"{api_url}/{self.settings.COMMERCETOOLS_PROJECT_KEY}/product-projections"

    async def search_by_sku(self, sku: str) -> Optional[RawProduct]:
        """
        Find the first product with a variant carrying ``sku``.

        Args:
            sku: Exact SKU to match

        Returns:
            The matching product, or None when nothing matches

        Raises:
            ConfigurationError: If commercetools settings are missing
            AuthError: If a token could not be obtained
            IntegrationException: If the search request fails or returns garbage
        """
        token = await self.credential_manager.get_access_token()

        # httpx percent-encodes the predicate, SKU included
        params = {"where": build_sku_predicate(sku), "limit": 1}

        try:
            response = await self.http_client.get(
                self.projections_url,
                params=params,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                }
            )
            response.raise_for_status()
            page = ProductProjectionPage.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            raise IntegrationException(
                f"Failed to fetch product: {e.response.status_code} {e.response.reason_phrase}",
                context={"sku": sku, "upstream_status": e.response.status_code},
                original_exception=e
            )
        except httpx.RequestError as e:
            raise IntegrationException(
                f"Failed to connect to commercetools: {str(e)}",
                context={"sku": sku},
                original_exception=e
            )
        except (ValueError, ValidationError) as e:
            raise IntegrationException(
                "Unexpected product search response from commercetools",
                context={"sku": sku},
                original_exception=e
            )

        if not page.results:
            logger.debug(f"No product matches SKU {sku}")
            return None

        return page.results[0]
