import re
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from commerce_adaptor.api.dependencies import get_app_settings, get_product_service
from commerce_adaptor.core.config import Settings
from commerce_adaptor.core.exceptions import (
    ProductNotFoundError,
    ValidationException,
)
from commerce_adaptor.core.logging import get_logger
from commerce_adaptor.services.product_service import ProductService

router = APIRouter(prefix="/commercetools", tags=["products"])
logger = get_logger(__name__)

LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*")


def single_query_value(values: List[str]) -> str:
    """The one value of a query parameter, unmodified, or "" if absent, repeated or blank."""
    if len(values) != 1 or not values[0].strip():
        return ""
    return values[0]


def cache_control_header(settings: Settings) -> str:
    return (
        f"public, s-maxage={settings.PRODUCT_CACHE_MAX_AGE}, "
        f"stale-while-revalidate={settings.PRODUCT_STALE_WHILE_REVALIDATE}"
    )


@router.get(
    "/product",
    summary="Get product by SKU"
)
async def get_product(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    product_service: ProductService = Depends(get_product_service)
):
    """Gets a normalized product by SKU for the requested locale."""
    sku = single_query_value(request.query_params.getlist("sku"))
    if not sku:
        raise ValidationException("SKU is required", field="sku")

    locales = request.query_params.getlist("locale")
    if not locales:
        locale = settings.DEFAULT_LOCALE
    else:
        locale = single_query_value(locales)
        if not LOCALE_PATTERN.fullmatch(locale):
            raise ValidationException("Invalid locale parameter", field="locale")

    try:
        product = await product_service.get_product_by_sku(sku, locale)
    except Exception as e:
        logger.error(f"Error fetching product {sku} from commercetools: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch product"}
        )

    if product is None:
        raise ProductNotFoundError(sku)

    return JSONResponse(
        content=product.to_dict(),
        headers={"Cache-Control": cache_control_header(settings)}
    )
