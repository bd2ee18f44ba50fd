from fastapi import Request

from commerce_adaptor.core.config import Settings
from commerce_adaptor.services.product_service import ProductService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_product_service(request: Request) -> ProductService:
    """Product resolver wired at application start."""
    return request.app.state.product_service
