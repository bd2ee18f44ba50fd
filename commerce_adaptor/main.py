from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import uuid
from typing import Callable, Optional

import httpx

from commerce_adaptor.adapters.implementations.ecommerce.commercetools import (
    CommercetoolsNormalizer,
    CommercetoolsProductClient,
)
from commerce_adaptor.api.error_handlers import register_exception_handlers
from commerce_adaptor.core.config import Settings, get_settings, load_env_file
from commerce_adaptor.core.logging import configure_logging, get_logger, set_correlation_id
from commerce_adaptor.infrastructure.auth.oauth import CredentialManager, epoch_millis
from commerce_adaptor.services.product_service import ProductService


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    clock: Callable[[], float] = epoch_millis,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        http_client: Outbound HTTP client; one is created (and closed on shutdown) if omitted
        clock: Epoch-millisecond clock for credential expiry

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=None,
        debug=settings.DEBUG
    )

    owns_http_client = http_client is None
    if owns_http_client:
        http_client = httpx.AsyncClient(timeout=settings.DEFAULT_TIMEOUT)

    wire_services(app, settings, http_client, clock)

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app, settings)

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting up {settings.PROJECT_NAME}")
        missing = settings.missing_commercetools_settings()
        if missing:
            logger.warning(
                "Commercetools configuration incomplete, product lookups will fail",
                extra={"data": {"missing": missing}}
            )

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.PROJECT_NAME}")
        if owns_http_client:
            await http_client.aclose()

    return app


def wire_services(
    app: FastAPI,
    settings: Settings,
    http_client: httpx.AsyncClient,
    clock: Callable[[], float],
) -> None:
    """
    Build the shared credential manager and product resolver.

    Args:
        app: FastAPI application instance
        settings: Application settings
        http_client: Outbound HTTP client
        clock: Epoch-millisecond clock
    """
    credential_manager = CredentialManager(settings, http_client, clock=clock)
    client = CommercetoolsProductClient(settings, http_client, credential_manager)
    normalizer = CommercetoolsNormalizer(
        preferred_currency=settings.PREFERRED_CURRENCY,
        fallback_locales=settings.FALLBACK_LOCALES,
    )

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.credential_manager = credential_manager
    app.state.product_service = ProductService(
        client,
        normalizer,
        default_locale=settings.DEFAULT_LOCALE,
    )


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                extra={"data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                }},
                exc_info=True
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={"data": {
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2),
            }}
        )

        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from commerce_adaptor.api.routes.health import health_router
    from commerce_adaptor.api.routes.product import router as product_router

    app.include_router(
        health_router,
        prefix=f"{settings.API_PREFIX}/health",
        tags=["Health"]
    )

    app.include_router(product_router, prefix=settings.API_PREFIX)


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("commerce_adaptor.main:app", host="0.0.0.0", port=8000)
