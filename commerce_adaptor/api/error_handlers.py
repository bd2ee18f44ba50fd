from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commerce_adaptor.core.exceptions import (
    APIException,
    ProductNotFoundError,
    ValidationException,
)
from commerce_adaptor.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={"data": {"status_code": exc.status_code, "error_code": exc.code, "context": exc.context}}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_validation_exception(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Handle validation errors.

    Args:
        request: FastAPI request object
        exc: ValidationException instance

    Returns:
        JSONResponse: Formatted validation error response
    """
    logger.warning(
        f"Validation error: {exc.detail}",
        extra={"data": {"field": exc.context.get("field"), "path": request.url.path}}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_not_found_exception(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    """
    Handle product not found errors.

    Args:
        request: FastAPI request object
        exc: ProductNotFoundError instance

    Returns:
        JSONResponse: Formatted not found error response
    """
    logger.info(
        f"Resource not found: {exc.detail}",
        extra={"data": {"sku": exc.sku}}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle framework-level request validation errors as client errors."""
    logger.warning(
        "Request validation error",
        extra={"data": {"errors": [error["msg"] for error in exc.errors()]}}
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"}
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing their detail."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ValidationException, handle_validation_exception)
    app.add_exception_handler(ProductNotFoundError, handle_not_found_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
