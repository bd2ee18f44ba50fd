from fastapi import status
from typing import Any, Dict, List, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a client-facing response body.

        Context stays server-side; it is logged, never returned.
        """
        return {"error": self.detail}


class ConfigurationError(APIException):
    """Exception raised when required commerce settings are missing."""

    def __init__(
        self,
        missing: List[str],
        code: str = "configuration_error",
    ):
        self.missing = list(missing)
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Missing required commercetools configuration: {', '.join(self.missing)}",
            code=code,
            context={"missing": self.missing}
        )


class IntegrationException(APIException):
    """Exception raised when an external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        # Add original exception info to context if available
        if original_exception and self.context is not None:
            self.context["original_error"] = str(original_exception)

    @property
    def upstream_status(self) -> Optional[int]:
        """HTTP status returned by the upstream API, if it answered at all."""
        return self.context.get("upstream_status")


class AuthError(IntegrationException):
    """Exception raised when the commerce platform rejects or fails the credential grant."""

    def __init__(
        self,
        detail: str = "Authentication with commerce platform failed",
        code: str = "authentication_error",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            detail=detail,
            code=code,
            status_code=status.HTTP_502_BAD_GATEWAY,
            context=context,
            original_exception=original_exception
        )


class ValidationException(APIException):
    """Exception raised when request input validation fails."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )


class ProductNotFoundError(APIException):
    """Exception raised when no product matches a SKU."""

    def __init__(
        self,
        sku: str,
        detail: str = "Product not found",
        code: str = "not_found_error",
    ):
        self.sku = sku
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context={"resource_type": "product", "sku": sku}
        )
