"""
Error handling module for the Commerce Adaptor.
Classifies failures from the commerce platform so that outages can be told
apart from genuine absence in the logs.
"""
import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from commerce_adaptor.core.exceptions import (
    AuthError,
    ConfigurationError,
    IntegrationException,
    ValidationException,
)


class ErrorCategory(str, Enum):
    """Categorization of errors for processing and reporting."""
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    EXTERNAL_API = "external_api"
    VALIDATION = "validation"
    INTERNAL = "internal"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorDetails(BaseModel):
    """Structured error details for consistency in logging and reporting."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str
    error_type: str
    http_status_code: Optional[int] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    stacktrace: Optional[str] = None

    @property
    def is_transient(self) -> bool:
        """Whether a retry later could plausibly succeed."""
        if self.category in (ErrorCategory.CONNECTION, ErrorCategory.TIMEOUT):
            return True
        return self.http_status_code is not None and (
            self.http_status_code >= 500 or self.http_status_code == 429
        )


class ErrorHandler:
    """
    Central error processing class that handles error categorization
    and logging.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize the error handler.

        Args:
            logger: Logger instance for error logging
        """
        self.logger = logger

    def handle_error(
        self,
        exception: Exception,
        source: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorDetails:
        """
        Categorize and log an error.

        Args:
            exception: The exception that occurred
            source: Source identifier (e.g., "product_service")
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        error_details = self.categorize_error(exception, source, context or {})
        self.log_error(error_details)
        return error_details

    def categorize_error(
        self,
        exception: Exception,
        source: str,
        context: Dict[str, Any],
    ) -> ErrorDetails:
        """
        Categorize an error based on the exception type and build error details.

        Args:
            exception: The exception that occurred
            source: Source identifier
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        cause = getattr(exception, "original_exception", None) or exception
        http_status_code = None

        if isinstance(exception, ConfigurationError):
            category, severity = ErrorCategory.CONFIGURATION, ErrorSeverity.CRITICAL
        elif isinstance(cause, httpx.TimeoutException):
            category, severity = ErrorCategory.TIMEOUT, ErrorSeverity.MEDIUM
        elif isinstance(cause, httpx.RequestError):
            category, severity = ErrorCategory.CONNECTION, ErrorSeverity.MEDIUM
        elif isinstance(exception, AuthError):
            category, severity = ErrorCategory.AUTHENTICATION, ErrorSeverity.HIGH
        elif isinstance(exception, IntegrationException):
            category, severity = ErrorCategory.EXTERNAL_API, ErrorSeverity.HIGH
        elif isinstance(exception, (ValidationException, ValidationError)):
            category, severity = ErrorCategory.VALIDATION, ErrorSeverity.MEDIUM
        else:
            category, severity = ErrorCategory.INTERNAL, ErrorSeverity.HIGH

        if isinstance(exception, IntegrationException):
            http_status_code = exception.upstream_status
            if http_status_code in (401, 403):
                category = ErrorCategory.AUTHENTICATION

        return ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=category,
            severity=severity,
            message=str(exception),
            source=source,
            error_type=type(exception).__name__,
            http_status_code=http_status_code,
            context=context,
            stacktrace="".join(traceback.format_exception(type(exception), exception, exception.__traceback__)),
        )

    def log_error(self, error_details: ErrorDetails) -> None:
        """
        Log error details at the appropriate level.

        Args:
            error_details: Structured error information
        """
        log_data = {
            "category": error_details.category.value,
            "severity": error_details.severity.value,
            "source": error_details.source,
            "error_type": error_details.error_type,
            "transient": error_details.is_transient,
        }

        if error_details.http_status_code:
            log_data["http_status_code"] = error_details.http_status_code

        if error_details.context:
            log_data["context"] = error_details.context

        message = f"{error_details.source}: {error_details.message}"

        if error_details.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(message, extra={"data": log_data})
        elif error_details.severity == ErrorSeverity.HIGH:
            self.logger.error(message, extra={"data": log_data})
            if error_details.stacktrace:
                self.logger.debug(f"Stacktrace:\n{error_details.stacktrace}")
        elif error_details.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(message, extra={"data": log_data})
        else:
            self.logger.info(message, extra={"data": log_data})
