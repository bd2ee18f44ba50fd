"""
Error handling package for the Commerce Adaptor.
Provides centralized error categorization and logging.
"""

from commerce_adaptor.infrastructure.error.handler import (
    ErrorHandler,
    ErrorDetails,
    ErrorCategory,
    ErrorSeverity
)

__all__ = [
    "ErrorHandler",
    "ErrorDetails",
    "ErrorCategory",
    "ErrorSeverity",
]
