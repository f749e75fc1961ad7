"""
Shared Exception Classes

Domain-specific exception classes for consistent error handling across all domains.
Provides structured error reporting with appropriate HTTP status codes.
"""

# Standard library imports
from typing import Optional, Dict, Any

# Third-party imports
from fastapi import HTTPException


class DomainException(Exception):
    """
    Base exception class for all domain-specific errors.

    Provides common functionality for error reporting and logging.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class InvalidValuationInputException(DomainException):
    """Raised when valuation input violates basic type constraints (negative or non-finite numbers)."""

    def __init__(self, errors: list):
        message = f"Invalid valuation input: {len(errors)} field error(s)"
        super().__init__(
            message=message,
            error_code="INVALID_VALUATION_INPUT",
            details={"errors": errors}
        )


class GenerationException(DomainException):
    """Raised when the external text generation service is unreachable or returns an error."""

    def __init__(self, source: str, reason: str):
        message = f"Generation error from '{source}': {reason}"
        super().__init__(
            message=message,
            error_code="GENERATION_ERROR",
            details={"source": source, "reason": reason}
        )


class InsightUnavailableException(DomainException):
    """Raised by single-category endpoints when no insight could be produced."""

    def __init__(self, category: str, reason: str):
        message = f"Insight '{category}' is unavailable: {reason}"
        super().__init__(
            message=message,
            error_code="INSIGHT_UNAVAILABLE",
            details={"category": category, "reason": reason}
        )


class APIKeyMissingException(DomainException):
    """Raised when required API keys are missing."""

    def __init__(self, service: str, key_name: str):
        message = f"API key missing for {service}: {key_name}"
        super().__init__(
            message=message,
            error_code="API_KEY_MISSING",
            details={"service": service, "key_name": key_name}
        )


class ConfigurationException(DomainException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_item: str, reason: str):
        message = f"Configuration error for {config_item}: {reason}"
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details={"config_item": config_item, "reason": reason}
        )


def domain_exception_to_http_exception(exception: DomainException) -> HTTPException:
    """
    Convert domain exceptions to FastAPI HTTPException with appropriate status codes.

    Args:
        exception: Domain-specific exception

    Returns:
        HTTPException with appropriate status code and detail
    """
    status_code_map = {
        InvalidValuationInputException: 400,
        GenerationException: 502,  # Bad Gateway - external service issue
        InsightUnavailableException: 502,
        APIKeyMissingException: 401,  # Unauthorized - missing credentials
        ConfigurationException: 500,
    }

    status_code = status_code_map.get(type(exception), 500)

    detail = {
        "error": exception.message,
        "error_code": exception.error_code,
        "details": exception.details
    }

    return HTTPException(status_code=status_code, detail=detail)


def handle_domain_exception(exception: Exception) -> HTTPException:
    """
    Handle domain exceptions and convert them to appropriate HTTP responses.

    Args:
        exception: Any exception that occurred

    Returns:
        HTTPException with appropriate status code and detail
    """
    if isinstance(exception, HTTPException):
        return exception
    if isinstance(exception, DomainException):
        return domain_exception_to_http_exception(exception)
    else:
        # Handle generic exceptions
        return HTTPException(
            status_code=500,
            detail={
                "error": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "details": {"message": str(exception)}
            }
        )
