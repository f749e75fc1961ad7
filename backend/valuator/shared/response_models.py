"""
Shared Response Models

Standardized response envelopes used by every domain's endpoints.
"""

# Standard library imports
from datetime import datetime
from typing import Optional, Any, List
from enum import Enum

# Third-party imports
from pydantic import BaseModel, Field


class StatusEnum(str, Enum):
    """Standard status values for API responses."""
    SUCCESS = "success"
    ERROR = "error"
    PARTIAL = "partial"


class APIResponse(BaseModel):
    """
    Standard API response wrapper.

    Provides consistent structure for all API responses across domains.
    """
    status: StatusEnum = Field(..., description="Response status")
    message: Optional[str] = Field(None, description="Human-readable message")
    data: Optional[Any] = Field(None, description="Response payload")
    errors: Optional[List[str]] = Field(None, description="List of error messages")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")


class ValuationResponse(APIResponse):
    """Response model for valuation endpoints."""
    valuation_type: Optional[str] = Field(None, description="Type of valuation calculation")


class InsightResponse(APIResponse):
    """Response model for single-category insight endpoints."""
    category: Optional[str] = Field(None, description="Insight category")


def create_success_response(
    data: Any = None,
    message: str = "Operation completed successfully",
    response_class: type = APIResponse,
    **kwargs
) -> APIResponse:
    """
    Create a standardized success response.

    Args:
        data: Response payload
        message: Success message
        response_class: Response model class to use
        **kwargs: Additional fields for the response model

    Returns:
        Configured response instance
    """
    return response_class(
        status=StatusEnum.SUCCESS,
        message=message,
        data=data,
        **kwargs
    )
