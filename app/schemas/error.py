"""
Error response schema for API documentation.
Every failure response has this shape.
"""

from pydantic import BaseModel, Field
from typing import Optional


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid email or password"]
    )

    code: Optional[str] = Field(
        None,
        description="Error code identifier",
        examples=["UNAUTHORIZED"]
    )

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Insufficient permissions"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Conflict with existing data"},
}
