"""
API response envelopes for the FastAPI application.
"""

from pydantic import BaseModel, Field


class ResultResponse(BaseModel):
    """Response model for successful mutations without a record body."""
    result: str = Field("success", description="Outcome of the operation")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
