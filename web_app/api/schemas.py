"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""
    
    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    result: str = Field(..., description="The complete short URL")


class BatchShortenItem(BaseModel):
    """One URL of a batch request."""
    
    correlation_id: str = Field(..., description="Caller-chosen id echoed in the response")
    original_url: str = Field(..., min_length=1, max_length=2048)


class BatchShortenResult(BaseModel):
    """Short URL for one batch item."""
    
    correlation_id: str
    short_url: str


class UserURLResponse(BaseModel):
    """One of the caller's links."""
    
    short_url: str
    original_url: str


class ErrorResponse(BaseModel):
    """Error response."""
    
    detail: Optional[str] = Field(None, description="Detailed error information")
