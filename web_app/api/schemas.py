"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Dict, Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortURLData(BaseModel):
    """A stored short URL."""

    id: int = Field(..., description="Store-assigned id")
    original_url: str = Field(..., description="The original long URL")
    short_code: str = Field(..., description="The 8 character short code")
    short_url: str = Field(..., description="The complete short URL")
    created_at: str = Field(..., description="Creation timestamp (ISO 8601)")


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    success: bool = True
    data: ShortURLData
    message: str = "URL shortened successfully"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "data": {
                        "id": 1,
                        "original_url": "https://www.example.com",
                        "short_code": "bK3x9Qaa",
                        "short_url": "http://localhost:8080/bK3x9Qaa",
                        "created_at": "2024-01-01T12:00:00+00:00",
                    },
                    "message": "URL shortened successfully",
                }
            ]
        }
    }


class DatabaseStatus(BaseModel):
    """Database part of the health payload."""

    status: str = Field(..., description="connected or disconnected")
    urls_table_exists: Optional[bool] = None
    urls_count: Optional[int] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health/status payload served at the root path."""

    message: str = "URL Shortener API"
    version: str
    status: str = Field(..., description="ready or degraded")
    database: DatabaseStatus
    cache: str = Field(..., description="connected, disconnected or disabled")
    endpoints: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
