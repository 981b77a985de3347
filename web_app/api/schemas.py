"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    ``url`` is optional here so a missing URL reaches the service and is
    reported as invalid input instead of a schema error.
    """

    url: Optional[str] = Field(None, description="The http(s) URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    id: str = Field(..., description="Opaque link identifier")
    shortCode: str = Field(..., description="The generated short code")
    shortUrl: str = Field(..., description="The complete short URL")
    originalUrl: str = Field(..., description="The original long URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "3f1c1b8e-5d7e-4d4a-9b8a-2c0f6f7a9e11",
                    "shortCode": "aB3xYz",
                    "shortUrl": "https://short.link/aB3xYz",
                    "originalUrl": "https://example.com/very/long/path",
                }
            ]
        }
    }


class LinkInfo(BaseModel):
    """A stored short link."""

    id: str
    originalUrl: str
    shortCode: str
    shortUrl: str
    clicks: int
    createdAt: str


class LinkListResponse(BaseModel):
    """Every stored short link."""

    urls: List[LinkInfo]


class ResolveResponse(BaseModel):
    """Resolved short code."""

    originalUrl: str
    shortCode: str


class QRRequest(BaseModel):
    """Request to render a URL as a QR code."""

    url: Optional[str] = Field(None, description="Content to encode")
    size: int = Field(200, ge=10, le=1000, description="Image edge length in pixels")


class QRResponse(BaseModel):
    """QR code image as a data URL."""

    qrCode: str = Field(..., description="data:image/...;base64 URL")
    url: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Key-value store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
