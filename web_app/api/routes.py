"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, HTTPException, status

from shortlink.errors import InvalidInputError
from ..request_utils import short_url_for
from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkInfo,
    LinkListResponse,
    ResolveResponse,
    QRRequest,
    QRResponse,
    HealthResponse,
    ErrorResponse,
)

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid URL"},
        500: {"model": ErrorResponse, "description": "No free short code found"},
    },
    summary="Create short URL",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    link = await service.shorten(body.url)

    return ShortenResponse(
        id=link.id,
        shortCode=link.code,
        shortUrl=short_url_for(request, link.code),
        originalUrl=link.original_url,
    )


@router.get(
    "/urls",
    response_model=LinkListResponse,
    summary="List short URLs",
    description="List every stored short URL with its click count. No pagination.",
)
async def list_urls(request: Request):
    """List all shortened URLs."""
    service = request.app.state.service

    links = await service.list_links()

    return LinkListResponse(
        urls=[
            LinkInfo(**link.to_api_dict(short_url=short_url_for(request, link.code)))
            for link in links
        ]
    )


@router.post(
    "/qr",
    response_model=QRResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing URL"},
        500: {"model": ErrorResponse, "description": "QR service failure"},
    },
    summary="Generate QR code",
)
async def generate_qr(request: Request, body: QRRequest):
    """Render a URL as a QR code data URL."""
    qr_client = request.app.state.qr_client

    if not body.url:
        raise InvalidInputError("URL is required")
    if qr_client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="QR code generation is not enabled",
        )

    qr_code = await qr_client.generate_data_url(body.url, size=body.size)

    return QRResponse(qrCode=qr_code, url=body.url)


@router.get(
    "/resolve/{short_code}",
    response_model=ResolveResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Resolve short code",
    description="Look up the original URL without redirecting. Counts as a click.",
)
async def resolve_url(request: Request, short_code: str):
    """Resolve a short code to its original URL."""
    service = request.app.state.service

    original_url = await service.resolve(short_code)

    return ResolveResponse(originalUrl=original_url, shortCode=short_code)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check whether the key-value store is reachable.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )


@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    include_in_schema=False,
)
async def unknown_endpoint(path: str):
    """Anything else under /api."""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="API endpoint not found",
    )
