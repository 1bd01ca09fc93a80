"""API routes implementation."""

import json

from fastapi import APIRouter, Request, HTTPException, status
from pydantic import ValidationError

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ShortURLData,
    ErrorResponse,
)
from shortlink.common.urls import build_base_url, build_short_url
from shortlink.errors import InvalidURLError
from shortlink.common.logging_config import get_logger

logger = get_logger("api")

router = APIRouter()

INVALID_URL_MESSAGE = "Invalid URL format. Only HTTP and HTTPS URLs are allowed"


async def _read_json_body(request: Request) -> dict:
    """Parse the request body as a non-empty JSON object."""
    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type.lower():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content-Type must be application/json",
        )

    raw = await request.body()
    try:
        data = json.loads(raw) if raw else None
    except ValueError:
        data = None

    if not isinstance(data, dict) or not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON or empty request body",
        )

    return data


@router.post(
    "/shorten",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Shortening the same URL again creates a new code.",
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    data = await _read_json_body(request)

    if data.get("url") in (None, ""):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL is required",
        )

    try:
        body = ShortenRequest.model_validate(data)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_URL_MESSAGE,
        )

    try:
        record = await service.create_short_url(body.url)
    except InvalidURLError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_URL_MESSAGE,
        )
    except Exception:
        logger.exception(f"Failed to shorten URL {body.url!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to shorten URL. Please try again",
        )

    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    short_url = build_short_url(
        short_code=record.short_code,
        base_url=base_url,
    )

    return ShortenResponse(
        data=ShortURLData(short_url=short_url, **record.to_dict()),
    )
