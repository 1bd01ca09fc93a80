"""Health and redirect routes implementation."""

import os

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from shortlink.common.logging_config import get_logger

from ..api.schemas import DatabaseStatus, HealthResponse

logger = get_logger("web")

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")
templates = Jinja2Templates(directory=template_dir)

ENDPOINTS = {
    "health": "GET /",
    "shorten": "POST /api/shorten",
    "redirect": "GET /{shortCode}",
}


def not_found_page(request: Request):
    """Render the generic 404 page.

    The page is identical for malformed codes, unknown codes and lookup
    failures.
    """
    return templates.TemplateResponse(
        request,
        "not_found.html",
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(request: Request):
    """Service status and database connectivity."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        version=request.app.version,
        status="ready" if health["overall"] else "degraded",
        database=DatabaseStatus(**health["database"]),
        cache=health["cache"],
        endpoints=ENDPOINTS,
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    try:
        record = await service.resolve(short_code)
    except Exception:
        # Storage failures look like any other miss to the client
        logger.exception(f"Redirect lookup failed for {short_code!r}")
        record = None

    if record is None:
        return not_found_page(request)

    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)
