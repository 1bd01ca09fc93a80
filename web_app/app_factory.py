"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .web import web_router
from .web.routes import not_found_page
from .middleware.headers import ResponseHeadersMiddleware
from .middleware.logging import LoggingMiddleware

API_VERSION = "1.0.0"

# Fixed client-facing messages for errors raised by routing itself
ROUTING_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Endpoint not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


def _is_single_segment_get(request: Request) -> bool:
    """True for GET/HEAD on a path that is one segment before decoding.

    Such paths are short code lookups even when an encoded slash splits
    them once decoded, so they get the same page as an unknown code.
    """
    if request.method not in ("GET", "HEAD"):
        return False
    raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    segment = raw_path.split(b"?", 1)[0].strip(b"/")
    return bool(segment) and b"/" not in segment


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": message}."""
    message = exc.detail
    if exc.status_code in ROUTING_ERROR_MESSAGES and exc.detail in (None, "Not Found", "Method Not Allowed"):
        if exc.status_code == status.HTTP_404_NOT_FOUND and _is_single_segment_get(request):
            return not_found_page(request)
        message = ROUTING_ERROR_MESSAGES[exc.status_code]

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation problems are client errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"},
    )


def create_app(
    db_instance,
    cache_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        db_instance: URL store instance
        cache_instance: Cache instance (or None)
        service_instance: Service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Anonymous URL shortening service",
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.db = db_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Logging is added last so it wraps the header middleware
    app.add_middleware(ResponseHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
