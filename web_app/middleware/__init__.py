"""Middleware for URL shortener web app."""

from .headers import ResponseHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["ResponseHeadersMiddleware", "LoggingMiddleware"]
