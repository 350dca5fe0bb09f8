"""Plain-text and redirect routes for URL shortener."""

from .routes import router as web_router

__all__ = ["web_router"]
