"""Middleware for URL shortener web app."""

from .compression import GzipRequestMiddleware
from .logging import LoggingMiddleware
from .user_token import UserTokenMiddleware

__all__ = ["GzipRequestMiddleware", "LoggingMiddleware", "UserTokenMiddleware"]
