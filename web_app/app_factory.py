"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

from shortener.tokens import UserTokenCodec
from .api import api_router
from .web import web_router
from .middleware import GzipRequestMiddleware, LoggingMiddleware, UserTokenMiddleware


def create_app(
    service_instance,
    token_codec: UserTokenCodec,
    config,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        service_instance: Service instance (may be set later on app.state)
        token_codec: Codec for the user identity cookie
        config: Configuration instance
        logger: Optional logger for request logging
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    
    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    
    web_logger = logger.getChild("web") if logger else None
    
    # Innermost first: identity, request inflation, response compression, logging
    app.add_middleware(UserTokenMiddleware, codec=token_codec, logger=web_logger)
    app.add_middleware(GzipRequestMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(LoggingMiddleware, logger=web_logger)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])
    
    return app
