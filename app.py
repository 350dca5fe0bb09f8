#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Usage:
    python app.py [-a host:port] [-b base_url] [-f file_storage_path] [-d database_dsn]

Environment variables (flags take precedence):
    SERVER_ADDRESS - host:port to listen on
    BASE_URL - Base URL for short links
    FILE_STORAGE_PATH - JSON file to persist links in
    DATABASE_DSN - PostgreSQL connection string (preferred over the file)
    SECRET_KEY - Key signing the user_token cookie
    LOG_LEVEL - Logging level
"""

import argparse
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.storage import create_storage
from shortener.tokens import UserTokenCodec
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    storage = await create_storage(
        database_dsn=config.database_dsn,
        file_storage_path=config.file_storage_path,
        pool_max_size=config.db_pool_max_size,
        command_timeout_seconds=config.db_command_timeout_seconds,
        logger=logger.getChild("storage"),
    )

    service = URLShortenerService(
        storage=storage,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
    )
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="URL shortener service")
    parser.add_argument("-a", dest="server_address", help="host:port to listen on")
    parser.add_argument("-b", dest="base_url", help="base URL for short links")
    parser.add_argument("-f", dest="file_storage_path", help="JSON storage file path")
    parser.add_argument("-d", dest="database_dsn", help="PostgreSQL connection string")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = load_config(**vars(args))

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'secret_key', 'database_dsn'})}")

    app = create_app(
        service_instance=None,  # Set in lifespan
        token_codec=UserTokenCodec(config.secret_key),
        config=config,
        logger=logger,
    )

    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
