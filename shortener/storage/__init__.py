"""Storage layer for URL shortener."""

import logging
from typing import Optional

from .base import URLStorageBase
from .file import JSONFileStorage
from .memory import MemoryStorage
from .models import URLMapping
from .postgres import PostgresStorage


async def create_storage(
    database_dsn: Optional[str] = None,
    file_storage_path: Optional[str] = None,
    pool_max_size: int = 10,
    command_timeout_seconds: int = 30,
    logger: Optional[logging.Logger] = None,
) -> URLStorageBase:
    """Pick a backend: PostgreSQL if a DSN is set, else a JSON file, else memory."""
    logger = logger or logging.getLogger(__name__)

    if database_dsn:
        logger.info("Using PostgreSQL storage")
        storage = PostgresStorage(
            dsn=database_dsn,
            pool_max_size=pool_max_size,
            command_timeout_seconds=command_timeout_seconds,
            logger=logger,
        )
        await storage.initialize()
        return storage

    if file_storage_path:
        logger.info(f"Using JSON file storage at {file_storage_path}")
        return JSONFileStorage(file_storage_path, logger=logger)

    logger.info("Using in-memory storage")
    return MemoryStorage(logger=logger)


__all__ = [
    "URLStorageBase",
    "URLMapping",
    "MemoryStorage",
    "JSONFileStorage",
    "PostgresStorage",
    "create_storage",
]
