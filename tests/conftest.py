"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.storage import JSONFileStorage, MemoryStorage, PostgresStorage, URLStorageBase
from shortener.tokens import UserTokenCodec
from shortener.common.logging_config import setup_logging
from web_app import create_app

TEST_DATABASE_DSN = os.getenv("TEST_DATABASE_DSN")
TEST_SECRET_KEY = "test secret key"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def token_codec():
    """Create token codec with a fixed test key."""
    return UserTokenCodec(TEST_SECRET_KEY)


@pytest.fixture
def storage_file(tmp_path):
    """Path of a JSON storage file that does not exist yet."""
    return str(tmp_path / "urls.json")


@pytest.fixture(
    params=[
        "memory",
        "file",
        pytest.param(
            "postgres",
            marks=pytest.mark.skipif(
                not TEST_DATABASE_DSN, reason="TEST_DATABASE_DSN not set"
            ),
        ),
    ]
)
async def storage(request, storage_file, logger) -> AsyncGenerator[URLStorageBase, None]:
    """Every storage backend, each starting empty."""
    if request.param == "memory":
        backend = MemoryStorage(logger=logger)
    elif request.param == "file":
        backend = JSONFileStorage(storage_file, logger=logger)
    else:
        backend = PostgresStorage(dsn=TEST_DATABASE_DSN, logger=logger)
        await backend.initialize()
        async with backend._get_connection() as conn:
            await conn.execute("TRUNCATE short_urls")

    yield backend

    await backend.close()


@pytest.fixture
def memory_storage(logger):
    """In-memory storage for service and API tests."""
    return MemoryStorage(logger=logger)


@pytest.fixture
async def service(memory_storage, short_code_generator, logger) -> AsyncGenerator[URLShortenerService, None]:
    """Create service instance."""
    service = URLShortenerService(
        storage=memory_storage,
        short_code_generator=short_code_generator,
        logger=logger,
    )

    yield service

    await service.close()


@pytest.fixture
def app(service, token_codec, logger):
    """Create test FastAPI app."""
    config = Config(base_url="http://testserver", secret_key=TEST_SECRET_KEY)
    return create_app(
        service_instance=service,
        token_codec=token_codec,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
