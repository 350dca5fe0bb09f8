"""Tests for service layer."""

import logging

import pytest

from shortener.errors import GoneError, NotFoundError, StorageError
from shortener.service import URLShortenerService
from shortener.storage import MemoryStorage


class BrokenDeleteStorage(MemoryStorage):
    """Memory storage whose deletions always fail."""

    async def mark_deleted(self, user_id, short_codes):
        raise StorageError("write failed")


class TestURLShortenerService:
    """Test URL shortener service."""
    
    @pytest.mark.asyncio
    async def test_create_short_url(self, service, sample_urls, short_code_generator):
        """Test creating short URL."""
        short_code, duplicate = await service.create_short_url(sample_urls[0], user_id=1)
        
        assert duplicate is False
        assert short_code == short_code_generator.generate_from_url(sample_urls[0])
        assert await service.get_original_url(short_code) == sample_urls[0]
    
    @pytest.mark.asyncio
    async def test_create_duplicate_returns_same_short(self, service, sample_urls):
        """Shortening a URL again flags a duplicate and returns the existing short."""
        first, _ = await service.create_short_url(sample_urls[0], user_id=1)
        
        second, duplicate = await service.create_short_url(sample_urls[0], user_id=2)
        
        assert duplicate is True
        assert second == first
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com", "", "https://"])
    async def test_invalid_url(self, service, url):
        """Test invalid URL rejection."""
        with pytest.raises(ValueError, match="Invalid URL"):
            await service.create_short_url(url, user_id=1)
    
    @pytest.mark.asyncio
    async def test_batch_rejects_invalid_url_before_storing(self, service, memory_storage):
        with pytest.raises(ValueError, match="Invalid URL"):
            await service.create_short_urls(
                [("c1", "https://a.com"), ("c2", "not-a-url")], user_id=1
            )
        
        assert await memory_storage.list_user_short_codes(1) == []
    
    @pytest.mark.asyncio
    async def test_get_nonexistent_url(self, service):
        """Unknown codes raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.get_original_url("nonexistent")
    
    @pytest.mark.asyncio
    async def test_deleted_url_is_gone(self, service, sample_urls):
        """Deleted codes raise GoneError, not NotFoundError."""
        short_code, _ = await service.create_short_url(sample_urls[0], user_id=1)
        
        service.delete_urls(1, [short_code])
        await service.wait_for_pending_deletes()
        
        with pytest.raises(GoneError):
            await service.get_original_url(short_code)
    
    @pytest.mark.asyncio
    async def test_delete_by_other_user_has_no_effect(self, service, sample_urls):
        short_code, _ = await service.create_short_url(sample_urls[0], user_id=1)
        
        service.delete_urls(2, [short_code])
        await service.wait_for_pending_deletes()
        
        assert await service.get_original_url(short_code) == sample_urls[0]
    
    @pytest.mark.asyncio
    async def test_list_user_urls_skips_deleted(self, service, sample_urls):
        """Listing returns active links in creation order."""
        codes = [(await service.create_short_url(url, user_id=9))[0] for url in sample_urls]
        
        service.delete_urls(9, [codes[1]])
        await service.wait_for_pending_deletes()
        
        urls = await service.list_user_urls(9)
        assert urls == [
            {"short_code": codes[0], "original_url": sample_urls[0]},
            {"short_code": codes[2], "original_url": sample_urls[2]},
        ]
        assert await service.list_user_urls(10) == []
    
    @pytest.mark.asyncio
    async def test_failed_delete_is_logged_not_raised(self, short_code_generator, logger, caplog):
        """Background deletion failures never reach the caller."""
        service = URLShortenerService(
            storage=BrokenDeleteStorage(logger=logger),
            short_code_generator=short_code_generator,
            logger=logger,
        )
        
        with caplog.at_level(logging.ERROR, logger=logger.name):
            service.delete_urls(1, ["abc"])
            await service.wait_for_pending_deletes()
        
        assert "Background deletion failed" in caplog.text
        await service.close()
    
    @pytest.mark.asyncio
    async def test_health_check(self, service):
        assert await service.health_check() is True
