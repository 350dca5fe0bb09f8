"""Tests for the batch coordinator."""

import pytest

from shortener.batch import BatchCoordinator
from shortener.errors import StorageError
from shortener.storage import MemoryStorage


class FailingStorage(MemoryStorage):
    """Memory storage whose batch insert hits a backend failure."""

    async def create_short_urls(self, urls, user_id):
        raise StorageError("disk on fire")


@pytest.fixture
def coordinator(storage, short_code_generator, logger):
    return BatchCoordinator(storage, short_code_generator, logger=logger)


@pytest.mark.asyncio
class TestBatchCoordinator:
    """Test batch shortening across backends."""

    async def test_new_batch(self, coordinator, storage, short_code_generator):
        """Fresh URLs get distinct shorts and no duplicate flag."""
        result = await coordinator.shorten_batch(
            [("c1", "https://a.com"), ("c2", "https://b.com")], user_id=7
        )

        assert result.duplicate is False
        assert set(result.short_codes) == {"c1", "c2"}
        assert result.short_codes["c1"] != result.short_codes["c2"]
        assert result.short_codes["c1"] == short_code_generator.generate_from_url("https://a.com")

        mapping = await storage.get_url_mapping(result.short_codes["c2"])
        assert mapping.original_url == "https://b.com"
        assert mapping.user_id == 7

    async def test_repeated_batch_reports_duplicate(self, coordinator):
        """A repeat is flagged but still answers every correlation id."""
        items = [("c1", "https://a.com"), ("c2", "https://b.com")]
        first = await coordinator.shorten_batch(items, user_id=7)

        second = await coordinator.shorten_batch(items, user_id=7)

        assert second.duplicate is True
        assert second.short_codes == first.short_codes

    async def test_partial_duplicate_commits_the_rest(self, coordinator, storage):
        """Only colliding items are skipped."""
        await coordinator.shorten_batch([("x", "https://a.com")], user_id=1)

        result = await coordinator.shorten_batch(
            [("c1", "https://a.com"), ("c2", "https://new.com")], user_id=2
        )

        assert result.duplicate is True
        assert await storage.list_user_short_codes(2) == [result.short_codes["c2"]]

    async def test_same_url_twice_in_one_batch(self, coordinator, storage):
        """Equal URLs in one batch share one short and are stored once."""
        result = await coordinator.shorten_batch(
            [("c1", "https://a.com"), ("c2", "https://a.com")], user_id=3
        )

        assert result.duplicate is False
        assert result.short_codes["c1"] == result.short_codes["c2"]
        assert await storage.list_user_short_codes(3) == [result.short_codes["c1"]]

    async def test_empty_batch(self, coordinator):
        result = await coordinator.shorten_batch([], user_id=1)

        assert result.short_codes == {}
        assert result.duplicate is False


@pytest.mark.asyncio
async def test_backend_failure_propagates(short_code_generator, logger):
    """Only duplicates are tolerated; other errors abort the batch."""
    coordinator = BatchCoordinator(FailingStorage(logger=logger), short_code_generator, logger=logger)

    with pytest.raises(StorageError):
        await coordinator.shorten_batch([("c1", "https://a.com")], user_id=1)
