"""Business logic service for URL shortener."""

import asyncio
import logging
from typing import Optional, List, Dict, Iterable, Tuple, Set

from .batch import BatchCoordinator, BatchResult
from .errors import DuplicateError, GoneError, NotFoundError
from .shortcode import ShortCodeGenerator
from .storage.base import URLStorageBase
from .common.validators import is_valid_url


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        storage: URLStorageBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            storage: Storage backend instance
            short_code_generator: Optional short code generator
            logger: Optional logger
        """
        self.storage = storage
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.batch = BatchCoordinator(storage, self.generator, logger=self.logger)
        # Deletions still running in the background
        self._pending_deletes: Set[asyncio.Task] = set()

    @staticmethod
    def _validate(original_url: str) -> None:
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValueError(f"Invalid URL: {error}")

    async def create_short_url(self, original_url: str, user_id: int) -> Tuple[str, bool]:
        """Shorten a URL for a user.

        Args:
            original_url: The original long URL
            user_id: Owner of the new mapping

        Returns:
            Tuple of (short_code, duplicate). On duplicate the derived short
            code is still returned so the caller can show it.

        Raises:
            ValueError: If the URL is invalid
            StorageError: On backend failure
        """
        self._validate(original_url)
        short_code = self.generator.generate_from_url(original_url)

        try:
            await self.storage.create_short_url(short_code, original_url, user_id)
        except DuplicateError:
            return short_code, True

        return short_code, False

    async def create_short_urls(
        self,
        items: List[Tuple[str, str]],
        user_id: int,
    ) -> BatchResult:
        """Shorten a batch of (correlation_id, original_url) pairs.

        Raises:
            ValueError: If any URL is invalid (nothing is stored)
        """
        for _, original_url in items:
            self._validate(original_url)
        return await self.batch.shorten_batch(items, user_id)

    async def get_original_url(self, short_code: str) -> str:
        """Resolve a short code.

        Raises:
            NotFoundError: If the short code was never assigned
            GoneError: If the short code was deleted
        """
        mapping = await self.storage.get_url_mapping(short_code)

        if mapping is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(short_code)
        if mapping.is_deleted:
            raise GoneError(short_code)

        self.logger.debug(f"Retrieved URL: {short_code} -> {mapping.original_url}")
        return mapping.original_url

    async def list_user_urls(self, user_id: int) -> List[Dict[str, str]]:
        """List a user's active links.

        Returns:
            List of dicts with short_code and original_url, in creation order
        """
        urls = []
        for short_code in await self.storage.list_user_short_codes(user_id):
            mapping = await self.storage.get_url_mapping(short_code)
            if mapping is None or mapping.is_deleted:
                continue
            urls.append({"short_code": short_code, "original_url": mapping.original_url})
        return urls

    def delete_urls(self, user_id: int, short_codes: Iterable[str]) -> None:
        """Schedule soft deletion and return without waiting for it.

        Failures are logged only; the caller has already been answered.
        """
        short_codes = list(short_codes)
        task = asyncio.create_task(self.storage.mark_deleted(user_id, short_codes))
        self._pending_deletes.add(task)
        task.add_done_callback(self._on_delete_done)
        self.logger.debug(f"Scheduled deletion of {len(short_codes)} short URL(s) for user {user_id}")

    def _on_delete_done(self, task: asyncio.Task) -> None:
        self._pending_deletes.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error(f"Background deletion failed: {error}")

    async def wait_for_pending_deletes(self) -> None:
        """Wait until every scheduled deletion has finished."""
        while self._pending_deletes:
            await asyncio.gather(*list(self._pending_deletes), return_exceptions=True)

    async def health_check(self) -> bool:
        return await self.storage.health_check()

    async def close(self) -> None:
        """Finish pending work and close storage."""
        await self.wait_for_pending_deletes()
        await self.storage.close()
