"""In-memory implementation for URL shortener storage."""

import asyncio
import logging
from dataclasses import replace
from typing import Optional, List, Dict, Iterable, Any

from ..errors import DuplicateError
from .base import URLStorageBase
from .models import URLMapping


class URLTable:
    """Record table plus the per-user index.

    Not thread-safe; owners serialize access. Shared by the in-memory and
    JSON file backends so both apply identical rules.
    """

    def __init__(self):
        self.urls: Dict[str, URLMapping] = {}
        self.user_urls: Dict[int, List[str]] = {}
        # original_url -> short_code for active records only
        self._active_urls: Dict[str, str] = {}

    def insert(self, short_code: str, original_url: str, user_id: int) -> bool:
        """Insert a record.

        Returns:
            True if inserted, False if short_code or active original_url exists
        """
        if short_code in self.urls or original_url in self._active_urls:
            return False

        self.urls[short_code] = URLMapping(
            short_code=short_code,
            original_url=original_url,
            user_id=user_id,
        )
        self._active_urls[original_url] = short_code
        self.user_urls.setdefault(user_id, []).append(short_code)
        return True

    def get(self, short_code: str) -> Optional[URLMapping]:
        mapping = self.urls.get(short_code)
        if mapping is None:
            return None
        # Copy so callers cannot mutate stored state
        return replace(mapping)

    def user_short_codes(self, user_id: int) -> List[str]:
        return list(self.user_urls.get(user_id, []))

    def mark_deleted(self, user_id: int, short_codes: Iterable[str]) -> int:
        """Soft-delete the active codes owned by user_id.

        Returns:
            Number of records marked deleted
        """
        marked = 0
        for short_code in short_codes:
            mapping = self.urls.get(short_code)
            if mapping is None or mapping.is_deleted or mapping.user_id != user_id:
                continue
            mapping.is_deleted = True
            self._active_urls.pop(mapping.original_url, None)
            marked += 1
        return marked

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted document layout."""
        return {
            "urls": {code: mapping.to_dict() for code, mapping in self.urls.items()},
            "user_urls": {str(uid): list(codes) for uid, codes in self.user_urls.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "URLTable":
        """Rebuild a table from the persisted document layout."""
        table = cls()
        for short_code, record in data.get("urls", {}).items():
            mapping = URLMapping.from_dict(short_code, record)
            table.urls[short_code] = mapping
            if not mapping.is_deleted:
                table._active_urls[mapping.original_url] = short_code
        for user_id, codes in data.get("user_urls", {}).items():
            table.user_urls[int(user_id)] = list(codes)
        return table


class MemoryStorage(URLStorageBase):
    """In-memory storage living for the lifetime of the process."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize in-memory storage.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._table = URLTable()
        # One lock guards the record table and the user index together
        self._lock = asyncio.Lock()

    async def create_short_url(
        self,
        short_code: str,
        original_url: str,
        user_id: int,
    ) -> None:
        async with self._lock:
            created = self._table.insert(short_code, original_url, user_id)

        if not created:
            self.logger.warning(f"Duplicate short URL: {short_code} -> {original_url}")
            raise DuplicateError([short_code])

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")

    async def get_url_mapping(self, short_code: str) -> Optional[URLMapping]:
        async with self._lock:
            return self._table.get(short_code)

    async def list_user_short_codes(self, user_id: int) -> List[str]:
        async with self._lock:
            return self._table.user_short_codes(user_id)

    async def create_short_urls(self, urls: Dict[str, str], user_id: int) -> None:
        async with self._lock:
            skipped = [
                short_code
                for short_code, original_url in urls.items()
                if not self._table.insert(short_code, original_url, user_id)
            ]

        self.logger.info(f"Stored batch of {len(urls) - len(skipped)}/{len(urls)} short URLs")
        if skipped:
            self.logger.warning(f"Batch skipped duplicate short URLs: {skipped}")
            raise DuplicateError(skipped)

    async def mark_deleted(self, user_id: int, short_codes: Iterable[str]) -> None:
        async with self._lock:
            marked = self._table.mark_deleted(user_id, short_codes)
        self.logger.info(f"Marked {marked} short URL(s) deleted for user {user_id}")

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
