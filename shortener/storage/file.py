"""JSON file implementation for URL shortener storage.

The whole table is one JSON document. Every operation loads the document,
applies the change and atomically replaces the file. Concurrent operations in
one process are serialized by a lock; several processes writing the same
file are not supported.
"""

import os
import json
import asyncio
import logging
import tempfile
import threading
from typing import Optional, List, Dict, Iterable, Callable, TypeVar

from ..errors import DuplicateError, StorageError
from .base import URLStorageBase
from .memory import URLTable
from .models import URLMapping

T = TypeVar("T")


class JSONFileStorage(URLStorageBase):
    """File-backed storage persisting the table as a JSON document."""

    def __init__(self, filename: str, logger: Optional[logging.Logger] = None):
        """Initialize file storage.

        Args:
            filename: Path of the JSON document (created on first write)
            logger: Optional logger instance
        """
        self.filename = filename
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def _load(self) -> URLTable:
        """Read the full document; a missing or empty file is an empty table."""
        try:
            with open(self.filename, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            return URLTable()

        if not content.strip():
            return URLTable()
        return URLTable.from_dict(json.loads(content))

    def _dump(self, table: URLTable) -> None:
        """Write the full document to a temp file and swap it into place."""
        directory = os.path.dirname(os.path.abspath(self.filename))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".shortener-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(table.to_dict(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.filename)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _run_cycle(self, apply: Callable[[URLTable], T], write: bool) -> T:
        """Load, apply and optionally replace the document while holding the lock.

        Runs in a worker thread. The lock is a thread lock so a cycle whose
        awaiting coroutine was cancelled still finishes before the next starts.
        """
        with self._lock:
            try:
                table = self._load()
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                self.logger.error(f"Error reading {self.filename}: {e}")
                raise StorageError(f"Cannot read storage file: {e}") from e

            result = apply(table)

            if write:
                try:
                    self._dump(table)
                except (OSError, ValueError) as e:
                    self.logger.error(f"Error updating {self.filename}: {e}")
                    raise StorageError(f"Cannot update storage file: {e}") from e
            return result

    async def _read(self, read: Callable[[URLTable], T]) -> T:
        return await asyncio.to_thread(self._run_cycle, read, False)

    async def _update(self, mutate: Callable[[URLTable], T]) -> T:
        """Run one load -> mutate -> replace cycle."""
        return await asyncio.to_thread(self._run_cycle, mutate, True)

    async def create_short_url(
        self,
        short_code: str,
        original_url: str,
        user_id: int,
    ) -> None:
        created = await self._update(
            lambda table: table.insert(short_code, original_url, user_id)
        )

        if not created:
            self.logger.warning(f"Duplicate short URL: {short_code} -> {original_url}")
            raise DuplicateError([short_code])

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")

    async def get_url_mapping(self, short_code: str) -> Optional[URLMapping]:
        return await self._read(lambda table: table.get(short_code))

    async def list_user_short_codes(self, user_id: int) -> List[str]:
        return await self._read(lambda table: table.user_short_codes(user_id))

    async def create_short_urls(self, urls: Dict[str, str], user_id: int) -> None:
        def insert_all(table: URLTable) -> List[str]:
            return [
                short_code
                for short_code, original_url in urls.items()
                if not table.insert(short_code, original_url, user_id)
            ]

        skipped = await self._update(insert_all)

        self.logger.info(f"Stored batch of {len(urls) - len(skipped)}/{len(urls)} short URLs")
        if skipped:
            self.logger.warning(f"Batch skipped duplicate short URLs: {skipped}")
            raise DuplicateError(skipped)

    async def mark_deleted(self, user_id: int, short_codes: Iterable[str]) -> None:
        short_codes = list(short_codes)
        marked = await self._update(lambda table: table.mark_deleted(user_id, short_codes))
        self.logger.info(f"Marked {marked} short URL(s) deleted for user {user_id}")

    async def health_check(self) -> bool:
        try:
            await self._read(lambda table: None)
            return True
        except StorageError as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        pass
