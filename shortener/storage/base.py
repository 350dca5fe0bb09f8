"""Abstract base class for URL shortener storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Iterable

from .models import URLMapping


class URLStorageBase(ABC):
    """Abstract base class for URL shortener storage operations.

    Every backend enforces the same invariants: a short code is never
    reassigned (even after deletion), an original URL is unique among active
    records, and each record appears exactly once in its owner's index.
    """

    @abstractmethod
    async def create_short_url(
        self,
        short_code: str,
        original_url: str,
        user_id: int,
    ) -> None:
        """Create a new short URL mapping owned by a user.

        Args:
            short_code: The short code to use
            original_url: The original long URL
            user_id: Owner of the mapping

        Raises:
            DuplicateError: If short_code exists or original_url is already active
            StorageError: On backend failure
        """
        pass

    @abstractmethod
    async def get_url_mapping(self, short_code: str) -> Optional[URLMapping]:
        """Get the mapping for a short code, deleted or not.

        Args:
            short_code: The short code to lookup

        Returns:
            URLMapping if the short code was ever assigned, None otherwise
        """
        pass

    @abstractmethod
    async def list_user_short_codes(self, user_id: int) -> List[str]:
        """List the short codes created by a user, in insertion order.

        Args:
            user_id: Owner to look up

        Returns:
            List of short codes (empty for an unknown user)
        """
        pass

    @abstractmethod
    async def create_short_urls(self, urls: Dict[str, str], user_id: int) -> None:
        """Create several mappings as one unit.

        Non-conflicting items are stored even if some items collide.

        Args:
            urls: Mapping of short code to original URL
            user_id: Owner of all mappings

        Raises:
            DuplicateError: If any item collided (lists the skipped short codes)
            StorageError: On backend failure
        """
        pass

    @abstractmethod
    async def mark_deleted(self, user_id: int, short_codes: Iterable[str]) -> None:
        """Soft-delete short codes owned by a user.

        Codes that are unknown, already deleted or owned by someone else are
        skipped silently.

        Args:
            user_id: The requesting owner
            short_codes: Short codes to delete
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release storage resources."""
        pass
