"""Batch shortening on top of the storage layer."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from .errors import DuplicateError
from .shortcode import ShortCodeGenerator
from .storage.base import URLStorageBase


@dataclass
class BatchResult:
    """Outcome of a batch: a short code per correlation id."""
    
    short_codes: Dict[str, str] = field(default_factory=dict)
    duplicate: bool = False


class BatchCoordinator:
    """Shorten many URLs for one owner as a single storage call.
    
    Duplicates are reported once for the whole batch and never abort it;
    every correlation id still gets the short code derived for its URL.
    """
    
    def __init__(
        self,
        storage: URLStorageBase,
        generator: ShortCodeGenerator,
        logger: Optional[logging.Logger] = None,
    ):
        self.storage = storage
        self.generator = generator
        self.logger = logger or logging.getLogger(__name__)
    
    async def shorten_batch(
        self,
        items: Iterable[Tuple[str, str]],
        user_id: int,
    ) -> BatchResult:
        """Store a batch of (correlation_id, original_url) pairs.
        
        Args:
            items: Pairs of correlation id and original URL
            user_id: Owner of every stored mapping
            
        Returns:
            BatchResult with the short code for each correlation id
            
        Raises:
            StorageError: On backend failure (duplicates are not raised)
        """
        result = BatchResult()
        urls: Dict[str, str] = {}
        
        for correlation_id, original_url in items:
            short_code = self.generator.generate_from_url(original_url)
            result.short_codes[correlation_id] = short_code
            urls[short_code] = original_url
        
        if not urls:
            return result
        
        try:
            await self.storage.create_short_urls(urls, user_id)
        except DuplicateError as e:
            self.logger.info(f"Batch for user {user_id} had {len(e.short_codes)} duplicate(s)")
            result.duplicate = True
        
        return result
