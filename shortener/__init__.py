"""Core business logic for URL shortener."""

from .batch import BatchCoordinator, BatchResult
from .errors import ShortenerError, StorageError, DuplicateError, NotFoundError, GoneError
from .service import URLShortenerService
from .shortcode import ShortCodeGenerator
from .tokens import UserTokenCodec

__all__ = [
    "BatchCoordinator",
    "BatchResult",
    "ShortenerError",
    "StorageError",
    "DuplicateError",
    "NotFoundError",
    "GoneError",
    "URLShortenerService",
    "ShortCodeGenerator",
    "UserTokenCodec",
]
