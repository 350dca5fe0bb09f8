"""Error types raised by the storage and service layers."""

from typing import Iterable, Optional


class ShortenerError(Exception):
    """Base class for URL shortener errors."""


class StorageError(ShortenerError):
    """Storage backend failure unrelated to a data conflict. Not recoverable locally."""


class DuplicateError(ShortenerError):
    """A short code or an active original URL already exists.

    Not a system failure: callers answer with a conflict status and keep going.
    """

    def __init__(self, short_codes: Optional[Iterable[str]] = None, message: Optional[str] = None):
        self.short_codes = list(short_codes or [])
        if message is None:
            message = f"Duplicate short URL(s): {', '.join(self.short_codes) or 'unknown'}"
        super().__init__(message)


class NotFoundError(ShortenerError):
    """Short code was never assigned."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class GoneError(ShortenerError):
    """Short code exists but has been deleted."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' has been deleted")
