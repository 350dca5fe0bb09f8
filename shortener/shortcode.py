"""Short code derivation for URLs."""

import string
import hashlib
from typing import Optional


class ShortCodeGenerator:
    """Derive short codes from URLs."""
    
    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9
    
    def __init__(self, default_length: int = 8):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
        """
        self.default_length = default_length
    
    def generate_from_url(self, url: str, length: Optional[int] = None) -> str:
        """Generate short code from URL hash.
        
        The same URL always yields the same code, so resubmitting a URL
        collides with its earlier mapping instead of creating a new one.
        
        Args:
            url: The URL to hash
            length: Length of the code (uses default if not specified)
            
        Returns:
            Short code based on URL hash
        """
        length = length or self.default_length
        
        url_hash = hashlib.sha256(url.encode("utf-8")).digest()
        code = self._int_to_base62(int.from_bytes(url_hash, "big"))
        
        return code[:length]
    
    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string."""
        if num == 0:
            return self.BASE62_CHARS[0]
        
        result = []
        base = len(self.BASE62_CHARS)
        
        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.BASE62_CHARS[remainder])
        
        return ''.join(reversed(result))
    
    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (alphanumeric)."""
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
