"""Data models for URL shortener storage."""

from dataclasses import dataclass


@dataclass
class URLMapping:
    """Represents a short code -> original URL record."""
    
    short_code: str
    original_url: str
    user_id: int
    is_deleted: bool = False
    
    def to_dict(self) -> dict:
        """Convert to dictionary (without the short code, which is the key)."""
        return {
            "original_url": self.original_url,
            "user_id": self.user_id,
            "is_deleted": self.is_deleted,
        }
    
    @classmethod
    def from_dict(cls, short_code: str, data: dict) -> "URLMapping":
        """Create from dictionary."""
        return cls(
            short_code=short_code,
            original_url=data["original_url"],
            user_id=int(data["user_id"]),
            is_deleted=bool(data.get("is_deleted", False)),
        )
