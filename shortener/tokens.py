"""Signed user identity tokens.

A token is hex(user_id as 4 big-endian bytes + HMAC-SHA256 of those bytes).
Nothing is stored server-side; a token only verifies under the secret key it
was minted with.
"""

import hmac
import hashlib
import secrets
import binascii
from typing import Optional, Tuple

USER_ID_BYTES = 4
SIGNATURE_BYTES = hashlib.sha256().digest_size
TOKEN_BYTES = USER_ID_BYTES + SIGNATURE_BYTES


class UserTokenCodec:
    """Mint and verify user identity tokens."""
    
    def __init__(self, secret_key: str):
        """Initialize codec.
        
        Args:
            secret_key: Process-wide signing key
        """
        if not secret_key:
            raise ValueError("Secret key must not be empty")
        self._key = secret_key.encode("utf-8")
    
    def _sign(self, user_id_bytes: bytes) -> bytes:
        return hmac.new(self._key, user_id_bytes, hashlib.sha256).digest()
    
    def token_for(self, user_id: int) -> str:
        """Encode a token for a known user id.
        
        Args:
            user_id: Unsigned 32-bit user id
            
        Returns:
            Hex token
        """
        user_id_bytes = user_id.to_bytes(USER_ID_BYTES, "big")
        return (user_id_bytes + self._sign(user_id_bytes)).hex()
    
    def mint(self) -> Tuple[int, str]:
        """Draw a fresh random user id and its token.
        
        Returns:
            Tuple of (user_id, token)
        """
        user_id = secrets.randbits(USER_ID_BYTES * 8)
        return user_id, self.token_for(user_id)
    
    def verify(self, token: Optional[str]) -> Optional[int]:
        """Return the user id carried by a valid token, else None."""
        if not token:
            return None
        
        try:
            data = binascii.unhexlify(token)
        except (binascii.Error, ValueError):
            return None
        
        if len(data) != TOKEN_BYTES:
            return None
        
        user_id_bytes, signature = data[:USER_ID_BYTES], data[USER_ID_BYTES:]
        if not hmac.compare_digest(self._sign(user_id_bytes), signature):
            return None
        
        return int.from_bytes(user_id_bytes, "big")
