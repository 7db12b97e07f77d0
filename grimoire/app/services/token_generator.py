"""
Opaque bearer tokens.

The raw token is only ever handed to the client; only its SHA-256 digest is
persisted.
"""

import hashlib
import secrets

MIN_TOKEN_BYTES = 32  # 256 bits


class TokenGenerator:
    def __init__(self, nbytes: int = MIN_TOKEN_BYTES):
        if nbytes < MIN_TOKEN_BYTES:
            raise ValueError(f"Tokens need at least {MIN_TOKEN_BYTES} random bytes")
        self.nbytes = nbytes

    def generate(self) -> str:
        """Random token, hex encoded"""
        return secrets.token_hex(self.nbytes)

    @staticmethod
    def digest(raw_token: str) -> str:
        """Deterministic storage digest of a raw token"""
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()
