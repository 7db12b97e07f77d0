"""
Password Hasher

Argon2id with fixed cost parameters. Digests are PHC strings
(``$argon2id$v=19$m=65536,t=3,p=1$<salt>$<hash>``) so verification is
self-describing. Legacy bcrypt digests are still verified and reported by
``needs_rehash`` so they can be upgraded on the next successful login.
"""

import secrets

import bcrypt
from argon2 import PasswordHasher as Argon2Hasher
from argon2 import Type
from argon2.exceptions import HashingError as Argon2HashingError
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
BCRYPT_MAX_BYTES = 72


class HashingError(Exception):
    """Environment or library failure while hashing, or a malformed digest"""


class PasswordHasher:
    """
    Hash and verify passwords.

    Business Rules:
    - Argon2id, 64 MiB memory, 3 passes, 1 lane
    - A mismatch is not an error: verify() returns False
    - A malformed digest raises HashingError
    """

    def __init__(self, memory_cost: int = 65536, time_cost: int = 3, parallelism: int = 1):
        self._argon2 = Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._dummy_digest = None

    def hash(self, plaintext: str) -> str:
        try:
            return self._argon2.hash(plaintext)
        except (Argon2HashingError, MemoryError) as exc:
            raise HashingError("Failed to hash password") from exc

    def verify(self, digest: str, plaintext: str) -> bool:
        if digest.startswith(BCRYPT_PREFIXES):
            return self._verify_bcrypt(digest, plaintext)

        try:
            return self._argon2.verify(digest, plaintext)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            raise HashingError("Malformed password digest") from exc

    def needs_rehash(self, digest: str) -> bool:
        """True for bcrypt digests and Argon2 digests with other parameters"""
        if digest.startswith(BCRYPT_PREFIXES):
            return True
        try:
            return self._argon2.check_needs_rehash(digest)
        except InvalidHashError as exc:
            raise HashingError("Malformed password digest") from exc

    def dummy_verify(self, plaintext: str) -> None:
        """
        Spend one verification on a throwaway digest.

        Used when the account does not exist so the response time matches a
        wrong-password attempt.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.hash(secrets.token_hex(16))
        self.verify(self._dummy_digest, plaintext)

    @staticmethod
    def _verify_bcrypt(digest: str, plaintext: str) -> bool:
        # bcrypt only ever looked at the first 72 bytes
        password = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password, digest.encode("utf-8"))
        except ValueError as exc:
            raise HashingError("Malformed password digest") from exc
