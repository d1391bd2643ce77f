"""Password hashing strategies."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets

from blog.domain.users.repositories import PasswordHasher

SALT_BYTES = 128 // 8
DIGEST_BYTES = 256 // 8
PBKDF2_ITERATIONS = 100_000


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA256 with a fresh random salt per hash.

    Both the digest and the salt are returned base64 encoded so they can be
    stored as plain text columns.
    """

    def __init__(self, iterations: int = PBKDF2_ITERATIONS) -> None:
        self._iterations = iterations

    def _derive(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8", "surrogatepass"),
            salt,
            self._iterations,
            dklen=DIGEST_BYTES,
        )

    def hash(self, password: str) -> tuple[str, str]:
        salt = secrets.token_bytes(SALT_BYTES)
        digest = self._derive(password, salt)
        return (
            base64.b64encode(digest).decode("ascii"),
            base64.b64encode(salt).decode("ascii"),
        )

    def verify(self, password: str, stored_hash: str, stored_salt: str) -> bool:
        try:
            salt = base64.b64decode(stored_salt, validate=True)
            expected = base64.b64decode(stored_hash, validate=True)
        except (binascii.Error, ValueError):
            return False
        if not salt:
            return False
        return hmac.compare_digest(self._derive(password, salt), expected)
