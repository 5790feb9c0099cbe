"""Password hashing strategies."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets

from webclipper.domain.users.exceptions import StorageError
from webclipper.domain.users.repositories import PasswordDigest, PasswordHasher
from webclipper.shared.result import Err, Ok, Result

PBKDF2_ALGORITHM = "sha256"
PBKDF2_ITERATIONS = 100_000
KEY_LENGTH_BYTES = 32
SALT_LENGTH_BYTES = 32


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA256 with a per-password random salt, both stored as base64."""

    def __init__(self, *, iterations: int = PBKDF2_ITERATIONS) -> None:
        self._iterations = iterations

    def hash(self, password: str) -> Result[PasswordDigest]:
        try:
            salt = secrets.token_bytes(SALT_LENGTH_BYTES)
            derived = self._derive(password, salt)
        except (TypeError, ValueError, UnicodeError, OverflowError) as exc:
            return Err(StorageError(exc))
        return Ok(PasswordDigest(hash=_b64encode(derived), salt=_b64encode(salt)))

    def verify(self, password: str, hashed: str, salt: str) -> Result[bool]:
        try:
            derived = self._derive(password, base64.b64decode(salt, validate=True))
        except (binascii.Error, TypeError, ValueError, UnicodeError, OverflowError) as exc:
            return Err(StorageError(exc))
        return Ok(hmac.compare_digest(_b64encode(derived), hashed))

    def _derive(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac(
            PBKDF2_ALGORITHM,
            password.encode("utf-8"),
            salt,
            self._iterations,
            dklen=KEY_LENGTH_BYTES,
        )


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


__all__ = ["Pbkdf2PasswordHasher"]
