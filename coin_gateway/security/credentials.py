"""
Salted Argon2id password hashing for user registration and login.
"""
from __future__ import annotations

import base64
import logging
import secrets
from dataclasses import dataclass

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError
from argon2.low_level import Type, hash_secret

logger = logging.getLogger(__name__)

SALT_BYTES = 16
HASH_BYTES = 32


class HashError(Exception):
    """The hashing primitive failed; the request must be aborted."""


@dataclass(frozen=True)
class HashedCredential:
    hash: str
    salt: str


def _encode_salt(raw: bytes) -> str:
    # Same unpadded base64 the PHC string embeds
    return base64.b64encode(raw).decode("ascii").rstrip("=")


class CredentialManager:
    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self.time_cost = time_cost
        self.memory_cost = memory_cost
        self.parallelism = parallelism
        self._verifier = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=HASH_BYTES,
            salt_len=SALT_BYTES,
            type=Type.ID,
        )

    def hash(self, password: str) -> HashedCredential:
        salt = secrets.token_bytes(SALT_BYTES)
        try:
            encoded = hash_secret(
                password.encode("utf-8"),
                salt,
                time_cost=self.time_cost,
                memory_cost=self.memory_cost,
                parallelism=self.parallelism,
                hash_len=HASH_BYTES,
                type=Type.ID,
            )
        except HashingError as exc:
            raise HashError(str(exc)) from exc
        return HashedCredential(hash=encoded.decode("ascii"), salt=_encode_salt(salt))

    def verify(self, password: str, stored_hash: str) -> bool:
        try:
            return self._verifier.verify(stored_hash, password)
        except (VerificationError, InvalidHashError) as exc:
            logger.debug(f"Password verification failed: {exc}")
            return False
