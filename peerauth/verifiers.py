"""
peerauth.verifiers
~~~~~~~~~~~~~~~~~~
Password verification strategies.

``none``      stored value is the plaintext password.
``standard``  argon2id hash, library default cost.
``strong``    argon2id hash, higher time and memory cost.

The strategy is picked once from configuration through
:meth:`Encryptor.verifier`; nothing else switches on the tag.
"""

from __future__ import annotations

import enum
import hmac
from typing import Protocol

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .errors import ConfigurationError, VerifierError

# argon2-cffi defaults (RFC 9106 low-memory profile)
STANDARD_PARAMS = dict(time_cost=3, memory_cost=65536, parallelism=4)
# ~4x the work of the standard profile
STRONG_PARAMS = dict(time_cost=4, memory_cost=131072, parallelism=4)


class PasswordVerifier(Protocol):
    def verify(self, candidate: str, stored: str) -> bool:
        ...

    def hash(self, plain: str) -> str:
        ...


class PlainVerifier:
    """Stored values are plaintext.

    ``hmac.compare_digest`` keeps the comparison itself from
    short-circuiting; that is the only timing protection offered.
    """

    def verify(self, candidate: str, stored: str) -> bool:
        try:
            stored_bytes = stored.encode("utf-8")
        except UnicodeError as e:
            raise VerifierError("stored password is not valid UTF-8 text") from e
        try:
            candidate_bytes = candidate.encode("utf-8")
        except UnicodeError:
            # unencodable input never equals a valid stored value
            return False
        return hmac.compare_digest(candidate_bytes, stored_bytes)

    def hash(self, plain: str) -> str:
        return plain


class Argon2Verifier:
    def __init__(self, time_cost: int, memory_cost: int, parallelism: int) -> None:
        self._ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def verify(self, candidate: str, stored: str) -> bool:
        try:
            candidate.encode("utf-8")
        except UnicodeError:
            return False
        try:
            return self._ph.verify(stored, candidate)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, UnicodeError) as e:
            raise VerifierError("stored value is not an argon2 hash") from e
        except VerificationError as e:
            raise VerifierError(f"argon2 verification failed: {e}") from e

    def hash(self, plain: str) -> str:
        return self._ph.hash(plain)


class Encryptor(str, enum.Enum):
    NONE = "none"
    STANDARD = "standard"
    STRONG = "strong"

    @classmethod
    def parse(cls, name: str) -> "Encryptor":
        key = (name or "").strip().lower()
        if key == "basic":
            return cls.STANDARD
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(e.value for e in cls)
            raise ConfigurationError(
                f"Unknown encryptor {name!r} (expected one of: {choices})"
            ) from None

    def verifier(self) -> PasswordVerifier:
        if self is Encryptor.NONE:
            return PlainVerifier()
        if self is Encryptor.STANDARD:
            return Argon2Verifier(**STANDARD_PARAMS)
        if self is Encryptor.STRONG:
            return Argon2Verifier(**STRONG_PARAMS)
        raise ConfigurationError(f"No support for encryptor type {self.value}")
