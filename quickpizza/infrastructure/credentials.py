"""Credentials: password digests via passlib and secure session tokens.

Invariants:
    - verify(p, digest(p)) is always True
    - digest() may raise (e.g. passlib.exc.PasswordSizeError); callers abort
      before writing anything
    - A malformed or unknown digest verifies as False, never raises
    - Tokens are TOKEN_LENGTH characters from [a-zA-Z0-9], drawn with `secrets`

Design Decisions:
    - CryptContext keeps the algorithm swappable without touching callers;
      pbkdf2_sha256 needs no native backend
"""

import secrets
import string

from passlib.context import CryptContext

from quickpizza.models.user import TOKEN_LENGTH

TOKEN_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class PasswordCredentials:
    """CredentialHelper backed by a passlib CryptContext."""

    def __init__(self, schemes: list[str] | None = None):
        self._context = CryptContext(
            schemes=schemes or ["pbkdf2_sha256"], deprecated="auto",
        )

    def digest(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        if not digest:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            # unrecognised hash format
            return False

    def generate_token(self) -> str:
        return "".join(
            secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH)
        )
