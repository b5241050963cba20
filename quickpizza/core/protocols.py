"""Boundary Protocols: contracts between the catalog and its collaborators.

Invariants:
    - The catalog reaches credentials and fault injection only through these types
    - verify(p, digest(p)) is always True; digest() may raise and callers must
      treat that as an abort before any write

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass plain fakes
    - FaultHook.inject is async: armed check points may delay before failing
"""

from typing import Protocol


class CredentialHelper(Protocol):
    """Password digests and opaque session tokens."""
    def digest(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, digest: str) -> bool: ...
    def generate_token(self) -> str: ...


class FaultHook(Protocol):
    """Named check points that a test harness can force to fail."""
    async def inject(self, check_point: str) -> None: ...
