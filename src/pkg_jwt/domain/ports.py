from __future__ import annotations

from typing import Optional, Protocol

from .constants import Algorithm
from .entities import Key


class SigningScheme(Protocol):
    """
    Port for producing and checking token signatures.

    Implementations live in the adapters layer (HMAC and RSA schemes).
    Both operations treat their input as opaque bytes.
    """

    algorithm: Algorithm

    def sign(self, data: bytes) -> bytes:
        """
        Raises:
          - KeyUnavailableError when no signing key is configured
        """
        ...

    def verify(self, data: bytes, signature: bytes) -> bool:
        """
        Return True when `signature` matches `data`.

        Raises:
          - KeyUnavailableError when no verification key is configured
        """
        ...


class KeyProvider(Protocol):
    """
    Port for resolving a key identifier to a key record.

    Returns None when the key does not exist. Key storage and rotation are
    the provider's business; callers only read.
    """

    def lookup(self, key_id: int | str) -> Optional[Key]:
        ...
