from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import replace
from typing import Dict, List, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ...domain.constants import KeyKind
from ...domain.entities import Key
from ...domain.ports import KeyProvider

logger = logging.getLogger(__name__)

SYMMETRIC_KEY_BYTES = 32
DEFAULT_RSA_KEY_SIZE = 2048


def generate_secret(num_bytes: int = SYMMETRIC_KEY_BYTES) -> bytes:
    return secrets.token_bytes(num_bytes)


def generate_rsa_pem_pair(key_size: int = DEFAULT_RSA_KEY_SIZE) -> tuple[bytes, bytes]:
    """Return (private PKCS#8 PEM, public SubjectPublicKeyInfo PEM)."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def _coerce_id(key_id: int | str) -> Optional[int]:
    """Ids are ints; "7" and 7 name the same key."""
    if isinstance(key_id, bool):
        return None
    try:
        return int(key_id)
    except (TypeError, ValueError):
        return None


class InMemoryKeyProvider(KeyProvider):
    """
    Process-local key store.

    - creates symmetric (32 random bytes) and RSA keys
    - hands out immutable Key records
    - deactivates keys instead of deleting them

    Mutations are serialized with a lock; lookups never block on crypto.
    """

    def __init__(self) -> None:
        self._keys: Dict[int, Key] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # KeyProvider
    # ------------------------------------------------------------------ #

    def lookup(self, key_id: int | str) -> Optional[Key]:
        internal_id = _coerce_id(key_id)
        if internal_id is None:
            return None
        return self._keys.get(internal_id)

    # ------------------------------------------------------------------ #
    # key management
    # ------------------------------------------------------------------ #

    def _store(self, name: str, kind: KeyKind, secret: bytes, public: Optional[bytes]) -> Key:
        with self._lock:
            key = Key(
                id=self._next_id,
                kind=kind,
                secret=secret,
                public_material=public,
                active=True,
                name=name,
                created_at=int(time.time()),
            )
            self._keys[key.id] = key
            self._next_id += 1
        logger.info("Created %s key %s (%s)", kind.value.lower(), key.id, name)
        return key

    def add(
        self,
        name: str,
        kind: KeyKind,
        secret: bytes,
        public_material: Optional[bytes] = None,
    ) -> Key:
        """Register externally generated key material."""
        return self._store(name, kind, secret, public_material)

    def create_symmetric(self, name: str) -> Key:
        return self._store(name, KeyKind.SYMMETRIC, generate_secret(), None)

    def create_asymmetric(self, name: str, key_size: int = DEFAULT_RSA_KEY_SIZE) -> Key:
        private_pem, public_pem = generate_rsa_pem_pair(key_size)
        return self._store(name, KeyKind.ASYMMETRIC, private_pem, public_pem)

    def deactivate(self, key_id: int | str) -> bool:
        """Returns False when the key does not exist."""
        internal_id = _coerce_id(key_id)
        if internal_id is None:
            return False
        with self._lock:
            key = self._keys.get(internal_id)
            if key is None:
                return False
            self._keys[internal_id] = replace(key, active=False)
        logger.info("Deactivated key %s", key_id)
        return True

    def list_keys(self, *, active_only: bool = False) -> List[Key]:
        keys = list(self._keys.values())
        if active_only:
            keys = [k for k in keys if k.active]
        return keys
