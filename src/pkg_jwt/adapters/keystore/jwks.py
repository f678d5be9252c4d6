import json
import logging
import time
from typing import Any, Dict, List, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from jwt.algorithms import RSAAlgorithm
from jwt.exceptions import InvalidKeyError
from requests import Session

from ...domain.constants import KeyKind
from ...domain.entities import Key
from ...domain.ports import KeyProvider

logger = logging.getLogger(__name__)


class JWKSKeyProvider(KeyProvider):
    """
    Read-only KeyProvider backed by a JWKS endpoint.

    Infrastructure layer:
    - Knows how to fetch and cache a JWKS document.
    - Maps RSA entries to public-only asymmetric Key records, by `kid`.
    """

    def __init__(
        self,
        jwks_uri: str,
        cache_ttl_seconds: int = 300,
        session: Optional[Session] = None,
    ) -> None:
        self._jwks_uri = jwks_uri
        self._cache_ttl = cache_ttl_seconds

        self._session = session or Session()
        self._jwks_keys: Optional[List[Dict[str, Any]]] = None
        self._jwks_last_fetched: float = 0.0

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def lookup(self, key_id: int | str) -> Optional[Key]:
        """
        Resolve `key_id` against the `kid` of the published keys.

        Returns None for unknown ids and for entries that are not usable
        RSA public keys.
        """
        jwk = next(
            (k for k in self._fetch_jwks_keys() if k.get("kid") == str(key_id)),
            None,
        )
        if jwk is None or jwk.get("kty") != "RSA":
            return None

        try:
            public_key = RSAAlgorithm.from_jwk(json.dumps(jwk))
        except (InvalidKeyError, ValueError, KeyError):
            logger.warning("Ignoring unreadable JWK %r from %s", key_id, self._jwks_uri)
            return None
        if not isinstance(public_key, RSAPublicKey):
            public_key = public_key.public_key()

        public_pem = public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return Key(
            id=str(key_id),
            kind=KeyKind.ASYMMETRIC,
            secret=b"",
            public_material=public_pem,
            active=True,
            name=jwk.get("kid"),
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _fetch_jwks_keys(self) -> List[Dict[str, Any]]:
        """
        Fetch JWKS keys with simple in-memory caching.
        """
        now = time.time()
        if self._jwks_keys is not None and (now - self._jwks_last_fetched) < self._cache_ttl:
            return self._jwks_keys

        response = self._session.get(self._jwks_uri)
        response.raise_for_status()

        body = response.json()
        self._jwks_keys = body.get("keys", [])
        self._jwks_last_fetched = now
        logger.info("Fetched %d keys from %s", len(self._jwks_keys), self._jwks_uri)
        return self._jwks_keys
