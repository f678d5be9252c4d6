from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Union

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from jwt.algorithms import HMACAlgorithm, RSAAlgorithm
from jwt.exceptions import InvalidKeyError

from ...domain.constants import Algorithm, KeyKind
from ...domain.entities import Key
from ...domain.exceptions import KeyUnavailableError
from ...domain.ports import KeyProvider, SigningScheme

logger = logging.getLogger(__name__)

RSAKeyInput = Union[str, bytes, RSAPrivateKey, RSAPublicKey]

_HMAC = HMACAlgorithm(HMACAlgorithm.SHA256)
_RSA = RSAAlgorithm(RSAAlgorithm.SHA256)


class SymmetricScheme(SigningScheme):
    """
    HS256: HMAC-SHA256 over the signing input with a shared secret.
    """

    algorithm = Algorithm.HS256

    def __init__(self, secret: str | bytes) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise KeyUnavailableError("Symmetric secret is empty")
        self._secret = secret

    def sign(self, data: bytes) -> bytes:
        return _HMAC.sign(data, self._secret)

    def verify(self, data: bytes, signature: bytes) -> bool:
        # compare_digest under the hood
        return _HMAC.verify(data, self._secret, signature)

    def __repr__(self) -> str:
        return "SymmetricScheme(secret=<redacted>)"


def _load_rsa_key(material: RSAKeyInput, *, private: bool) -> RSAPrivateKey | RSAPublicKey:
    expected = RSAPrivateKey if private else RSAPublicKey
    half = "private" if private else "public"
    try:
        key = _RSA.prepare_key(material)
    except (InvalidKeyError, ValueError, TypeError) as exc:
        raise KeyUnavailableError(f"Could not load RSA {half} key: {exc}") from exc
    if not isinstance(key, expected):
        raise KeyUnavailableError(f"Key material is not an RSA {half} key")
    return key


class AsymmetricScheme(SigningScheme):
    """
    RS256: RSASSA-PKCS1-v1_5 with SHA-256.

    Signing needs the private key, verification the public key. Either half
    may be omitted; using the missing half raises KeyUnavailableError.
    """

    algorithm = Algorithm.RS256

    def __init__(
        self,
        private_key: Optional[RSAKeyInput] = None,
        public_key: Optional[RSAKeyInput] = None,
    ) -> None:
        self._private_key: Optional[RSAPrivateKey] = None
        self._public_key: Optional[RSAPublicKey] = None
        if private_key is not None:
            self._private_key = _load_rsa_key(private_key, private=True)  # type: ignore[assignment]
        if public_key is not None:
            self._public_key = _load_rsa_key(public_key, private=False)  # type: ignore[assignment]

    # ------------------------------------------------------------------ #
    # Alternate constructors
    # ------------------------------------------------------------------ #

    @classmethod
    def from_private_key(cls, private_key: RSAKeyInput) -> "AsymmetricScheme":
        """Sign and verify with one key pair; the public half is derived."""
        private = _load_rsa_key(private_key, private=True)
        return cls(private_key=private, public_key=private.public_key())  # type: ignore[union-attr]

    @classmethod
    def from_public_key(cls, public_key: RSAKeyInput) -> "AsymmetricScheme":
        return cls(public_key=public_key)

    @classmethod
    def from_jwk(cls, jwk: Mapping[str, Any] | str) -> "AsymmetricScheme":
        """Build a verify-only scheme (or a full one for private JWKs)."""
        raw = jwk if isinstance(jwk, str) else json.dumps(dict(jwk))
        try:
            key = RSAAlgorithm.from_jwk(raw)
        except (InvalidKeyError, ValueError, KeyError) as exc:
            raise KeyUnavailableError(f"Invalid RSA JWK: {exc}") from exc
        if isinstance(key, RSAPrivateKey):
            return cls.from_private_key(key)
        return cls(public_key=key)

    # ------------------------------------------------------------------ #
    # SigningScheme
    # ------------------------------------------------------------------ #

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None

    @property
    def can_verify(self) -> bool:
        return self._public_key is not None

    def sign(self, data: bytes) -> bytes:
        if self._private_key is None:
            raise KeyUnavailableError("RS256 signing requires a private key")
        return _RSA.sign(data, self._private_key)

    def verify(self, data: bytes, signature: bytes) -> bool:
        if self._public_key is None:
            raise KeyUnavailableError("RS256 verification requires a public key")
        return _RSA.verify(data, self._public_key, signature)

    def __repr__(self) -> str:
        return f"AsymmetricScheme(can_sign={self.can_sign}, can_verify={self.can_verify})"


def scheme_for_key(key: Key) -> SigningScheme:
    """
    Turn a key record into the matching signing scheme.

    Raises:
        KeyUnavailableError: the key is inactive or holds no usable material.
    """
    if not key.active:
        raise KeyUnavailableError(f"Key {key.id!r} is not active")

    if key.kind is KeyKind.SYMMETRIC:
        return SymmetricScheme(key.secret)

    if not key.secret and not key.public_material:
        raise KeyUnavailableError(f"Key {key.id!r} holds no RSA material")
    return AsymmetricScheme(
        private_key=key.secret or None,
        public_key=key.public_material or None,
    )


def resolve_scheme(provider: KeyProvider, key_id: int | str) -> SigningScheme:
    """Look a key up and build its scheme; a missing key is KeyUnavailableError."""
    key = provider.lookup(key_id)
    if key is None:
        logger.debug("Key %r not found", key_id)
        raise KeyUnavailableError(f"Key {key_id!r} not found")
    return scheme_for_key(key)
