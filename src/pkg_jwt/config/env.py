from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .settings import JwtSettings
from ..adapters.crypto.schemes import AsymmetricScheme, SymmetricScheme
from ..domain.constants import Algorithm
from ..domain.ports import SigningScheme


def resolve_log_level(name: str) -> int:
    """
    Map a level name (case-insensitive) to its numeric value.

    Raises RuntimeError for names the logging module does not know.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(f"Unknown log level: {name!r}")
    return level


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> JwtSettings:
    env = os.environ if environ is None else environ

    def _int(key: str, default: int) -> int:
        raw = env.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise RuntimeError(f"{key} must be an integer, got {raw!r}") from exc

    def _read_file(key: str) -> Optional[bytes]:
        path = env.get(key)
        if not path:
            return None
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise RuntimeError(f"Cannot read {key}={path}: {exc}") from exc

    log_level = (env.get("JWT_LOG_LEVEL") or "WARNING").strip().upper()
    resolve_log_level(log_level)

    raw_alg = (env.get("JWT_ALGORITHM") or Algorithm.HS256.value).strip().upper()
    try:
        algorithm = Algorithm(raw_alg)
    except ValueError as exc:
        raise RuntimeError(f"Unsupported JWT_ALGORITHM: {raw_alg}") from exc

    secret = env.get("JWT_SECRET") or None
    private_pem = _read_file("JWT_PRIVATE_KEY_FILE")
    public_pem = _read_file("JWT_PUBLIC_KEY_FILE")

    if algorithm is Algorithm.HS256 and not secret:
        raise RuntimeError("Missing JWT settings: JWT_SECRET")
    if algorithm is Algorithm.RS256 and not (private_pem or public_pem):
        raise RuntimeError(
            "Missing JWT settings: JWT_PRIVATE_KEY_FILE or JWT_PUBLIC_KEY_FILE"
        )

    return JwtSettings(
        algorithm=algorithm,
        secret=secret,
        private_key_pem=private_pem,
        public_key_pem=public_pem,
        lifetime_seconds=_int("JWT_LIFETIME_SECONDS", 3600),
        leeway_seconds=_int("JWT_LEEWAY_SECONDS", 0),
        log_level=log_level,
    )


def scheme_from_settings(settings: JwtSettings) -> SigningScheme:
    """
    Raises:
        KeyUnavailableError when the configured material is unusable.
    """
    if settings.algorithm is Algorithm.HS256:
        return SymmetricScheme(settings.secret or "")
    if settings.private_key_pem and not settings.public_key_pem:
        return AsymmetricScheme.from_private_key(settings.private_key_pem)
    return AsymmetricScheme(
        private_key=settings.private_key_pem,
        public_key=settings.public_key_pem,
    )
