from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..domain.constants import Algorithm


@dataclass(slots=True)
class JwtSettings:
    """
    Token issuing / verification settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    algorithm: Algorithm = Algorithm.HS256
    secret: Optional[str] = None
    private_key_pem: Optional[bytes] = None
    public_key_pem: Optional[bytes] = None

    lifetime_seconds: int = 3600
    leeway_seconds: int = 0
    log_level: str = "WARNING"

    @property
    def lifetime(self) -> timedelta:
        return timedelta(seconds=self.lifetime_seconds)
