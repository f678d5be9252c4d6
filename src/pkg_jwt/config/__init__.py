"""
pkg_jwt.config

- JwtSettings: algorithm, key material, token lifetime, clock leeway.
- settings_from_env: build JwtSettings from JWT_* environment variables.
- scheme_from_settings: JwtSettings -> SigningScheme.
"""

from __future__ import annotations

from .env import resolve_log_level, scheme_from_settings, settings_from_env
from .settings import JwtSettings

__all__ = [
    "JwtSettings",
    "settings_from_env",
    "scheme_from_settings",
    "resolve_log_level",
]
