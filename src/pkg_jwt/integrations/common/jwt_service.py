from __future__ import annotations

from datetime import timedelta
from typing import Optional

from ...adapters.crypto.schemes import AsymmetricScheme, RSAKeyInput, SymmetricScheme
from ...application.use_cases.issue import IssueTokenUseCase
from ...application.use_cases.validate import ValidateTokenUseCase
from ...domain.constants import FailureReason
from ...domain.entities import ValidationResult
from ...domain.exceptions import KeyUnavailableError
from ...domain.ports import SigningScheme


def create_token(
        subject: str,
        claims: str,
        scheme: SigningScheme,
        lifetime: timedelta | int | None = None,
) -> str:
    """
    Issue a token for `subject` expiring `lifetime` from now (default 1 hour).

    Raises:
        KeyUnavailableError
    """
    return IssueTokenUseCase(scheme=scheme).create_token(subject, claims, lifetime=lifetime)


def validate_token(token: str, scheme: SigningScheme) -> ValidationResult:
    """Validate `token` against `scheme` at the current time. Never raises for bad tokens."""
    return ValidateTokenUseCase(scheme=scheme).validate(token)


class JwtService:
    """
    One object holding both key flavours, for hosts that issue HS256 and
    RS256 tokens side by side.

    If only a private RSA key is given, its public half verifies.
    """

    def __init__(
            self,
            symmetric_key: str | bytes | None = None,
            rsa_private_key: Optional[RSAKeyInput] = None,
            rsa_public_key: Optional[RSAKeyInput] = None,
    ) -> None:
        self._symmetric: Optional[SymmetricScheme] = (
            SymmetricScheme(symmetric_key) if symmetric_key else None
        )

        self._asymmetric: Optional[AsymmetricScheme] = None
        if rsa_private_key is not None and rsa_public_key is None:
            self._asymmetric = AsymmetricScheme.from_private_key(rsa_private_key)
        elif rsa_private_key is not None or rsa_public_key is not None:
            self._asymmetric = AsymmetricScheme(
                private_key=rsa_private_key,
                public_key=rsa_public_key,
            )

    # --- Issue --------------------------------------------------------------

    def create_token_symmetric(
            self,
            username: str,
            claims: str,
            expiration: timedelta | int | None = None,
    ) -> str:
        if self._symmetric is None:
            raise KeyUnavailableError("No symmetric key configured")
        return create_token(username, claims, self._symmetric, lifetime=expiration)

    def create_token_asymmetric(
            self,
            username: str,
            claims: str,
            expiration: timedelta | int | None = None,
    ) -> str:
        if self._asymmetric is None:
            raise KeyUnavailableError("No RSA key configured")
        return create_token(username, claims, self._asymmetric, lifetime=expiration)

    # --- Validate -----------------------------------------------------------

    def validate_token_symmetric(self, token: str) -> ValidationResult:
        if self._symmetric is None:
            return ValidationResult.failure(FailureReason.KEY_UNAVAILABLE)
        return validate_token(token, self._symmetric)

    def validate_token_asymmetric(self, token: str) -> ValidationResult:
        if self._asymmetric is None:
            return ValidationResult.failure(FailureReason.KEY_UNAVAILABLE)
        return validate_token(token, self._asymmetric)
