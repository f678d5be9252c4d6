from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain.constants import FailureReason
from ...domain.entities import AccessContext
from ...domain.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError
from .validate import ValidateTokenUseCase


@dataclass(slots=True)
class AuthenticateTokenUseCase:
    """
    Application use case:
    - Validate a token via ValidateTokenUseCase
    - Map the result -> AccessContext, or a failure -> exception

    Framework integrations need exceptions to short-circuit a request, so
    the typed failure reasons are translated here and nowhere else.
    """

    validator: ValidateTokenUseCase

    def execute(self, token: str, now: Optional[int] = None) -> AccessContext:
        """
        Authenticate a token and return an AccessContext.

        Raises:
            TokenExpiredError
            InvalidTokenError
            AuthenticationError
        """
        result = self.validator.validate(token, now=now)
        if result.valid:
            return AccessContext.from_result(result)

        reason = result.failure_reason
        if reason is FailureReason.EXPIRED:
            raise TokenExpiredError("Token has expired")
        if reason is FailureReason.SIGNATURE_INVALID:
            raise InvalidTokenError("Invalid token: signature mismatch")
        if reason is FailureReason.MALFORMED_TOKEN:
            raise InvalidTokenError("Invalid token: malformed")
        raise AuthenticationError("Token validation failed: verification key unavailable")
