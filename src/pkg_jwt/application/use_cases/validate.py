from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ...domain.codec import b64url_decode
from ...domain.constants import FailureReason
from ...domain.entities import ValidationResult, to_validation_result
from ...domain.exceptions import KeyUnavailableError, MalformedEncodingError, MalformedTokenError
from ...domain.ports import SigningScheme
from ...domain.serialization import parse_header, parse_payload
from ...domain.value_objects import Claims

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidateTokenUseCase:
    """
    Application use case:
    - Split the token into its three segments
    - Decode them, verify the signature over the *encoded* segments
    - Parse header/payload and check expiry

    Every failure is reported as a ValidationResult with a FailureReason;
    nothing derived from the token itself raises.

    `leeway_seconds` is the tolerated clock skew when checking `exp`
    (0 by default: a token is expired once `exp < now`).
    """

    scheme: SigningScheme
    clock: Callable[[], float] = field(default=time.time)
    leeway_seconds: int = 0

    def validate(self, token: str, now: Optional[int] = None) -> ValidationResult:
        outcome = self._run(token, int(self.clock()) if now is None else int(now))
        if isinstance(outcome, FailureReason):
            logger.debug("Token rejected: %s", outcome.value)
        return to_validation_result(outcome)

    # ------------------------------------------------------------------ #
    # Internal: the validation state machine
    # ------------------------------------------------------------------ #

    def _run(self, token: str, now: int) -> Union[Claims, FailureReason]:
        # ---- Split --------------------------------------------------------
        if not isinstance(token, str):
            return FailureReason.MALFORMED_TOKEN
        parts = token.split(".")
        if len(parts) != 3 or not all(parts):
            return FailureReason.MALFORMED_TOKEN
        encoded_header, encoded_payload, encoded_signature = parts

        # ---- Decode -------------------------------------------------------
        try:
            raw_header = b64url_decode(encoded_header)
            raw_payload = b64url_decode(encoded_payload)
            signature = b64url_decode(encoded_signature)
        except MalformedEncodingError:
            return FailureReason.MALFORMED_TOKEN

        # ---- Verify signature over the original encoded segments ----------
        # segments passed the base64url alphabet check, so ASCII is safe
        signing_input = f"{encoded_header}.{encoded_payload}".encode("ascii")
        try:
            if not self.scheme.verify(signing_input, signature):
                return FailureReason.SIGNATURE_INVALID
        except KeyUnavailableError:
            return FailureReason.KEY_UNAVAILABLE

        # ---- Parse --------------------------------------------------------
        try:
            header = parse_header(raw_header)
            claims = parse_payload(raw_payload)
        except MalformedTokenError:
            return FailureReason.MALFORMED_TOKEN
        if header.alg is not self.scheme.algorithm:
            return FailureReason.MALFORMED_TOKEN

        # ---- Expiry -------------------------------------------------------
        if claims.expires_at + self.leeway_seconds < now:
            return FailureReason.EXPIRED

        return claims
