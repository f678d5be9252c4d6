from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Optional

from ...domain.codec import b64url_encode
from ...domain.constants import DEFAULT_LIFETIME
from ...domain.ports import SigningScheme
from ...domain.serialization import header_bytes, payload_bytes
from ...domain.value_objects import Claims, Header

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IssueTokenUseCase:
    """
    Application use case:
    - Serialize header + claims canonically
    - Sign `encodedHeader.encodedPayload` with the scheme
    - Return the three-segment token

    Pure given its inputs; the only side effect is the scheme's crypto call.
    """

    scheme: SigningScheme
    clock: Callable[[], float] = field(default=time.time)
    default_lifetime: timedelta = DEFAULT_LIFETIME

    def encode(self, claims: Claims, now: Optional[int] = None) -> str:
        """
        Encode already-built claims into a signed token.

        When `now` is given, claims that are already expired at `now` are
        still encoded but logged as a warning.

        Raises:
            KeyUnavailableError
        """
        if now is not None and claims.expires_at < now:
            logger.warning(
                "Issuing token for %r that expired %ds before issue time",
                claims.subject,
                int(now) - claims.expires_at,
            )

        header = Header.for_algorithm(self.scheme.algorithm)
        encoded_header = b64url_encode(header_bytes(header))
        encoded_payload = b64url_encode(payload_bytes(claims))

        signing_input = f"{encoded_header}.{encoded_payload}"
        signature = self.scheme.sign(signing_input.encode("ascii"))

        logger.debug(
            "Issued %s token for %r expiring at %d",
            header.alg.value,
            claims.subject,
            claims.expires_at,
        )
        return f"{signing_input}.{b64url_encode(signature)}"

    def create_token(
            self,
            subject: str,
            claims: str,
            lifetime: timedelta | int | None = None,
            now: Optional[int] = None,
    ) -> str:
        """
        Build claims expiring `lifetime` from now (default one hour) and encode.

        Raises:
            KeyUnavailableError
        """
        issued = int(self.clock()) if now is None else int(now)
        token_claims = Claims.with_lifetime(
            subject=subject,
            claims=claims,
            now=issued,
            lifetime=self.default_lifetime if lifetime is None else lifetime,
        )
        return self.encode(token_claims, now=issued)
