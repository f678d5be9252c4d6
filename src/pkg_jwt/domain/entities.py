from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from .constants import FailureReason, KeyKind
from .value_objects import Claims


@dataclass(frozen=True, slots=True)
class Key:
    """
    Key record as handed out by a KeyProvider.

    For asymmetric keys `secret` holds the private key PEM (empty when only
    the public half is known) and `public_material` the public key PEM.
    The core only ever reads it.
    """
    id: int | str
    kind: KeyKind
    secret: bytes
    public_material: Optional[bytes] = None
    active: bool = True
    name: Optional[str] = None
    created_at: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Outcome of validating a token.

    subject / claims / expires_at are set only when `valid` is True,
    failure_reason only when it is False.
    """
    valid: bool
    subject: Optional[str] = None
    claims: Optional[str] = None
    expires_at: Optional[int] = None
    failure_reason: Optional[FailureReason] = None

    def __post_init__(self) -> None:
        populated = (self.subject, self.claims, self.expires_at)
        if self.valid:
            if self.failure_reason is not None:
                raise ValueError("A valid result cannot carry a failure reason")
            if any(v is None for v in populated):
                raise ValueError("A valid result needs subject, claims and expires_at")
        else:
            if self.failure_reason is None:
                raise ValueError("An invalid result needs a failure reason")
            if any(v is not None for v in populated):
                raise ValueError("An invalid result cannot carry token fields")

    @classmethod
    def success(cls, claims: Claims) -> "ValidationResult":
        return cls(
            valid=True,
            subject=claims.subject,
            claims=claims.claims,
            expires_at=claims.expires_at,
            failure_reason=None,
        )

    @classmethod
    def failure(cls, reason: FailureReason) -> "ValidationResult":
        return cls(
            valid=False,
            subject=None,
            claims=None,
            expires_at=None,
            failure_reason=reason,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "subject": self.subject,
            "claims": self.claims,
            "expires_at": self.expires_at,
            "failure_reason": self.failure_reason.value if self.failure_reason else None,
        }


def to_validation_result(outcome: Union[Claims, FailureReason]) -> ValidationResult:
    """
    Map a raw validation outcome onto a ValidationResult.

    Parsed claims become a successful result, a FailureReason a failed one.
    Anything else is a programming error.
    """
    if isinstance(outcome, Claims):
        return ValidationResult.success(outcome)
    if isinstance(outcome, FailureReason):
        return ValidationResult.failure(outcome)
    raise TypeError(f"Cannot build a ValidationResult from {type(outcome).__name__}")


@dataclass(slots=True)
class AccessContext:
    """
    The authenticated principal behind a valid token.
    """
    subject: str
    claims: str = ""
    expires_at: Optional[int] = None
    _values: Tuple[str, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self) -> None:
        self._values = tuple(v.strip() for v in self.claims.split(",") if v.strip())

    @property
    def claim_values(self) -> Tuple[str, ...]:
        return self._values

    def contains(self, value: str) -> bool:
        return value in self._values

    def contains_any(self, values: Iterable[str]) -> bool:
        return any(v in self._values for v in values)

    def contains_all(self, values: Iterable[str]) -> bool:
        return all(v in self._values for v in values)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "AccessContext":
        if not result.valid:
            raise ValueError("Cannot build an AccessContext from a failed validation")
        return cls(
            subject=result.subject or "",
            claims=result.claims or "",
            expires_at=result.expires_at,
        )
