# src/pkg_jwt/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Tuple

from .constants import Algorithm


# --- Token value objects -------------------------------------------------


@dataclass(frozen=True, slots=True)
class Header:
    """
    JOSE header of a token. Fully determined by the signing scheme.
    """
    alg: Algorithm
    typ: str = "JWT"

    @classmethod
    def for_algorithm(cls, alg: Algorithm) -> "Header":
        return cls(alg=alg)


def _require_epoch(name: str, value: object) -> None:
    # bool is an int subclass, but True is not a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be whole epoch seconds, got {value!r}")


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Payload of a token.

    `subject` and `claims` are opaque caller strings; the serializer escapes
    them, nothing here restricts their character set.
    """
    subject: str
    claims: str
    expires_at: int
    issued_at: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.subject, str):
            raise ValueError(f"subject must be a string, got {self.subject!r}")
        if not isinstance(self.claims, str):
            raise ValueError(f"claims must be a string, got {self.claims!r}")
        _require_epoch("expires_at", self.expires_at)
        if self.issued_at is not None:
            _require_epoch("issued_at", self.issued_at)

    @classmethod
    def with_lifetime(
            cls,
            subject: str,
            claims: str,
            now: int,
            lifetime: timedelta | int | float,
    ) -> "Claims":
        """Build claims expiring `lifetime` after `now` (fractions truncated)."""
        if isinstance(lifetime, timedelta):
            seconds = int(lifetime.total_seconds())
        else:
            seconds = int(lifetime)
        return cls(subject=subject, claims=claims, expires_at=int(now) + seconds)


# --- Access / claims value objects ---------------------------------------


def _normalize(values: Iterable[str]) -> Tuple[str, ...]:
    """
    Normalize an iterable of strings into a tuple.
    If a plain string is passed, treat it as a single-element collection.
    """
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True, slots=True)
class AccessRequirement:
    """
    Declarative requirement over the comma-separated values of the
    `claims` string.

    - any_of:   at least one of these must be present (OR)
    - all_of:   all of these must be present (AND)
    """

    any_of: Tuple[str, ...] = ()
    all_of: Tuple[str, ...] = ()

    def __init__(
            self,
            any_of: Iterable[str] | None = None,
            all_of: Iterable[str] | None = None,
    ) -> None:
        object.__setattr__(self, "any_of", _normalize(any_of or ()))
        object.__setattr__(self, "all_of", _normalize(all_of or ()))


def require_claims(*values: str, any_of: bool = True) -> AccessRequirement:
    if any_of:
        return AccessRequirement(any_of=values)
    return AccessRequirement(all_of=values)
