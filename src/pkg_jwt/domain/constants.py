from datetime import timedelta
from enum import Enum


DEFAULT_LIFETIME = timedelta(hours=1)


class Algorithm(Enum):
    HS256 = "HS256"
    RS256 = "RS256"


class KeyKind(Enum):
    SYMMETRIC = "Symmetric"
    ASYMMETRIC = "Asymmetric"


class FailureReason(Enum):
    MALFORMED_TOKEN = "malformed_token"
    SIGNATURE_INVALID = "signature_invalid"
    EXPIRED = "expired"
    KEY_UNAVAILABLE = "key_unavailable"
