"""
pkg_jwt

Compact signed identity tokens (HS256 / RS256): issue, validate, and plug
into frameworks (FastAPI) without a network round-trip.
"""

__version__ = "0.1.0"

from .domain.constants import Algorithm, FailureReason, KeyKind, DEFAULT_LIFETIME
from .domain.entities import AccessContext, Key, ValidationResult, to_validation_result
from .domain.exceptions import (
    JwtError,
    MalformedEncodingError,
    MalformedTokenError,
    KeyUnavailableError,
    TokenExpiredError,
    InvalidTokenError,
    AuthenticationError,
    AuthorizationError,
)
from .domain.value_objects import Claims, Header, AccessRequirement, require_claims
from .domain.codec import b64url_encode, b64url_decode
from .domain.ports import SigningScheme, KeyProvider

from .application.use_cases.issue import IssueTokenUseCase
from .application.use_cases.validate import ValidateTokenUseCase
from .application.use_cases.authenticate import AuthenticateTokenUseCase
from .application.use_cases.authorize import AuthorizeAccessUseCase

from .adapters.crypto.schemes import (
    SymmetricScheme,
    AsymmetricScheme,
    scheme_for_key,
    resolve_scheme,
)
from .adapters.keystore.memory import InMemoryKeyProvider
from .adapters.keystore.jwks import JWKSKeyProvider

from .integrations.common.jwt_service import JwtService, create_token, validate_token

__all__ = [
    "__version__",
    # domain core
    "Algorithm",
    "FailureReason",
    "KeyKind",
    "DEFAULT_LIFETIME",
    "AccessContext",
    "Key",
    "ValidationResult",
    "to_validation_result",
    "Claims",
    "Header",
    "AccessRequirement",
    "require_claims",
    "b64url_encode",
    "b64url_decode",
    "SigningScheme",
    "KeyProvider",
    # exceptions
    "JwtError",
    "MalformedEncodingError",
    "MalformedTokenError",
    "KeyUnavailableError",
    "TokenExpiredError",
    "InvalidTokenError",
    "AuthenticationError",
    "AuthorizationError",
    # use cases
    "IssueTokenUseCase",
    "ValidateTokenUseCase",
    "AuthenticateTokenUseCase",
    "AuthorizeAccessUseCase",
    # adapters
    "SymmetricScheme",
    "AsymmetricScheme",
    "scheme_for_key",
    "resolve_scheme",
    "InMemoryKeyProvider",
    "JWKSKeyProvider",
    # facade
    "JwtService",
    "create_token",
    "validate_token",
]
