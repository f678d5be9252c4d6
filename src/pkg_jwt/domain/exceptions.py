class JwtError(Exception):
    """Base class for token construction and verification errors."""
    pass


class MalformedEncodingError(JwtError, ValueError):
    """Raised when a value is not valid unpadded base64url."""
    pass


class MalformedTokenError(JwtError):
    """Raised when a token segment cannot be parsed."""
    pass


class KeyUnavailableError(JwtError):
    """Raised when required key material is missing or inactive."""
    pass


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class AuthorizationError(Exception):
    """Raised when user lacks required claims."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or its signature does not match."""
    pass
