from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Apps can plug this into their own dependencies for OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_COOKIE_NAME = "access_token"


def bearer_challenge(error: Optional[str] = None, description: Optional[str] = None) -> dict[str, str]:
    """
    `WWW-Authenticate` header for a 401 (RFC 6750 section 3).

    No `error` means no credentials were sent at all.
    """
    if error is None:
        return {"WWW-Authenticate": "Bearer"}
    value = f'Bearer error="{error}"'
    if description:
        quoted = description.replace('"', "'")
        value += f', error_description="{quoted}"'
    return {"WWW-Authenticate": value}


def _from_authorization_header(value: Optional[str]) -> Optional[str]:
    # auth scheme names are case-insensitive
    if not value:
        return None
    auth_scheme, _, token = value.strip().partition(" ")
    if auth_scheme.lower() != "bearer":
        return None
    return token.strip() or None


def find_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> Optional[str]:
    """
    Look for a signed token, in order:

      1. credentials resolved by `bearer_scheme`
      2. a raw `Authorization: Bearer <token>` header
      3. the `cookie_name` cookie

    Returns None when there is none.
    """
    if credentials is not None:
        token = (credentials.credentials or "").strip()
        if token:
            return token

    token = _from_authorization_header(request.headers.get("Authorization"))
    if token:
        return token

    return request.cookies.get(cookie_name) or None


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """Like `find_token`, but a missing token is HTTPException(401)."""
    token = find_token(request, credentials, cookie_name)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=bearer_challenge(),
        )
    return token
