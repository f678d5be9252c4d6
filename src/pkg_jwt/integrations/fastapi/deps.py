from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPAuthorizationCredentials

from .security import (
    DEFAULT_COOKIE_NAME,
    bearer_challenge,
    bearer_scheme,
    extract_token_from_request,
    find_token,
)
from ..common.auth_factory import AuthDependencies
from ...domain.entities import AccessContext
from ...domain.exceptions import (
    TokenExpiredError,
    InvalidTokenError,
    AuthenticationError,
    AuthorizationError,
)


@dataclass(slots=True)
class FastAPIAuthorization:
    """
    FastAPI integration for pkg_jwt, built on the framework-agnostic
    AuthDependencies facade.

        fastapi_auth = create_fastapi_auth(scheme=SymmetricScheme(settings.secret))

        @app.get("/me")
        async def me(user: AccessContext = Depends(fastapi_auth.get_current_user)):
            return {"subject": user.subject}
    """

    auth: AuthDependencies
    cookie_name: str = DEFAULT_COOKIE_NAME

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_current_user(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> AccessContext:
        """Dependency: Require authentication."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        try:
            return self.auth.authenticate(token)
        except TokenExpiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired",
                headers=bearer_challenge("invalid_token", "Token expired"),
            ) from exc
        except (InvalidTokenError, AuthenticationError) as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc),
                headers=bearer_challenge("invalid_token", str(exc)),
            ) from exc

    async def get_optional_user(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> AccessContext | None:
        """Dependency: Optional authentication."""
        token = find_token(request, credentials, self.cookie_name)
        if token is None:
            # no token anywhere -> anonymous
            return None

        try:
            return self.auth.authenticate(token)
        except (TokenExpiredError, InvalidTokenError, AuthenticationError):
            # bad token -> treat as anonymous
            return None

    # ------------------------------------------------------------------ #
    # Authorization dependency factory
    # ------------------------------------------------------------------ #

    def require_claims(self, *values: str, any_of: bool = True) -> Callable:
        """
        Dependency factory: require any (or, with any_of=False, all) of the
        given claim values.
        """
        if any_of:
            requirement = self.auth.require_claims(any_of=values)
        else:
            requirement = self.auth.require_claims(all_of=values)

        async def dependency(
                ctx: AccessContext = Depends(self.get_current_user),
        ) -> AccessContext:
            try:
                return self.auth.authorize(ctx, [requirement])
            except AuthorizationError as exc:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                    detail=str(exc)) from exc

        return dependency
