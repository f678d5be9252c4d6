from __future__ import annotations

from .deps import FastAPIAuthorization
from ..common.auth_factory import create_auth_dependencies, AuthDependencies
from ...domain.ports import SigningScheme


def create_fastapi_auth(
    *,
    scheme: SigningScheme,
    leeway_seconds: int = 0,
    cookie_name: str | None = None,
) -> FastAPIAuthorization:
    """
    High-level helper for FastAPI apps:

    - Creates AuthDependencies for the given signing scheme
    - Wraps them in FastAPIAuthorization, exposing dependencies like:

        fastapi_auth.get_current_user
        fastapi_auth.get_optional_user
        fastapi_auth.require_claims(...)
    """
    auth: AuthDependencies = create_auth_dependencies(
        scheme=scheme,
        leeway_seconds=leeway_seconds,
    )
    if cookie_name is None:
        return FastAPIAuthorization(auth=auth)
    return FastAPIAuthorization(auth=auth, cookie_name=cookie_name)


__all__ = ["FastAPIAuthorization", "create_fastapi_auth"]
