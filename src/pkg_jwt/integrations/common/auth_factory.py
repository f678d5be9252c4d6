from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ...application.use_cases.authenticate import AuthenticateTokenUseCase
from ...application.use_cases.authorize import AuthorizeAccessUseCase
from ...application.use_cases.validate import ValidateTokenUseCase
from ...domain.entities import AccessContext
from ...domain.ports import SigningScheme
from ...domain.value_objects import AccessRequirement


@dataclass(slots=True)
class AuthDependencies:
    """
    Framework-agnostic auth facade.

    Integrations (FastAPI, etc.) adapt this to their own dependency systems.
    """

    auth_use_case: AuthenticateTokenUseCase
    authorize_use_case: AuthorizeAccessUseCase

    # --- Core operations --------------------------------------------------

    def authenticate(self, token: str) -> AccessContext:
        """Token -> AccessContext (or raise auth exceptions)."""
        return self.auth_use_case.execute(token)

    def authorize(
            self,
            context: AccessContext,
            requirements: Iterable[AccessRequirement],
    ) -> AccessContext:
        """Check requirements on an existing AccessContext."""
        return self.authorize_use_case.execute(context, requirements)

    # --- Convenience helper to build requirements -------------------------

    def require_claims(
            self,
            *,
            any_of: Sequence[str] = (),
            all_of: Sequence[str] = (),
    ) -> AccessRequirement:
        return AccessRequirement(any_of=any_of, all_of=all_of)


def create_auth_dependencies(
        *,
        scheme: SigningScheme,
        leeway_seconds: int = 0,
) -> AuthDependencies:
    """
    High-level factory: signing scheme -> AuthDependencies.

    - builds a ValidateTokenUseCase
    - wires AuthenticateTokenUseCase + AuthorizeAccessUseCase
    - returns an AuthDependencies facade.
    """
    validator = ValidateTokenUseCase(scheme=scheme, leeway_seconds=leeway_seconds)

    return AuthDependencies(
        auth_use_case=AuthenticateTokenUseCase(validator=validator),
        authorize_use_case=AuthorizeAccessUseCase(),
    )
