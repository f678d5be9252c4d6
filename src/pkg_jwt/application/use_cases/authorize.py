from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ...domain.entities import AccessContext
from ...domain.exceptions import AuthorizationError
from ...domain.value_objects import AccessRequirement


@dataclass(slots=True)
class AuthorizeAccessUseCase:
    """
    Application use case for authorization using declarative AccessRequirement
    objects.

    Takes:
      - an AccessContext (already authenticated)
      - an iterable of AccessRequirement objects

    and raises AuthorizationError if any requirement is not satisfied.
    """

    def _check_requirement(self, context: AccessContext, requirement: AccessRequirement) -> None:
        any_of = list(requirement.any_of)
        all_of = list(requirement.all_of)

        if any_of and not context.contains_any(any_of):
            raise AuthorizationError(
                f"Missing at least one required claim from: {any_of}"
            )

        if all_of and not context.contains_all(all_of):
            raise AuthorizationError(
                f"Missing required claim(s): {all_of}"
            )

    def execute(
            self,
            context: AccessContext,
            requirements: Iterable[AccessRequirement],
    ) -> AccessContext:
        """
        Raises:
            AuthorizationError if any of the requirements are not satisfied.

        Returns:
            The same AccessContext if authorization succeeds (for chaining).
        """
        for requirement in requirements:
            self._check_requirement(context, requirement)

        return context
