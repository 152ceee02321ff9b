"""
Notes API — Abstract Token Verifier Interface
==============================================

What:  Abstract base class defining the contract for bearer-token verification.
How:   Concrete implementations inherit from TokenVerifier and implement verify().
Who:   Called by the auth gate (dependencies.get_current_principal).
When:  Once per authenticated request, before any validation or query.

Implementations:
    - SupabaseTokenVerifier: asks Supabase Auth who the token belongs to
    - Tests supply their own verifier through FastAPI dependency overrides,
      so no live identity backend is needed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notes_api.schemas.note import AuthenticatedPrincipal


class TokenVerifier(ABC):
    """
    Abstract interface for verifying bearer credentials.

    Contract:
        - verify() returns the principal the token belongs to, or None when
          the identity service knows no such user
        - any exception raised is treated by the caller as a rejected token
        - implementations never log the token itself
    """

    @abstractmethod
    async def verify(self, token: str) -> Optional[AuthenticatedPrincipal]:
        """
        Resolve a bearer token to an authenticated principal.

        Args:
            token: The raw token with any "Bearer " prefix already removed.

        Returns:
            AuthenticatedPrincipal for a valid token, None when no user matches.

        Raises:
            Exception: Any verification failure (expired, malformed, network).
                The auth gate converts it to UnauthorizedError.
        """
        ...
