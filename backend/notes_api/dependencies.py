"""
Notes API — FastAPI Dependencies
=================================

What:  The auth gate: bearer extraction, token verification, principal.
How:   get_current_principal() reads the Authorization header and asks the
       injected TokenVerifier who the token belongs to.
Who:   Declared on every authenticated route with Depends().

Tests replace get_token_verifier (and get_supabase_client) through
`app.dependency_overrides`.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header
from supabase import Client

from notes_api.database import get_supabase_client
from notes_api.exceptions import MissingAuthError, NotesApiError, UnauthorizedError
from notes_api.schemas.note import AuthenticatedPrincipal
from notes_api.services.auth_base import TokenVerifier
from notes_api.services.supabase_auth import SupabaseTokenVerifier

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str) -> str:
    """
    Strip the first "Bearer " from the header value.

    A header without the prefix is used as the token as-is.
    """
    return authorization.replace(BEARER_PREFIX, "", 1)


def get_token_verifier() -> TokenVerifier:
    """
    Token verifier dependency backed by the shared Supabase client.

    The client is resolved inside verify(), after the header check, so a
    request without credentials is a 401 even when Supabase is unconfigured.
    """
    return SupabaseTokenVerifier(client_factory=get_supabase_client)


async def get_current_principal(
    authorization: Optional[str] = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedPrincipal:
    """
    Resolve the request's bearer token to an authenticated principal.

    Args:
        authorization: Raw Authorization header
        verifier: Token verification capability

    Returns:
        AuthenticatedPrincipal of the token's owner

    Raises:
        MissingAuthError: Header absent or empty (→ 401)
        UnauthorizedError: Verification failed or found no user (→ 401)
    """
    if not authorization:
        raise MissingAuthError()

    token = extract_bearer_token(authorization)

    try:
        principal = await verifier.verify(token)
    except NotesApiError:
        raise
    except Exception as e:
        logger.warning("Token verification error: %s", str(e))
        raise UnauthorizedError(context={"error_type": type(e).__name__})

    if principal is None:
        raise UnauthorizedError(context={"reason": "no_user"})

    return principal


# Type aliases for cleaner dependency injection
SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
CurrentPrincipal = Annotated[AuthenticatedPrincipal, Depends(get_current_principal)]
