"""
Notes API — Supabase Token Verifier
====================================

What:  TokenVerifier backed by Supabase Auth (`auth.get_user(jwt)`).
How:   Runs the blocking client call on Starlette's threadpool and maps the
       returned user onto an AuthenticatedPrincipal.
Who:   Built per request by dependencies.get_token_verifier; replaced by a
       fake in tests.
"""

import logging
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool
from supabase import Client

from notes_api.schemas.note import AuthenticatedPrincipal
from notes_api.services.auth_base import TokenVerifier

logger = logging.getLogger(__name__)


class SupabaseTokenVerifier(TokenVerifier):
    """
    Verifies access tokens issued by the project's Supabase Auth.

    Takes either a ready client or a factory returning the shared one.
    """

    def __init__(
        self,
        client: Optional[Client] = None,
        client_factory: Optional[Callable[[], Client]] = None,
    ):
        if client is None and client_factory is None:
            raise ValueError("SupabaseTokenVerifier needs a client or a client_factory")
        self._client = client
        self._client_factory = client_factory

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    async def verify(self, token: str) -> Optional[AuthenticatedPrincipal]:
        client = self.client

        # Raises AuthApiError for expired or malformed tokens; the auth gate
        # turns that into a 401.
        response = await run_in_threadpool(client.auth.get_user, token)

        user = getattr(response, "user", None) if response is not None else None
        if user is None or not getattr(user, "id", None):
            logger.debug("Token verification returned no user")
            return None

        return AuthenticatedPrincipal(id=str(user.id), email=getattr(user, "email", None))
