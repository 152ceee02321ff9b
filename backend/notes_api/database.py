"""
Notes API — Supabase Client Management
=======================================

What:  The process-wide Supabase client handle and its FastAPI dependency.
How:   One synchronous `supabase.Client` is built from settings, cached in this
       module and handed to every request through `get_supabase_client()`.
Who:   Used by the auth gate (token verification) and NoteService (queries).
When:  Created during app startup (lifespan) or on first use, whichever comes
       first; released on shutdown.

Lifecycle:
    init_client()  → builds the handle if Supabase is configured
    get_supabase_client() → FastAPI dependency, returns the shared handle
    close_client() → drops the handle at shutdown

The handle is read-only after construction: requests call builder methods that
return new query objects and never reassign anything on the client itself.
"""

import logging
import threading
from typing import Optional

from supabase import Client, create_client

from notes_api.config import settings
from notes_api.exceptions import InternalServerError

logger = logging.getLogger(__name__)

_client: Optional[Client] = None
_client_lock = threading.Lock()


def init_client() -> Optional[Client]:
    """
    Build the shared client if it does not exist yet.

    Returns None (and logs a warning) when Supabase is not configured, so the
    process can still start and answer health checks.
    """
    global _client
    if _client is not None:
        return _client

    if not settings.supabase_configured:
        logger.warning("Supabase credentials not found in environment")
        return None

    with _client_lock:
        if _client is None:
            _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
            logger.info("Supabase client initialized for %s", settings.supabase_url)
    return _client


def get_supabase_client() -> Client:
    """
    FastAPI dependency that provides the shared Supabase client.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(client: Client = Depends(get_supabase_client)):
            ...

    Raises:
        InternalServerError: Supabase is not configured or the client could
            not be built. The cause is logged, the response stays generic.
    """
    try:
        client = init_client()
    except Exception as e:
        logger.error("Failed to initialize Supabase client: %s", str(e))
        raise InternalServerError(context={"error_type": type(e).__name__})

    if client is None:
        raise InternalServerError(context={"reason": "supabase_not_configured"})
    return client


def close_client() -> None:
    """
    What:  Drops the shared handle.
    When:  Called during application shutdown (lifespan handler).
    """
    global _client
    with _client_lock:
        _client = None
