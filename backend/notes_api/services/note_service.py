"""
Notes API — Note Service (Scoped Queries)
==========================================

What:  Builds and runs the user-scoped read and write against the `notes` table.
How:   Uses the Supabase (PostgREST) query builder on the shared client; each
       blocking `.execute()` runs on Starlette's threadpool.
Who:   Called by route handlers; calls the store.
When:  After the auth gate and request validation succeeded.

Query shapes:
    list:   select * from notes
            where user_id = :principal [and status = :status]
            order by created_at desc
            range(offset, offset + limit - 1)

    count:  select count(*) from notes      (head-only, exact)
            where user_id = :principal [and status = :status]

    create: insert into notes (user_id, title, content, status)
            returning *

Every query carries `user_id = principal.id`. The client authenticates with
the service role key, which bypasses row-level security, so this filter is
the only thing keeping users apart.

The list and count queries are separate round-trips without a transaction:
under concurrent writes `total` can disagree with the returned page.
"""

import logging
from typing import Any, Dict, List, Optional

from starlette.concurrency import run_in_threadpool
from supabase import Client

from notes_api.config import settings
from notes_api.exceptions import QueryError
from notes_api.schemas.note import (
    AuthenticatedPrincipal,
    ListQuery,
    Note,
    NoteCreate,
    NoteCreatedResponse,
    NoteListResponse,
    Pagination,
)

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): one page of the principal's notes plus a total count
        - create_note(): single-row insert owned by the principal

    Error Handling Strategy:
        Store failures on the primary query are wrapped in QueryError with a
        generic message; the original exception is logged. A failed count
        only degrades `pagination.total` to None.
    """

    def __init__(self, table: Optional[str] = None):
        self.table = table or settings.notes_table

    def _scoped(self, client: Client, principal: AuthenticatedPrincipal, *columns: str, **options: Any):
        return (
            client.table(self.table)
            .select(*columns, **options)
            .eq("user_id", principal.id)
        )

    async def list_notes(
        self,
        client: Client,
        principal: AuthenticatedPrincipal,
        query: ListQuery,
    ) -> NoteListResponse:
        """
        Fetch one page of the principal's notes, newest first.

        Args:
            client: Shared Supabase client
            principal: Authenticated owner; scopes both queries
            query: Validated status filter and pagination window

        Returns:
            NoteListResponse with the page and pagination metadata

        Raises:
            QueryError: The list query failed (→ 500 "Failed to fetch notes")
        """
        request = self._scoped(client, principal, "*")
        if query.status:
            request = request.eq("status", query.status)
        request = request.order("created_at", desc=True).range(query.offset, query.range_end)

        try:
            result = await run_in_threadpool(request.execute)
        except Exception as e:
            logger.error(
                "Error fetching notes for user %s: %s", principal.id, str(e), exc_info=True
            )
            raise QueryError(
                message="Failed to fetch notes",
                context={"error_type": type(e).__name__, "user_id": principal.id},
            )

        rows: List[Dict[str, Any]] = result.data or []
        total = await self.count_notes(client, principal, query.status)

        return NoteListResponse(
            notes=[Note.model_validate(row) for row in rows],
            pagination=Pagination(total=total, limit=query.limit, offset=query.offset),
        )

    async def count_notes(
        self,
        client: Client,
        principal: AuthenticatedPrincipal,
        status: Optional[str] = None,
    ) -> Optional[int]:
        """
        Exact count of the principal's notes matching the status filter.

        Returns None instead of raising when the count query fails; the list
        result it accompanies is still valid.
        """
        request = self._scoped(client, principal, "*", count="exact", head=True)
        if status:
            request = request.eq("status", status)

        try:
            result = await run_in_threadpool(request.execute)
        except Exception as e:
            logger.warning("Count query failed for user %s: %s", principal.id, str(e))
            return None

        return result.count

    async def create_note(
        self,
        client: Client,
        principal: AuthenticatedPrincipal,
        payload: NoteCreate,
    ) -> NoteCreatedResponse:
        """
        Insert a note owned by the principal and return the stored row.

        Raises:
            QueryError: The insert failed or returned no row
                (→ 500 "Failed to create note")
        """
        row = {
            "user_id": principal.id,
            "title": payload.title,
            "content": payload.content,
            "status": payload.status,
        }
        request = client.table(self.table).insert(row)

        try:
            result = await run_in_threadpool(request.execute)
        except Exception as e:
            logger.error(
                "Error inserting note for user %s: %s", principal.id, str(e), exc_info=True
            )
            raise QueryError(
                message="Failed to create note",
                context={"error_type": type(e).__name__, "user_id": principal.id},
            )

        if not result.data:
            logger.error("Insert for user %s returned no row", principal.id)
            raise QueryError(
                message="Failed to create note",
                context={"reason": "empty_insert_result", "user_id": principal.id},
            )

        note = Note.model_validate(result.data[0])
        logger.info("Note %s created for user %s", note.id, principal.id)
        return NoteCreatedResponse(note=note)


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService is stateless; the client is passed per call
note_service = NoteService()
