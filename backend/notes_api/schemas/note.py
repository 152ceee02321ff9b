"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract and the per-request values
       passed between the auth gate, validators and NoteService.
How:   FastAPI uses the response models to serialize output and generate the
       OpenAPI document. Request-scoped models are built by validators.py.

Request-scoped values (constructed and discarded within one request):
    AuthenticatedPrincipal, ListQuery, NoteCreate

Persisted entity (owned by the store, mirrored here):
    Note
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_NOTE_STATUS = "active"


# ══════════════════════════════════════════════════════════════════════════
# Request-Scoped Models
# ══════════════════════════════════════════════════════════════════════════


class AuthenticatedPrincipal(BaseModel):
    """
    The identity derived from a verified bearer token.

    Only `id` scopes data access; `email` is carried for logging convenience
    when the identity service returns it.
    """
    id: str = Field(min_length=1, description="Opaque user identifier from the identity service")
    email: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class ListQuery(BaseModel):
    """
    What:  Validated filter and pagination parameters for GET /notes.

    Range semantics: rows [offset, offset + limit - 1] of the user's notes
    ordered by created_at descending.
    """
    status: Optional[str] = Field(default=None, description="Exact-match status filter")
    limit: int = Field(default=10, ge=1, description="Maximum notes to return")
    offset: int = Field(default=0, ge=0, description="Rows to skip")

    model_config = ConfigDict(frozen=True)

    @property
    def range_end(self) -> int:
        """Inclusive index of the last row in the requested window."""
        return self.offset + self.limit - 1


class NoteCreate(BaseModel):
    """
    What:  Validated body of POST /notes.
    """
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    status: str = Field(default=DEFAULT_NOTE_STATUS, min_length=1)

    model_config = ConfigDict(frozen=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  A row of the `notes` table as returned by the store.

    `id` and `created_at` are assigned by the store. Additional columns the
    table may grow are passed through unchanged, and `created_at` keeps the
    store's text exactly.
    """
    id: Union[int, str] = Field(description="Store-assigned identifier")
    user_id: str = Field(description="Owner of the note")
    title: str
    content: str
    status: str = Field(default=DEFAULT_NOTE_STATUS)
    created_at: Optional[str] = Field(default=None, description="Creation timestamp as stored")

    model_config = ConfigDict(extra="allow")


class Pagination(BaseModel):
    """
    `total` counts every note matching the filters, not just this page.
    It is null when the count query failed.
    """
    total: Optional[int] = Field(description="Matching rows for the user, or null if unknown")
    limit: int
    offset: int


class NoteListResponse(BaseModel):
    """Returned by GET /notes with HTTP 200."""
    notes: List[Note] = Field(description="Notes on this page, newest first")
    pagination: Pagination


class NoteCreatedResponse(BaseModel):
    """Returned by POST /notes with HTTP 201."""
    note: Note = Field(description="The inserted row")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.

    Example:
        {"error": "Missing authorization header"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    store: str = Field(description="Supabase client state: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
