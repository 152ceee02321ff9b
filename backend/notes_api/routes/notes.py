"""
Notes API — Notes Route Handlers
=================================

What:  Handles GET /notes (list), POST /notes (create) and their CORS preflight.
How:   Auth gate via Depends, request parsing via validators, queries via
       NoteService; success responses get `Access-Control-Allow-Origin: *`.
Who:   Called by browser clients and other services holding a Supabase
       access token.

Request order for both verbs:
    method check (router, 405) → auth gate (401) → validation (400)
    → store round-trip (500 on failure) → JSON response

Preflight:
    GET and POST share one path, so OPTIONS picks the advertised method and
    headers from the browser's Access-Control-Request-Method. A preflight
    never reaches the auth gate.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Query, Request, Response

from notes_api.dependencies import CurrentPrincipal, SupabaseDep
from notes_api.exceptions import InternalServerError
from notes_api.schemas.note import ErrorResponse, NoteCreatedResponse, NoteListResponse
from notes_api.services.note_service import note_service
from notes_api.validators import parse_create_payload, parse_list_query

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

ALLOW_ORIGIN = "*"

# Allowed request headers advertised per endpoint
PREFLIGHT_HEADERS: Dict[str, str] = {
    "GET": "authorization, x-client-info, apikey",
    "POST": "authorization, x-client-info, apikey, content-type",
}


def preflight_headers(requested_method: Optional[str]) -> Dict[str, str]:
    """
    CORS headers for an OPTIONS /notes response.

    Args:
        requested_method: Value of Access-Control-Request-Method, if any.
            GET or POST advertise only that endpoint; anything else
            advertises both.
    """
    method = (requested_method or "").strip().upper()
    if method in PREFLIGHT_HEADERS:
        methods = method
        allowed_headers = PREFLIGHT_HEADERS[method]
    else:
        methods = ", ".join(PREFLIGHT_HEADERS)
        allowed_headers = PREFLIGHT_HEADERS["POST"]

    return {
        "Access-Control-Allow-Origin": ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": methods,
        "Access-Control-Allow-Headers": allowed_headers,
    }


@router.options("/notes", status_code=204, include_in_schema=False)
async def notes_preflight(request: Request) -> Response:
    """Answer a CORS preflight with 204 and no body."""
    return Response(
        status_code=204,
        headers=preflight_headers(request.headers.get("access-control-request-method")),
    )


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        200: {"description": "One page of the caller's notes", "model": NoteListResponse},
        400: {"description": "Invalid pagination parameters", "model": ErrorResponse},
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        405: {"description": "Method not allowed", "model": ErrorResponse},
        500: {"description": "Query or server error", "model": ErrorResponse},
    },
    summary="List the caller's notes",
    description=(
        "Returns the authenticated user's notes, newest first, optionally filtered "
        "by exact status. Paginate with limit (default 10) and offset (default 0)."
    ),
)
async def list_notes(
    response: Response,
    principal: CurrentPrincipal,
    client: SupabaseDep,
    status: Optional[str] = Query(default=None, description="Exact-match status filter"),
    limit: Optional[str] = Query(default=None, description="Page size (integer, default 10)"),
    offset: Optional[str] = Query(default=None, description="Rows to skip (integer, default 0)"),
) -> NoteListResponse:
    """
    List notes owned by the authenticated user.

    Example:
        GET /notes?status=archived&limit=5&offset=10
        Authorization: Bearer <access token>

    `pagination.total` is null when the count query failed; the page itself
    is still returned.
    """
    query = parse_list_query(status=status, limit=limit, offset=offset)

    result = await note_service.list_notes(client=client, principal=principal, query=query)

    response.headers["Access-Control-Allow-Origin"] = ALLOW_ORIGIN
    return result


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteCreatedResponse,
    responses={
        201: {"description": "Note created", "model": NoteCreatedResponse},
        400: {"description": "Missing title or content", "model": ErrorResponse},
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        405: {"description": "Method not allowed", "model": ErrorResponse},
        500: {"description": "Insert or server error", "model": ErrorResponse},
    },
    summary="Create a note",
    description=(
        "Creates a note owned by the authenticated user. Body: "
        '{"title": str, "content": str, "status": str (optional, default "active")}.'
    ),
)
async def create_note(
    request: Request,
    response: Response,
    principal: CurrentPrincipal,
    client: SupabaseDep,
) -> NoteCreatedResponse:
    """
    Create a note for the authenticated user.

    The body is read only after the auth gate passed; an unparseable body
    is a 500, a body missing title/content is a 400.
    """
    try:
        body = await request.json()
    except ValueError as e:
        logger.error("Malformed JSON body from user %s: %s", principal.id, str(e))
        raise InternalServerError(context={"reason": "malformed_json"})

    payload = parse_create_payload(body)

    result = await note_service.create_note(client=client, principal=principal, payload=payload)

    response.headers["Access-Control-Allow-Origin"] = ALLOW_ORIGIN
    return result
