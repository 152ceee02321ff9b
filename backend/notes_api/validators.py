"""
Notes API — Request Validators
===============================

What:  Turns raw query strings and JSON bodies into ListQuery / NoteCreate.
Who:   Called by the route handlers after the auth gate has passed.

Pagination inputs are validated strictly: a non-integer, negative or
oversized `limit`/`offset` is a 400, never a silent coercion.
"""

from typing import Any, Optional

import pydantic

from notes_api.config import settings
from notes_api.exceptions import ValidationError
from notes_api.schemas.note import DEFAULT_NOTE_STATUS, ListQuery, NoteCreate


def _parse_int(raw: Optional[str], field: str, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip(), 10)
    except ValueError:
        raise ValidationError(message=f"{field} must be an integer", field=field)


def parse_list_query(
    status: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
) -> ListQuery:
    """
    Build a ListQuery from GET /notes query parameters.

    Args:
        status: Exact-match filter; empty string means no filter
        limit:  Integer string, defaults to settings.default_page_size
        offset: Integer string, defaults to 0

    Raises:
        ValidationError: limit/offset not an integer, out of range
    """
    parsed_limit = _parse_int(limit, "limit", settings.default_page_size)
    parsed_offset = _parse_int(offset, "offset", 0)

    if parsed_limit < 1:
        raise ValidationError(message="limit must be at least 1", field="limit")
    if parsed_limit > settings.max_page_size:
        raise ValidationError(
            message=f"limit must not exceed {settings.max_page_size}",
            field="limit",
            context={"max_page_size": settings.max_page_size},
        )
    if parsed_offset < 0:
        raise ValidationError(message="offset must not be negative", field="offset")

    return ListQuery(status=status or None, limit=parsed_limit, offset=parsed_offset)


def parse_create_payload(body: Any) -> NoteCreate:
    """
    Build a NoteCreate from a parsed POST /notes body.

    `title` and `content` must be present and truthy; `status` falls back to
    "active" when missing or empty.

    Raises:
        ValidationError: body is not an object, required fields are missing,
            or fields are not strings
    """
    if not isinstance(body, dict) or not body.get("title") or not body.get("content"):
        raise ValidationError(message="Title and content are required")

    try:
        return NoteCreate(
            title=body["title"],
            content=body["content"],
            status=body.get("status") or DEFAULT_NOTE_STATUS,
        )
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            message="title, content and status must be strings",
            context={"fields": fields},
        )
