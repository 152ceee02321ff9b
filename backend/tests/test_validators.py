"""
Notes API — Request Validator Tests
====================================

What:  Tests for parse_list_query() and parse_create_payload().

What we test:
    ✅ Defaults: limit from settings, offset 0, no status filter
    ✅ Strict integers: garbage, negatives, zero and oversized limits → 400
    ✅ Create payload: missing/empty title or content → 400
    ✅ Status defaulting and non-string fields
"""

import pytest

from notes_api.config import settings
from notes_api.exceptions import ValidationError
from notes_api.validators import parse_create_payload, parse_list_query


class TestParseListQuery:

    def test_defaults(self):
        query = parse_list_query()

        assert query.status is None
        assert query.limit == settings.default_page_size
        assert query.offset == 0
        assert query.range_end == settings.default_page_size - 1

    def test_explicit_values(self):
        query = parse_list_query(status="archived", limit="5", offset="15")

        assert query.status == "archived"
        assert query.limit == 5
        assert query.offset == 15
        assert query.range_end == 19

    def test_empty_strings_fall_back_to_defaults(self):
        query = parse_list_query(status="", limit="", offset="")

        assert query.status is None
        assert query.limit == settings.default_page_size
        assert query.offset == 0

    def test_surrounding_whitespace_allowed(self):
        assert parse_list_query(limit=" 7 ").limit == 7

    @pytest.mark.parametrize("raw", ["abc", "1.5", "10abc", "0x10"])
    def test_non_integer_limit(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_list_query(limit=raw)

        assert exc_info.value.field == "limit"
        assert exc_info.value.message == "limit must be an integer"

    def test_non_integer_offset(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_list_query(offset="first")

        assert exc_info.value.field == "offset"

    @pytest.mark.parametrize("raw", ["0", "-3"])
    def test_limit_below_one(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_list_query(limit=raw)

        assert exc_info.value.message == "limit must be at least 1"

    def test_limit_above_max(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_list_query(limit=str(settings.max_page_size + 1))

        assert exc_info.value.message == f"limit must not exceed {settings.max_page_size}"

    def test_limit_at_max_is_accepted(self):
        assert parse_list_query(limit=str(settings.max_page_size)).limit == settings.max_page_size

    def test_negative_offset(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_list_query(offset="-1")

        assert exc_info.value.message == "offset must not be negative"


class TestParseCreatePayload:

    def test_status_defaults_to_active(self):
        payload = parse_create_payload({"title": "T", "content": "C"})

        assert payload.title == "T"
        assert payload.content == "C"
        assert payload.status == "active"

    def test_empty_status_defaults_to_active(self):
        assert parse_create_payload({"title": "T", "content": "C", "status": ""}).status == "active"

    def test_explicit_status_kept(self):
        assert parse_create_payload({"title": "T", "content": "C", "status": "draft"}).status == "draft"

    def test_unknown_fields_ignored(self):
        payload = parse_create_payload({"title": "T", "content": "C", "user_id": "someone-else"})

        assert not hasattr(payload, "user_id")

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"title": "T"},
            {"content": "C"},
            {"title": "", "content": "C"},
            {"title": "T", "content": ""},
            {"title": None, "content": "C"},
            [],
            "title",
            None,
        ],
    )
    def test_missing_title_or_content(self, body):
        with pytest.raises(ValidationError) as exc_info:
            parse_create_payload(body)

        assert exc_info.value.message == "Title and content are required"
        assert exc_info.value.status_code == 400

    def test_non_string_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_create_payload({"title": 42, "content": "C"})

        assert exc_info.value.message == "title, content and status must be strings"
        assert exc_info.value.context == {"fields": ["title"]}

    def test_non_string_status(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_create_payload({"title": "T", "content": "C", "status": 5})

        assert exc_info.value.message == "title, content and status must be strings"
        assert exc_info.value.context == {"fields": ["status"]}
