"""Post Rules: field limits, tag parsing, patch filtering, ownership, visibility.

Tests:
    - title 3 ok / 2 rejected; excerpt 200 ok / 201 rejected; content >= 10
    - tags keep order and duplicates, accept comma strings
    - clean_patch drops author/id
    - check_ownership raises ForbiddenError for non-authors
    - drafts visible to author only
"""

from uuid import uuid4

import pytest

from app.core.domain_types import Identity, UserId
from app.core.errors import ForbiddenError, ValidationError
from app.core.post_rules import (
    can_view, check_ownership, clean_patch, normalize_tags, preview_excerpt,
    validate_comment_content, validate_post_fields,
)


def _fields(**overrides):
    fields = {
        "title": "abc",
        "content": "0123456789",
        "category_id": uuid4(),
    }
    fields.update(overrides)
    return fields


def test_title_of_three_chars_accepted():
    assert validate_post_fields(_fields(title="abc"))["title"] == "abc"


def test_title_of_two_chars_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_post_fields(_fields(title="ab"))
    assert exc.value.field == "title"


def test_title_whitespace_does_not_count():
    with pytest.raises(ValidationError):
        validate_post_fields(_fields(title="  ab  "))


def test_content_minimum():
    with pytest.raises(ValidationError) as exc:
        validate_post_fields(_fields(content="too short"))
    assert exc.value.field == "content"


def test_excerpt_of_200_accepted_201_rejected():
    assert len(validate_post_fields(_fields(excerpt="e" * 200))["excerpt"]) == 200
    with pytest.raises(ValidationError) as exc:
        validate_post_fields(_fields(excerpt="e" * 201))
    assert exc.value.field == "excerpt"


def test_blank_excerpt_becomes_none():
    assert validate_post_fields(_fields(excerpt="   "))["excerpt"] is None


def test_missing_category_rejected():
    with pytest.raises(ValidationError):
        validate_post_fields(_fields(category_id=None))


def test_partial_validation_skips_absent_fields():
    assert validate_post_fields({"is_published": True}, partial=True) == {
        "is_published": True,
    }


def test_partial_validation_still_checks_present_fields():
    with pytest.raises(ValidationError):
        validate_post_fields({"title": "no"}, partial=True)


def test_tags_from_comma_string_keep_order_and_duplicates():
    assert normalize_tags("a, b, b") == ["a", "b", "b"]


def test_tags_list_trimmed_and_empties_dropped():
    assert normalize_tags([" x ", "", "y", "  "]) == ["x", "y"]


def test_tags_none_is_empty():
    assert normalize_tags(None) == []


def test_clean_patch_drops_author_and_id():
    patch = {
        "title": "New", "author_id": uuid4(), "author": "someone",
        "id": uuid4(), "view_count": 99,
    }
    assert clean_patch(patch) == {"title": "New"}


def test_preview_prefers_excerpt():
    assert preview_excerpt("short", "c" * 500) == "short"


def test_preview_truncates_long_content():
    preview = preview_excerpt(None, "c" * 500)
    assert preview == "c" * 150 + "..."


def test_preview_keeps_short_content():
    assert preview_excerpt(None, "short content") == "short content"


def test_check_ownership():
    owner = Identity(id=UserId(uuid4()), username="owner")
    other = Identity(id=UserId(uuid4()), username="other")
    check_ownership(owner.id, owner, uuid4())
    with pytest.raises(ForbiddenError):
        check_ownership(owner.id, other, uuid4())


def test_drafts_visible_to_author_only():
    author = Identity(id=UserId(uuid4()), username="a")
    reader = Identity(id=UserId(uuid4()), username="r")
    assert can_view(True, author.id, None)
    assert can_view(False, author.id, author)
    assert not can_view(False, author.id, reader)
    assert not can_view(False, author.id, None)


def test_comment_content_must_not_be_blank():
    assert validate_comment_content("  hi ") == "hi"
    with pytest.raises(ValidationError):
        validate_comment_content("   ")
