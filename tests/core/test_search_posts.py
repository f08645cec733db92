"""Post Search: term parsing and LIKE escaping.

Tests:
    - terms lowercased, de-duplicated, order kept, capped
    - LIKE wildcards in input match literally
    - title carries the highest ranking weight
"""

from app.core.search_posts import (
    FIELD_WEIGHTS, MAX_TERMS, like_pattern, parse_search_terms,
    tags_search_text,
)


def test_empty_query_has_no_terms():
    assert parse_search_terms(None) == []
    assert parse_search_terms("   ") == []


def test_terms_lowercased_and_deduplicated():
    assert parse_search_terms("Python  web PYTHON") == ["python", "web"]


def test_terms_capped():
    query = " ".join(f"t{i}" for i in range(MAX_TERMS + 5))
    assert len(parse_search_terms(query)) == MAX_TERMS


def test_like_pattern_wraps_term():
    assert like_pattern("py") == "%py%"


def test_like_pattern_escapes_wildcards():
    assert like_pattern("100%") == "%100\\%%"
    assert like_pattern("a_b") == "%a\\_b%"
    assert like_pattern("back\\slash") == "%back\\\\slash%"


def test_title_weighs_most():
    assert FIELD_WEIGHTS["title"] == max(FIELD_WEIGHTS.values())
    assert FIELD_WEIGHTS["content"] == min(FIELD_WEIGHTS.values())


def test_tag_search_text_joins_raw_values():
    assert tags_search_text(["café", "a,b"]) == "café\na,b"
    assert tags_search_text([]) == ""
    assert tags_search_text(None) == ""
