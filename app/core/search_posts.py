"""Post Search: query parsing and ranking weights for free-text post search.

Invariants:
    - Pure functions: no IO, no async, no DB
    - Case-insensitive substring match
    - AND logic: every term must match at least one of title/content/excerpt/tags
    - Ranking is deterministic: weighted field hits, then newest first, then id

Design Decisions:
    - Plain substring matching, not fuzzy or semantic
    - Weights favour title over tags over excerpt over content
    - LIKE wildcards in user input are escaped so "%" and "_" match literally
    - Term count capped at MAX_TERMS: keeps the generated WHERE clause bounded
    - Tags are matched against a newline-joined copy of the tag values, never the
      JSON encoding; terms contain no whitespace so a match never spans two tags
"""

MAX_TERMS = 8
LIKE_ESCAPE = "\\"
TAG_SEPARATOR = "\n"

FIELD_WEIGHTS: dict[str, int] = {
    "title": 8,
    "tags": 4,
    "excerpt": 2,
    "content": 1,
}


def parse_search_terms(query: str | None) -> list[str]:
    """Split a query into unique lowercase terms, preserving first-seen order."""
    if not query:
        return []
    terms: list[str] = []
    for raw in query.lower().split():
        if raw not in terms:
            terms.append(raw)
    return terms[:MAX_TERMS]


def like_pattern(term: str) -> str:
    """Wrap a term as a %term% LIKE pattern with wildcards escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"



def tags_search_text(tags: list[str] | None) -> str:
    """Searchable form of a tag list: raw values joined by TAG_SEPARATOR."""
    return TAG_SEPARATOR.join(tags or [])
