"""Entity Ids: parse opaque id strings from URLs into typed UUIDs.

Invariants:
    - A malformed id is indistinguishable from an unknown one (404, not 400)
"""

from uuid import UUID

from app.core.errors import ResourceNotFoundError


def parse_entity_id(raw: str, resource_type: str) -> UUID:
    try:
        return UUID(str(raw))
    except ValueError:
        raise ResourceNotFoundError(resource_type, str(raw))


def try_parse_uuid(raw: str) -> UUID | None:
    try:
        return UUID(str(raw))
    except ValueError:
        return None
