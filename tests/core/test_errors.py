"""Error Hierarchy: status codes and response envelopes."""

import pytest

from app.core.errors import (
    AuthenticationError, BlogError, ConflictError, DatabaseError,
    ForbiddenError, InvalidTokenError, ResourceNotFoundError, ValidationError,
)


@pytest.mark.parametrize("error, status, code", [
    (ValidationError("bad"), 400, "VALIDATION_ERROR"),
    (AuthenticationError(), 401, "AUTHENTICATION_ERROR"),
    (InvalidTokenError(), 401, "INVALID_TOKEN"),
    (ForbiddenError("Post", "1"), 403, "FORBIDDEN"),
    (ResourceNotFoundError("Post", "1"), 404, "RESOURCE_NOT_FOUND"),
    (ConflictError("in use"), 409, "CONFLICT"),
    (DatabaseError("boom", "commit"), 500, "INTERNAL_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, BlogError)
    assert error.http_status == status
    assert error.to_response()["error"]["code"] == code


def test_validation_error_reports_field():
    body = ValidationError("Title too short", field="title").to_response()
    assert body["error"]["field"] == "title"
    assert body["error"]["category"] == "validation"


def test_authentication_error_message_is_generic():
    assert AuthenticationError().message == "Invalid credentials"


def test_database_error_hides_driver_detail():
    err = DatabaseError("Connection or operational error", "execute")
    assert "asyncpg" not in err.to_response()["error"]["message"]
