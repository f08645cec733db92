"""Domain Types: verifies identity wrappers, Identity and PostStatus."""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from app.core.domain_types import (
    CategoryId, CommentId, Identity, PostId, PostStatus, UserId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert PostId(uid) == uid
    assert CategoryId(uid) == uid
    assert CommentId(uid) == uid


def test_identity_is_immutable():
    identity = Identity(id=UserId(uuid4()), username="alice")
    with pytest.raises(FrozenInstanceError):
        identity.username = "mallory"


def test_post_status_follows_published_flag():
    assert PostStatus.of(True) is PostStatus.PUBLISHED
    assert PostStatus.of(False) is PostStatus.DRAFT
    assert PostStatus.DRAFT.value == "draft"
