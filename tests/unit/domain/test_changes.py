"""Unit tests for partial-update and filter models."""

import pytest
from pydantic import ValidationError

from board.domain.model import (
    CategoryUpdate,
    CommentFilter,
    PostUpdate,
    ProfileUpdate,
    UserUpdate,
)


class TestChanges:
    @pytest.mark.parametrize(
        "model,field",
        [
            (ProfileUpdate, "email"),
            (ProfileUpdate, "nickname"),
            (ProfileUpdate, "password"),
            (UserUpdate, "role"),
            (UserUpdate, "status"),
            (PostUpdate, "title"),
            (PostUpdate, "content"),
            (PostUpdate, "category_id"),
            (CategoryUpdate, "name"),
        ],
    )
    def test_required_column_cannot_be_cleared(self, model, field):
        with pytest.raises(ValidationError, match=f"{field} cannot be cleared"):
            model(**{field: None})

    def test_nullable_columns_can_be_cleared(self):
        assert ProfileUpdate(profile_url=None).supplied() == {"profile_url": None}
        assert UserUpdate(profile_url=None).supplied() == {"profile_url": None}
        assert CategoryUpdate(description=None).supplied() == {"description": None}

    def test_unset_fields_are_not_supplied(self):
        assert PostUpdate(title="New").supplied() == {"title": "New"}


class TestFilter:
    def test_flags_are_not_column_predicates(self):
        filter = CommentFilter(post_id=3, top_level=True)

        assert filter.predicates() == {"post_id": 3}
