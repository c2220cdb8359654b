"""Integration tests for the like, tag and post-tag repositories."""

import pytest

from board.domain.error import UniqueViolation
from board.domain.model import (
    CategoryCreate,
    LikeCreate,
    LikeFilter,
    PostCreate,
    PostTagFilter,
    TagCreate,
    UserCreate,
)
from board.domain.repository import (
    CategoryRepository,
    LikeRepository,
    PostRepository,
    PostTagRepository,
    TagRepository,
    UserRepository,
)
from board.domain.value import LikeTargetType
from tests.harness import create_env_fixture

integration_env = create_env_fixture(seed=False)


async def arrange(env):
    users = await env.get(UserRepository)
    categories = await env.get(CategoryRepository)
    posts = await env.get(PostRepository)
    user = await users.create(
        UserCreate(email="a@x.com", password="$2b$04$hash", nickname="nick-a")
    )
    category = await categories.create(CategoryCreate(name="General"))
    post = await posts.create(
        PostCreate(title="T", content="C", user_id=user.id, category_id=category.id)
    )
    return user, post


class TestLikeRepository:
    @pytest.mark.asyncio
    async def test_one_like_per_user_and_target(self, integration_env):
        # Arrange
        user, post = await arrange(integration_env)
        likes = await integration_env.get(LikeRepository)
        data = LikeCreate(user_id=user.id, target_type=LikeTargetType.POST, target_id=post.id)
        await likes.create(data)

        # Act / Assert
        with pytest.raises(UniqueViolation):
            await likes.create(data)
        assert await likes.count() == 1

    @pytest.mark.asyncio
    async def test_same_id_on_different_target_types_are_distinct(self, integration_env):
        user, post = await arrange(integration_env)
        likes = await integration_env.get(LikeRepository)

        await likes.create(
            LikeCreate(user_id=user.id, target_type=LikeTargetType.POST, target_id=post.id)
        )
        await likes.create(
            LikeCreate(user_id=user.id, target_type=LikeTargetType.COMMENT, target_id=post.id)
        )

        assert await likes.count(LikeFilter(user_id=user.id)) == 2

    @pytest.mark.asyncio
    async def test_find_and_delete_by_user_and_target(self, integration_env):
        # Arrange
        user, post = await arrange(integration_env)
        likes = await integration_env.get(LikeRepository)
        like = await likes.create(
            LikeCreate(user_id=user.id, target_type=LikeTargetType.POST, target_id=post.id)
        )

        # Act
        found = await likes.find_by_user_and_target(user.id, LikeTargetType.POST, post.id)
        removed = await likes.delete_by_user_and_target(
            user.id, LikeTargetType.POST, post.id
        )
        removed_again = await likes.delete_by_user_and_target(
            user.id, LikeTargetType.POST, post.id
        )

        # Assert
        assert found == like
        assert removed is True
        assert removed_again is False

    @pytest.mark.asyncio
    async def test_delete_by_targets_only_touches_listed_targets(self, integration_env):
        # Arrange
        user, post = await arrange(integration_env)
        likes = await integration_env.get(LikeRepository)
        for target_id in (1, 2, 3):
            await likes.create(
                LikeCreate(
                    user_id=user.id, target_type=LikeTargetType.COMMENT, target_id=target_id
                )
            )
        await likes.create(
            LikeCreate(user_id=user.id, target_type=LikeTargetType.POST, target_id=1)
        )

        # Act
        removed = await likes.delete_by_targets(LikeTargetType.COMMENT, [1, 3])

        # Assert
        assert removed == 2
        remaining = await likes.list()
        assert {(l.target_type, l.target_id) for l in remaining} == {
            (LikeTargetType.COMMENT, 2),
            (LikeTargetType.POST, 1),
        }
        assert await likes.delete_by_targets(LikeTargetType.POST, []) == 0


class TestTagRepositories:
    @pytest.mark.asyncio
    async def test_duplicate_tag_name(self, integration_env):
        tags = await integration_env.get(TagRepository)
        await tags.create(TagCreate(name="python"))

        with pytest.raises(UniqueViolation):
            await tags.create(TagCreate(name="python"))

    @pytest.mark.asyncio
    async def test_link_is_unique_per_post_and_tag(self, integration_env):
        # Arrange
        _, post = await arrange(integration_env)
        tags = await integration_env.get(TagRepository)
        links = await integration_env.get(PostTagRepository)
        tag = await tags.create(TagCreate(name="python"))
        link = await links.create(post.id, tag.id)

        # Act / Assert
        assert link.post_id == post.id
        assert await links.exists(post.id, tag.id)
        with pytest.raises(UniqueViolation):
            await links.create(post.id, tag.id)

    @pytest.mark.asyncio
    async def test_tags_for_post_sorted_by_name(self, integration_env):
        # Arrange
        _, post = await arrange(integration_env)
        tags = await integration_env.get(TagRepository)
        links = await integration_env.get(PostTagRepository)
        for name in ("zeta", "alpha"):
            tag = await tags.create(TagCreate(name=name))
            await links.create(post.id, tag.id)

        # Act
        names = [t.name for t in await links.find_tags_for_post(post.id)]

        # Assert
        assert names == ["alpha", "zeta"]

    @pytest.mark.asyncio
    async def test_deleting_tag_removes_its_links(self, integration_env):
        # Arrange
        _, post = await arrange(integration_env)
        tags = await integration_env.get(TagRepository)
        links = await integration_env.get(PostTagRepository)
        tag = await tags.create(TagCreate(name="python"))
        await links.create(post.id, tag.id)

        # Act
        await tags.delete(tag.id)

        # Assert
        assert await links.count(PostTagFilter(post_id=post.id)) == 0
