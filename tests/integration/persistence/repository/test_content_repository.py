"""Integration tests for the post, comment and category repositories."""

import pytest

from board.domain.error import ForeignKeyViolation, UniqueViolation
from board.domain.model import (
    CategoryCreate,
    CommentCreate,
    CommentFilter,
    PostCreate,
    PostFilter,
    PostUpdate,
    UserCreate,
)
from board.domain.repository import (
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from tests.harness import create_env_fixture

integration_env = create_env_fixture(seed=False)


async def arrange_post(env):
    users = await env.get(UserRepository)
    categories = await env.get(CategoryRepository)
    posts = await env.get(PostRepository)
    author = await users.create(
        UserCreate(email="a@x.com", password="$2b$04$hash", nickname="nick-a")
    )
    category = await categories.create(CategoryCreate(name="General"))
    post = await posts.create(
        PostCreate(title="Hello", content="Body", user_id=author.id, category_id=category.id)
    )
    return author, category, post


class TestPostRepository:
    @pytest.mark.asyncio
    async def test_unknown_category_is_a_foreign_key_violation(self, integration_env):
        # Arrange
        author, _, _ = await arrange_post(integration_env)
        posts = await integration_env.get(PostRepository)

        # Act / Assert
        with pytest.raises(ForeignKeyViolation):
            await posts.create(
                PostCreate(title="T", content="C", user_id=author.id, category_id=999)
            )

    @pytest.mark.asyncio
    async def test_list_newest_first_with_filter(self, integration_env):
        # Arrange
        author, category, first = await arrange_post(integration_env)
        posts = await integration_env.get(PostRepository)
        second = await posts.create(
            PostCreate(title="Second", content="C", user_id=author.id, category_id=category.id)
        )

        # Act
        listed = await posts.list(PostFilter(category_id=category.id))

        # Assert
        assert [p.id for p in listed] == [second.id, first.id]
        assert await posts.count(PostFilter(user_id=author.id)) == 2

    @pytest.mark.asyncio
    async def test_update_changes_title_only(self, integration_env):
        # Arrange
        _, _, post = await arrange_post(integration_env)
        posts = await integration_env.get(PostRepository)

        # Act
        updated = await posts.update(post.id, PostUpdate(title="Edited"))

        # Assert
        assert updated is not None
        assert updated.title == "Edited"
        assert updated.content == post.content

    @pytest.mark.asyncio
    async def test_likes_counter_never_goes_below_zero(self, integration_env):
        # Arrange
        _, _, post = await arrange_post(integration_env)
        posts = await integration_env.get(PostRepository)

        # Act
        await posts.increment_likes(post.id)
        await posts.decrement_likes(post.id)
        await posts.decrement_likes(post.id)

        # Assert
        reloaded = await posts.find_by_id(post.id)
        assert reloaded is not None
        assert reloaded.likes_count == 0

    @pytest.mark.asyncio
    async def test_counter_on_missing_post_reports_false(self, integration_env):
        posts = await integration_env.get(PostRepository)

        assert await posts.increment_likes(31337) is False

    @pytest.mark.asyncio
    async def test_deleting_author_cascades_posts_and_comments(self, integration_env):
        # Arrange
        author, _, post = await arrange_post(integration_env)
        users = await integration_env.get(UserRepository)
        posts = await integration_env.get(PostRepository)
        comments = await integration_env.get(CommentRepository)
        await comments.create(CommentCreate(content="c", post_id=post.id, user_id=author.id))

        # Act
        await users.delete(author.id)

        # Assert
        assert await posts.find_by_id(post.id) is None
        assert await comments.count() == 0


class TestCategoryRepository:
    @pytest.mark.asyncio
    async def test_duplicate_name_raises_unique_violation(self, integration_env):
        categories = await integration_env.get(CategoryRepository)
        await categories.create(CategoryCreate(name="General"))

        with pytest.raises(UniqueViolation):
            await categories.create(CategoryCreate(name="General"))

    @pytest.mark.asyncio
    async def test_referenced_category_cannot_be_deleted(self, integration_env):
        # Arrange
        _, category, _ = await arrange_post(integration_env)
        categories = await integration_env.get(CategoryRepository)

        # Act / Assert
        with pytest.raises(ForeignKeyViolation):
            await categories.delete(category.id)
        assert await categories.find_by_id(category.id) is not None


class TestCommentRepository:
    @pytest.mark.asyncio
    async def test_replies_cascade_with_parent(self, integration_env):
        # Arrange
        author, _, post = await arrange_post(integration_env)
        comments = await integration_env.get(CommentRepository)
        parent = await comments.create(
            CommentCreate(content="parent", post_id=post.id, user_id=author.id)
        )
        reply = await comments.create(
            CommentCreate(
                content="reply", post_id=post.id, user_id=author.id, parent_id=parent.id
            )
        )

        # Act
        await comments.delete(parent.id)

        # Assert
        assert reply.is_reply
        assert await comments.find_by_id(reply.id) is None

    @pytest.mark.asyncio
    async def test_list_oldest_first(self, integration_env):
        # Arrange
        author, _, post = await arrange_post(integration_env)
        comments = await integration_env.get(CommentRepository)
        first = await comments.create(
            CommentCreate(content="one", post_id=post.id, user_id=author.id)
        )
        second = await comments.create(
            CommentCreate(content="two", post_id=post.id, user_id=author.id)
        )

        # Act
        listed = await comments.list(CommentFilter(post_id=post.id))

        # Assert
        assert [c.id for c in listed] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_likes_counter_clamps_at_zero(self, integration_env):
        author, _, post = await arrange_post(integration_env)
        comments = await integration_env.get(CommentRepository)
        comment = await comments.create(
            CommentCreate(content="c", post_id=post.id, user_id=author.id)
        )

        await comments.decrement_likes(comment.id)

        reloaded = await comments.find_by_id(comment.id)
        assert reloaded is not None
        assert reloaded.likes_count == 0

    @pytest.mark.asyncio
    async def test_top_level_flag_separates_comments_from_replies(self, integration_env):
        # Arrange
        author, _, post = await arrange_post(integration_env)
        comments = await integration_env.get(CommentRepository)
        parent = await comments.create(
            CommentCreate(content="top", post_id=post.id, user_id=author.id)
        )
        reply = await comments.create(
            CommentCreate(
                content="reply", post_id=post.id, user_id=author.id, parent_id=parent.id
            )
        )

        # Act
        top_level = await comments.list(CommentFilter(post_id=post.id, top_level=True))
        replies = await comments.list(CommentFilter(post_id=post.id, top_level=False))

        # Assert
        assert [c.id for c in top_level] == [parent.id]
        assert [c.id for c in replies] == [reply.id]
        assert await comments.count(CommentFilter(top_level=True)) == 1
