"""Integration tests for UserService."""

import pytest

from board.domain.error import (
    EmailTaken,
    InvalidCredentials,
    InvalidStatusTransition,
    NicknameTaken,
    UserInactive,
    UserNotFound,
)
from board.domain.model import ProfileUpdate, UserFilter
from board.domain.repository import CommentRepository, LikeRepository, PostRepository
from board.domain.service import CommentService, LikeService, UserService
from board.domain.value import LikeTargetType, UserStatus
from tests.harness import create_env_fixture
from tests.helpers import DEFAULT_PASSWORD, create_category, create_post, register_user

integration_env = create_env_fixture()


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_hashes_password(self, integration_env):
        # Act
        user = await register_user(integration_env)

        # Assert
        assert user.status == UserStatus.ACTIVE
        assert not user.is_admin
        assert user.password != DEFAULT_PASSWORD
        assert user.password.startswith("$2")

    @pytest.mark.asyncio
    async def test_taken_email_is_reported_before_nickname(self, integration_env):
        # Arrange
        await register_user(integration_env, "a@x.com", "nick-a")

        # Act / Assert
        with pytest.raises(EmailTaken):
            await register_user(integration_env, "a@x.com", "nick-a")

    @pytest.mark.asyncio
    async def test_taken_nickname(self, integration_env):
        await register_user(integration_env, "a@x.com", "nick-a")

        with pytest.raises(NicknameTaken):
            await register_user(integration_env, "b@x.com", "nick-a")


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_correct_credentials(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        registered = await register_user(integration_env)

        # Act
        user = await users.authenticate("a@x.com", DEFAULT_PASSWORD)

        # Assert
        assert user.id == registered.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [("a@x.com", "wrong-password"), ("nobody@x.com", DEFAULT_PASSWORD)],
    )
    async def test_bad_credentials(self, integration_env, email, password):
        users = await integration_env.get(UserService)
        await register_user(integration_env)

        with pytest.raises(InvalidCredentials):
            await users.authenticate(email, password)

    @pytest.mark.asyncio
    async def test_suspended_user_cannot_log_in(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)
        await users.change_status(user.id, UserStatus.SUSPENDED)

        # Act / Assert
        with pytest.raises(UserInactive):
            await users.authenticate("a@x.com", DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_seeded_admin_can_log_in(self, integration_env):
        users = await integration_env.get(UserService)

        admin = await users.authenticate("admin@community.local", "admin123!")

        assert admin.is_admin


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_profile_url_can_be_cleared(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)
        await users.update_profile(user.id, ProfileUpdate(profile_url="https://x/p.png"))

        # Act
        cleared = await users.update_profile(user.id, ProfileUpdate(profile_url=None))

        # Assert
        assert cleared.profile_url is None
        assert cleared.email == user.email

    @pytest.mark.asyncio
    async def test_same_values_skip_uniqueness_check(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)

        # Act
        updated = await users.update_profile(
            user.id, ProfileUpdate(email="a@x.com", nickname="nick-a")
        )

        # Assert
        assert updated.email == "a@x.com"
        assert updated.nickname == "nick-a"

    @pytest.mark.asyncio
    async def test_nickname_of_another_user_is_rejected(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env, "a@x.com", "nick-a")
        await register_user(integration_env, "b@x.com", "nick-b")

        # Act / Assert
        with pytest.raises(NicknameTaken):
            await users.update_profile(user.id, ProfileUpdate(nickname="nick-b"))

    @pytest.mark.asyncio
    async def test_new_password_is_hashed_and_usable(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)

        # Act
        updated = await users.update_profile(
            user.id, ProfileUpdate(password="brand-new-pass", profile_url="https://x/p.png")
        )

        # Assert
        assert updated.profile_url == "https://x/p.png"
        assert updated.password != "brand-new-pass"
        assert (await users.authenticate("a@x.com", "brand-new-pass")).id == user.id
        with pytest.raises(InvalidCredentials):
            await users.authenticate("a@x.com", DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_change_password(self, integration_env):
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)

        await users.change_password(user.id, "rotated-pass")

        assert (await users.authenticate("a@x.com", "rotated-pass")).id == user.id

    @pytest.mark.asyncio
    async def test_unknown_user(self, integration_env):
        users = await integration_env.get(UserService)

        with pytest.raises(UserNotFound):
            await users.update_profile(9999, ProfileUpdate(nickname="x"))


class TestStatus:
    @pytest.mark.asyncio
    async def test_suspend_and_reinstate(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)

        # Act
        suspended = await users.change_status(user.id, UserStatus.SUSPENDED)
        active = await users.change_status(user.id, UserStatus.ACTIVE)

        # Assert
        assert suspended.is_suspended
        assert active.is_active

    @pytest.mark.asyncio
    async def test_deleted_is_terminal(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)
        await users.soft_delete(user.id)

        # Act / Assert
        with pytest.raises(InvalidStatusTransition):
            await users.change_status(user.id, UserStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_soft_delete_is_idempotent(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)

        # Act
        first = await users.soft_delete(user.id)
        second = await users.soft_delete(user.id)

        # Assert
        assert first.is_deleted
        assert second.updated_at == first.updated_at
        assert await users.count_users(UserFilter(status=UserStatus.DELETED)) == 1

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_write(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        user = await register_user(integration_env)
        await users.change_status(user.id, UserStatus.SUSPENDED)

        # Act / Assert
        with pytest.raises(UserInactive):
            await users.update_profile(user.id, ProfileUpdate(nickname="new"))


class TestPurge:
    @pytest.mark.asyncio
    async def test_purge_removes_content_and_restores_counters(self, integration_env):
        # Arrange
        users = await integration_env.get(UserService)
        likes = await integration_env.get(LikeService)
        comments = await integration_env.get(CommentService)
        posts = await integration_env.get(PostRepository)
        like_repo = await integration_env.get(LikeRepository)
        comment_repo = await integration_env.get(CommentRepository)

        doomed = await register_user(integration_env, "d@x.com", "doomed")
        other = await register_user(integration_env, "o@x.com", "other")
        category = await create_category(integration_env)
        doomed_post = await create_post(integration_env, doomed, category)
        other_post = await create_post(integration_env, other, category, title="Stays")

        # other's comment on the doomed post disappears with the post
        other_comment = await comments.create(doomed_post.id, other.id, "bye")
        await likes.like(other.id, LikeTargetType.POST, doomed_post.id)
        await likes.like(other.id, LikeTargetType.COMMENT, other_comment.id)
        # doomed's like on surviving content is given back
        await likes.like(doomed.id, LikeTargetType.POST, other_post.id)

        # Act
        await users.purge(doomed.id)

        # Assert
        with pytest.raises(UserNotFound):
            await users.get_by_id(doomed.id)
        assert await posts.find_by_id(doomed_post.id) is None
        assert await comment_repo.find_by_id(other_comment.id) is None
        assert await like_repo.count() == 0
        survivor = await posts.find_by_id(other_post.id)
        assert survivor is not None
        assert survivor.likes_count == 0
