"""User domain service."""

from typing import List, Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.domain.error import (
    ConstraintViolation,
    EmailTaken,
    InvalidCredentials,
    InvalidStatusTransition,
    NicknameTaken,
    UniqueViolation,
    UserInactive,
    UserNotFound,
)
from board.domain.model import (
    CommentFilter,
    LikeFilter,
    PostFilter,
    ProfileUpdate,
    User,
    UserCreate,
    UserFilter,
    UserUpdate,
)
from board.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)
from board.domain.value import LikeTargetType, UserId, UserStatus
from board.persistence.database import transaction
from board.util.password import PasswordHasher

from .base import Service, ensure_can_write


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user_repository: UserRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        """Initialize user service.

        Args:
            session_factory: Factory for units of work
            user_repository: User repository
            post_repository: Post repository
            comment_repository: Comment repository
            like_repository: Like repository
            password_hasher: bcrypt password hasher
        """
        self.session_factory = session_factory
        self.user_repository = user_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.password_hasher = password_hasher

    async def register(
        self,
        email: str,
        password: str,
        nickname: str,
        profile_url: Optional[str] = None,
    ) -> User:
        """Register a new user.

        Email and nickname are checked separately, email first, so the
        caller learns exactly which one is taken.

        Args:
            email: Login email
            password: Plain-text password, hashed before it is stored
            nickname: Public display name
            profile_url: Optional avatar/profile link

        Returns:
            The new user

        Raises:
            EmailTaken: If the email is registered
            NicknameTaken: If the nickname is in use
        """
        with logfire.span("user_service.register", email=email, nickname=nickname):
            async with transaction(self.session_factory) as session:
                if await self.user_repository.exists_by_email(email, session=session):
                    logfire.warn("Registration with taken email", email=email)
                    raise EmailTaken(email)
                if await self.user_repository.exists_by_nickname(
                    nickname, session=session
                ):
                    logfire.warn("Registration with taken nickname", nickname=nickname)
                    raise NicknameTaken(nickname)

                data = UserCreate(
                    email=email,
                    password=self.password_hasher.hash(password),
                    nickname=nickname,
                    profile_url=profile_url,
                )
                try:
                    user = await self.user_repository.create(data, session)
                except UniqueViolation as e:
                    # Lost a race with a concurrent registration
                    taken = self._taken(e, email, nickname)
                    if taken is None:
                        raise
                    raise taken from e

            logfire.info("User registered", user_id=user.id, email=email)
            return user

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            UserNotFound: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=user_id):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=user_id)
                raise UserNotFound(user_id)
            return user

    async def get_by_email(self, email: str) -> User:
        with logfire.span("user_service.get_by_email", email=email):
            user = await self.user_repository.find_by_email(email)
            if not user:
                logfire.warn("User not found", email=email)
                raise UserNotFound(email)
            return user

    async def list_users(
        self,
        filter: Optional[UserFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[User]:
        with logfire.span("user_service.list_users", limit=limit, offset=offset):
            return await self.user_repository.list(filter, limit, offset)

    async def count_users(self, filter: Optional[UserFilter] = None) -> int:
        return await self.user_repository.count(filter)

    async def update_profile(self, user_id: UserId, changes: ProfileUpdate) -> User:
        """Update a user's own profile.

        Setting email or nickname to the current value is not a change and
        skips the uniqueness check. A new password is hashed.

        Args:
            user_id: User ID
            changes: Fields to change

        Returns:
            Updated user

        Raises:
            UserNotFound: If user not found
            UserInactive: If the user is suspended or deleted
            EmailTaken: If another user has the new email
            NicknameTaken: If another user has the new nickname
        """
        with logfire.span("user_service.update_profile", user_id=user_id):
            async with transaction(self.session_factory) as session:
                user = await self._load(user_id, session)
                ensure_can_write(user)

                values = changes.supplied()
                if values.get("email") == user.email:
                    del values["email"]
                if values.get("nickname") == user.nickname:
                    del values["nickname"]

                if "email" in values and await self.user_repository.exists_by_email(
                    values["email"], exclude_id=user_id, session=session
                ):
                    raise EmailTaken(values["email"])
                if "nickname" in values and await self.user_repository.exists_by_nickname(
                    values["nickname"], exclude_id=user_id, session=session
                ):
                    raise NicknameTaken(values["nickname"])

                if "password" in values:
                    values["password"] = self.password_hasher.hash(values["password"])

                if not values:
                    return user

                try:
                    updated = await self.user_repository.update(
                        user_id, UserUpdate(**values), session
                    )
                except UniqueViolation as e:
                    taken = self._taken(
                        e, values.get("email", ""), values.get("nickname", "")
                    )
                    if taken is None:
                        raise
                    raise taken from e

            logfire.info(
                "Profile updated", user_id=user_id, fields=sorted(values.keys())
            )
            return updated or user

    async def change_password(self, user_id: UserId, new_password: str) -> User:
        """Re-hash and store a new password."""
        with logfire.span("user_service.change_password", user_id=user_id):
            async with transaction(self.session_factory) as session:
                user = await self._load(user_id, session)
                ensure_can_write(user)
                updated = await self.user_repository.update(
                    user_id,
                    UserUpdate(password=self.password_hasher.hash(new_password)),
                    session,
                )
            logfire.info("Password changed", user_id=user_id)
            return updated or user

    async def authenticate(self, email: str, password: str) -> User:
        """Verify an email/password pair.

        Raises:
            InvalidCredentials: If no user has this email or the password
                does not match
            UserInactive: If the credentials are right but the account is
                suspended or deleted
        """
        with logfire.span("user_service.authenticate", email=email):
            user = await self.user_repository.find_by_email(email)
            if user is None or not self.password_hasher.verify(password, user.password):
                logfire.warn("Authentication failed", email=email)
                raise InvalidCredentials()
            if not user.is_active:
                logfire.warn(
                    "Login to inactive account", user_id=user.id, status=user.status.value
                )
                raise UserInactive(user.id, user.status.value)
            logfire.info("User authenticated", user_id=user.id)
            return user

    async def change_status(self, user_id: UserId, status: UserStatus) -> User:
        """Move a user through the status machine.

        active <-> suspended, active/suspended -> deleted. Deleted is terminal.

        Raises:
            UserNotFound: If user not found
            InvalidStatusTransition: If the move is not allowed
        """
        with logfire.span(
            "user_service.change_status", user_id=user_id, status=status.value
        ):
            async with transaction(self.session_factory) as session:
                user = await self._load(user_id, session)
                if not user.status.can_transition_to(status):
                    logfire.warn(
                        "Rejected status transition",
                        user_id=user_id,
                        current=user.status.value,
                        target=status.value,
                    )
                    raise InvalidStatusTransition(user.status.value, status.value)
                updated = await self.user_repository.update(
                    user_id, UserUpdate(status=status), session
                )
            logfire.info(
                "User status changed",
                user_id=user_id,
                previous=user.status.value,
                status=status.value,
            )
            return updated or user

    async def soft_delete(self, user_id: UserId) -> User:
        """Mark a user as deleted. Deleting a deleted user changes nothing."""
        with logfire.span("user_service.soft_delete", user_id=user_id):
            async with transaction(self.session_factory) as session:
                user = await self._load(user_id, session)
                if user.is_deleted:
                    return user
                deleted = await self.user_repository.soft_delete(user_id, session)
            logfire.info("User soft-deleted", user_id=user_id)
            return deleted or user

    async def purge(self, user_id: UserId) -> None:
        """Hard-delete a user and everything they own.

        The schema cascades the user's posts, comments and likes. Likes have
        no foreign key to their target, so this also removes likes pointing
        at content that is about to disappear, and gives back the counts the
        user's own likes added to surviving content.

        Raises:
            UserNotFound: If user not found
        """
        with logfire.span("user_service.purge", user_id=user_id):
            async with transaction(self.session_factory) as session:
                await self._load(user_id, session)

                # Undo the user's likes on content that survives
                for like in await self.like_repository.list(
                    LikeFilter(user_id=user_id), session=session
                ):
                    if like.target_type == LikeTargetType.POST:
                        await self.post_repository.decrement_likes(
                            like.target_id, session
                        )
                    else:
                        await self.comment_repository.decrement_likes(
                            like.target_id, session
                        )

                # Content that cascades away with the user
                post_ids = [
                    post.id
                    for post in await self.post_repository.list(
                        PostFilter(user_id=user_id), session=session
                    )
                ]
                comment_ids = set()
                for comment in await self.comment_repository.list(
                    CommentFilter(user_id=user_id), session=session
                ):
                    comment_ids.add(comment.id)
                    for reply in await self.comment_repository.list(
                        CommentFilter(parent_id=comment.id), session=session
                    ):
                        comment_ids.add(reply.id)
                for post_id in post_ids:
                    for comment in await self.comment_repository.list(
                        CommentFilter(post_id=post_id), session=session
                    ):
                        comment_ids.add(comment.id)

                removed = await self.like_repository.delete_by_targets(
                    LikeTargetType.POST, post_ids, session
                )
                removed += await self.like_repository.delete_by_targets(
                    LikeTargetType.COMMENT, sorted(comment_ids), session
                )
                await self.user_repository.delete(user_id, session)

            logfire.info(
                "User purged",
                user_id=user_id,
                posts=len(post_ids),
                comments=len(comment_ids),
                likes_removed=removed,
            )

    async def _load(self, user_id: UserId, session: AsyncSession) -> User:
        user = await self.user_repository.find_by_id(user_id, session)
        if user is None:
            logfire.warn("User not found", user_id=user_id)
            raise UserNotFound(user_id)
        return user

    @staticmethod
    def _taken(
        error: UniqueViolation, email: str, nickname: str
    ) -> Optional[ConstraintViolation]:
        if error.mentions("email"):
            return EmailTaken(email)
        if error.mentions("nickname"):
            return NicknameTaken(nickname)
        return None
