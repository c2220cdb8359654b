"""Baseline data for a fresh database.

The seed loader upserts by natural key (category name, tag name, admin
email), so running it any number of times leaves the same rows behind.
"""

from dataclasses import dataclass
from typing import List, Tuple

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.config import SeedSettings
from board.domain.error import NicknameTaken
from board.domain.model import CategoryCreate, CategoryUpdate, TagCreate, UserCreate, UserUpdate
from board.domain.repository import CategoryRepository, TagRepository, UserRepository
from board.domain.value import UserRole, UserStatus
from board.util.password import PasswordHasher

# (name, description)
SEED_CATEGORIES: List[Tuple[str, str]] = [
    ("Announcements", "Important notices from the administrators."),
    ("Free Board", "Posts on any topic."),
    ("Q&A", "Questions and answers."),
    ("Events", "Posts about community events."),
]

SEED_TAGS: List[str] = ["notice", "info", "question", "event"]


@dataclass
class SeedReport:
    """What a seed run inserted. Zeroes mean the baseline was already there."""

    categories_created: int = 0
    tags_created: int = 0
    admin_created: bool = False


class SeedLoader:
    """Deterministic, idempotent baseline data population."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user_repository: UserRepository,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
        password_hasher: PasswordHasher,
        settings: SeedSettings,
    ) -> None:
        self.session_factory = session_factory
        self.user_repository = user_repository
        self.category_repository = category_repository
        self.tag_repository = tag_repository
        self.password_hasher = password_hasher
        self.settings = settings

    async def run(self) -> SeedReport:
        """Upsert the baseline categories, tags and admin account.

        Everything is written in one transaction.

        Returns:
            Counts of newly inserted rows

        Raises:
            NicknameTaken: If the admin account is missing and another
                account holds the admin nickname. Nothing is written.
        """
        report = SeedReport()
        with logfire.span("seed_loader.run"):
            async with self.session_factory.begin() as session:
                report.categories_created = await self._seed_categories(session)
                report.tags_created = await self._seed_tags(session)
                report.admin_created = await self._seed_admin(session)

            logfire.info(
                "Seed data loaded",
                categories_created=report.categories_created,
                tags_created=report.tags_created,
                admin_created=report.admin_created,
            )
            return report

    async def _seed_categories(self, session: AsyncSession) -> int:
        created = 0
        for name, description in SEED_CATEGORIES:
            existing = await self.category_repository.find_by_name(name, session)
            if existing is None:
                await self.category_repository.create(
                    CategoryCreate(name=name, description=description), session
                )
                created += 1
            elif existing.description != description:
                await self.category_repository.update(
                    existing.id, CategoryUpdate(description=description), session
                )
        return created

    async def _seed_tags(self, session: AsyncSession) -> int:
        created = 0
        for name in SEED_TAGS:
            if not await self.tag_repository.exists_by_name(name, session=session):
                await self.tag_repository.create(TagCreate(name=name), session)
                created += 1
        return created

    async def _seed_admin(self, session: AsyncSession) -> bool:
        admin = await self.user_repository.find_by_email(
            self.settings.admin_email, session
        )
        if admin is None:
            # Never promote someone else's account to admin
            if await self.user_repository.exists_by_nickname(
                self.settings.admin_nickname, session=session
            ):
                logfire.error(
                    "Admin nickname held by another account",
                    nickname=self.settings.admin_nickname,
                )
                raise NicknameTaken(self.settings.admin_nickname)
            await self.user_repository.create(
                UserCreate(
                    email=self.settings.admin_email,
                    password=self.password_hasher.hash(self.settings.admin_password),
                    nickname=self.settings.admin_nickname,
                    role=UserRole.ADMIN,
                    status=UserStatus.ACTIVE,
                ),
                session,
            )
            return True

        # Keep the existing hash; only restore the admin's role and status
        if not (admin.is_admin and admin.is_active):
            await self.user_repository.update(
                admin.id,
                UserUpdate(role=UserRole.ADMIN, status=UserStatus.ACTIVE),
                session,
            )
        return False
