"""Integration tests for CategoryService and TagService."""

import pytest

from board.domain.error import (
    CategoryInUse,
    CategoryNotFound,
    DuplicateCategoryName,
    DuplicateTagName,
    TagNotFound,
)
from board.domain.model import CategoryUpdate
from board.domain.service import CategoryService, PostService, TagService
from tests.harness import create_env_fixture
from tests.helpers import create_category, create_post, register_user

integration_env = create_env_fixture()


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_seeded_categories_are_listed(self, integration_env):
        """Should expose the baseline categories after seeding."""
        categories = await integration_env.get(CategoryService)

        names = {c.name for c in await categories.list_categories()}

        assert {"Announcements", "Free Board", "Q&A", "Events"} <= names

    @pytest.mark.asyncio
    async def test_duplicate_name(self, integration_env):
        await create_category(integration_env, "General")

        with pytest.raises(DuplicateCategoryName):
            await create_category(integration_env, "General")

    @pytest.mark.asyncio
    async def test_rename_onto_existing_name(self, integration_env):
        # Arrange
        categories = await integration_env.get(CategoryService)
        general = await create_category(integration_env, "General")
        await create_category(integration_env, "Other")

        # Act / Assert
        with pytest.raises(DuplicateCategoryName):
            await categories.update_category(general.id, CategoryUpdate(name="Other"))

    @pytest.mark.asyncio
    async def test_update_description_keeps_name(self, integration_env):
        categories = await integration_env.get(CategoryService)
        general = await create_category(integration_env, "General")

        updated = await categories.update_category(
            general.id, CategoryUpdate(name="General", description="Anything goes")
        )

        assert updated.name == "General"
        assert updated.description == "Anything goes"

    @pytest.mark.asyncio
    async def test_delete_category_in_use(self, integration_env):
        """Should refuse to delete a category that posts still belong to."""
        # Arrange
        categories = await integration_env.get(CategoryService)
        author = await register_user(integration_env)
        category = await create_category(integration_env)
        await create_post(integration_env, author, category)

        # Act / Assert
        with pytest.raises(CategoryInUse):
            await categories.delete_category(category.id)
        assert (await categories.get_by_id(category.id)).name == "General"

    @pytest.mark.asyncio
    async def test_delete_empty_category(self, integration_env):
        categories = await integration_env.get(CategoryService)
        category = await create_category(integration_env)

        await categories.delete_category(category.id)

        with pytest.raises(CategoryNotFound):
            await categories.get_by_name("General")


class TestTagService:
    @pytest.mark.asyncio
    async def test_find_or_create_reuses_existing(self, integration_env):
        # Arrange
        tags = await integration_env.get(TagService)
        seeded = await tags.get_by_name("notice")

        # Act
        found = await tags.find_or_create("notice")
        created = await tags.find_or_create("brand-new")

        # Assert
        assert found.id == seeded.id
        assert (await tags.get_by_name("brand-new")).id == created.id

    @pytest.mark.asyncio
    async def test_duplicate_tag(self, integration_env):
        tags = await integration_env.get(TagService)

        with pytest.raises(DuplicateTagName):
            await tags.create_tag("info")

    @pytest.mark.asyncio
    async def test_delete_tag_unlinks_posts(self, integration_env):
        # Arrange
        tags = await integration_env.get(TagService)
        posts = await integration_env.get(PostService)
        author = await register_user(integration_env)
        post = await create_post(integration_env, author, await create_category(integration_env))
        await posts.attach_tags(post.id, ["temporary"])
        tag = await tags.get_by_name("temporary")

        # Act
        await tags.delete_tag(tag.id)

        # Assert
        assert await posts.get_tags(post.id) == []
        with pytest.raises(TagNotFound):
            await tags.delete_tag(tag.id)

    @pytest.mark.asyncio
    async def test_list_is_alphabetical(self, integration_env):
        tags = await integration_env.get(TagService)

        names = [t.name for t in await tags.list_tags()]

        assert names == sorted(names)
