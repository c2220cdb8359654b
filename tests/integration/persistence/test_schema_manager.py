"""Integration tests for SchemaManager."""

import shutil

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine

from board.persistence.schema import (
    MIGRATIONS_DIR,
    SchemaError,
    SchemaManager,
    schema_migrations_table,
)
from tests.harness import create_env_fixture

bare_env = create_env_fixture(migrate=False)

ENTITY_TABLES = {
    "users",
    "categories",
    "tags",
    "posts",
    "post_tags",
    "comments",
    "likes",
}


async def table_names(engine: AsyncEngine) -> set[str]:
    async with engine.connect() as conn:
        return set(
            await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        )


async def ledger_rows(engine: AsyncEngine) -> list[tuple[str, int]]:
    async with engine.connect() as conn:
        result = await conn.execute(
            select(
                schema_migrations_table.c.name, schema_migrations_table.c.batch
            ).order_by(schema_migrations_table.c.id)
        )
        return [(row.name, row.batch) for row in result]


class TestApply:
    """Tests for SchemaManager.apply."""

    @pytest.mark.asyncio
    async def test_apply_creates_every_entity_table(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)

        # Act
        applied = await manager.apply()

        # Assert
        assert applied == [m.name for m in manager.migrations]
        assert ENTITY_TABLES <= await table_names(engine)

    @pytest.mark.asyncio
    async def test_apply_records_one_batch_in_order(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)

        # Act
        await manager.apply()

        # Assert
        rows = await ledger_rows(engine)
        assert [name for name, _ in rows] == [m.name for m in manager.migrations]
        assert {batch for _, batch in rows} == {1}

    @pytest.mark.asyncio
    async def test_apply_is_noop_when_nothing_pending(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)
        await manager.apply()

        # Act
        second = await manager.apply()

        # Assert
        assert second == []
        assert len(await ledger_rows(engine)) == len(manager.migrations)

    @pytest.mark.asyncio
    async def test_apply_up_to_stops_at_target_and_next_apply_is_new_batch(
        self, bare_env
    ):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)

        # Act
        first = await manager.apply(up_to="0003")
        second = await manager.apply()

        # Assert
        assert first == [
            "0001_create_users_table",
            "0002_create_categories_table",
            "0003_create_tags_table",
        ]
        assert second[0] == "0004_create_posts_table"
        batches = dict(await ledger_rows(engine))
        assert batches["0003_create_tags_table"] == 1
        assert batches["0007_create_likes_table"] == 2

    @pytest.mark.asyncio
    async def test_apply_up_to_unknown_migration_raises(self, bare_env):
        manager = await bare_env.get(SchemaManager)

        with pytest.raises(SchemaError):
            await manager.apply(up_to="9999")

    @pytest.mark.asyncio
    async def test_failing_migration_rolls_back_whole_batch(self, bare_env, tmp_path):
        # Arrange - the real chain plus a migration that blows up
        versions = tmp_path / "versions"
        versions.mkdir()
        for path in MIGRATIONS_DIR.glob("0*.py"):
            shutil.copy(path, versions / path.name)
        (versions / "0008_broken.py").write_text(
            'revision = "0008"\n'
            'down_revision = "0007"\n'
            "\n"
            "def upgrade():\n"
            '    raise RuntimeError("boom")\n'
            "\n"
            "def downgrade():\n"
            "    pass\n"
        )
        engine = await bare_env.get(AsyncEngine)
        manager = SchemaManager(engine, versions)

        # Act
        with pytest.raises(RuntimeError, match="boom"):
            await manager.apply()

        # Assert - nothing structural and nothing in the ledger
        assert not (ENTITY_TABLES & await table_names(engine))
        status = await SchemaManager(engine).status()
        assert status.applied == []


class TestRollback:
    """Tests for SchemaManager.rollback."""

    @pytest.mark.asyncio
    async def test_rollback_reverts_only_latest_batch(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)
        await manager.apply(up_to="0003")
        await manager.apply()

        # Act
        reverted = await manager.rollback()

        # Assert - newest first
        assert reverted == [
            "0007_create_likes_table",
            "0006_create_comments_table",
            "0005_create_post_tags_table",
            "0004_create_posts_table",
        ]
        tables = await table_names(engine)
        assert {"users", "categories", "tags"} <= tables
        assert not ({"posts", "post_tags", "comments", "likes"} & tables)

    @pytest.mark.asyncio
    async def test_full_rollback_leaves_no_entity_tables(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)
        await manager.apply(up_to="0002")
        await manager.apply()

        # Act
        await manager.rollback(all_batches=True)

        # Assert
        assert await table_names(engine) == {"schema_migrations"}
        assert await ledger_rows(engine) == []

    @pytest.mark.asyncio
    async def test_rollback_with_empty_ledger_is_noop(self, bare_env):
        manager = await bare_env.get(SchemaManager)

        assert await manager.rollback() == []

    @pytest.mark.asyncio
    async def test_replay_after_full_rollback_is_deterministic(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        engine = await bare_env.get(AsyncEngine)
        first = await manager.apply()
        tables_first = await table_names(engine)

        # Act
        await manager.rollback(all_batches=True)
        second = await manager.apply()

        # Assert
        assert second == first
        assert await table_names(engine) == tables_first
        assert {batch for _, batch in await ledger_rows(engine)} == {1}

    @pytest.mark.asyncio
    async def test_rollback_rejects_non_positive_steps(self, bare_env):
        manager = await bare_env.get(SchemaManager)

        with pytest.raises(ValueError):
            await manager.rollback(steps=0)


class TestStatus:
    @pytest.mark.asyncio
    async def test_status_lists_applied_and_pending(self, bare_env):
        # Arrange
        manager = await bare_env.get(SchemaManager)
        await manager.apply(up_to="0004")

        # Act
        status = await manager.status()

        # Assert
        assert [m.name for m in status.applied][-1] == "0004_create_posts_table"
        assert status.pending == [
            "0005_create_post_tags_table",
            "0006_create_comments_table",
            "0007_create_likes_table",
        ]
        assert status.current_batch == 1
        assert not status.is_up_to_date
