"""Schema manager.

Applies the versioned migrations under ``migrations/versions`` in order and
records each one in the ``schema_migrations`` ledger. Migrations are written
against Alembic's ``op`` API and are executed through an Alembic
``MigrationContext`` bound to the connection of the running batch, so every
change in a batch and its ledger rows commit or roll back together.

Usage:
    manager = SchemaManager(engine)
    await manager.apply()            # everything pending, as one batch
    await manager.rollback()         # revert the latest batch
    await manager.rollback(all_batches=True)
"""

import importlib.util
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional

import logfire
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import (
    Column,
    Connection,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    delete,
    func,
    insert,
    select,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

MIGRATIONS_DIR = Path(__file__).parent / "migrations" / "versions"

# e.g. 0004_create_posts_table.py
_MIGRATION_FILE = re.compile(r"^\d{4}_\w+\.py$")

ledger_metadata = MetaData()

schema_migrations_table = Table(
    "schema_migrations",
    ledger_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
    Column("batch", Integer, nullable=False),
    Column(
        "migration_time",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
)


class SchemaError(Exception):
    """Migration chain or ledger is inconsistent."""

    pass


@dataclass(frozen=True)
class Migration:
    """One schema change: a forward step and its exact inverse."""

    name: str
    revision: str
    down_revision: Optional[str]
    module: ModuleType = field(repr=False, compare=False)

    def upgrade(self, connection: Connection) -> None:
        with Operations.context(MigrationContext.configure(connection)):
            self.module.upgrade()

    def downgrade(self, connection: Connection) -> None:
        with Operations.context(MigrationContext.configure(connection)):
            self.module.downgrade()


@dataclass(frozen=True)
class AppliedMigration:
    name: str
    batch: int
    migration_time: datetime


@dataclass(frozen=True)
class SchemaStatus:
    """Snapshot of the ledger against the known migrations."""

    applied: List[AppliedMigration]
    pending: List[str]

    @property
    def current_batch(self) -> int:
        return max((m.batch for m in self.applied), default=0)

    @property
    def is_up_to_date(self) -> bool:
        return not self.pending


def _load_module(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        f"board.persistence.migrations.versions.{path.stem}", path
    )
    if spec is None or spec.loader is None:
        raise SchemaError(f"Cannot load migration {path.name}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def order_migrations(migrations: List[Migration]) -> List[Migration]:
    """Order migrations by following the ``down_revision`` chain.

    The chain must be linear: exactly one root, no two migrations revising
    the same parent, no parent that does not exist, and no orphans.

    Raises:
        SchemaError: If the chain is not a single straight line
    """
    by_revision: Dict[str, Migration] = {}
    for migration in migrations:
        if migration.revision in by_revision:
            raise SchemaError(f"Duplicate revision {migration.revision}")
        by_revision[migration.revision] = migration

    children: Dict[Optional[str], Migration] = {}
    for migration in migrations:
        parent = migration.down_revision
        if parent is not None and parent not in by_revision:
            raise SchemaError(
                f"{migration.name} revises unknown revision {parent}"
            )
        if parent in children:
            raise SchemaError(
                f"Revision {parent} has more than one child: "
                f"{children[parent].name}, {migration.name}"
            )
        children[parent] = migration

    if migrations and None not in children:
        raise SchemaError("No root migration (down_revision = None)")

    ordered: List[Migration] = []
    current = children.get(None)
    while current is not None:
        ordered.append(current)
        current = children.get(current.revision)

    if len(ordered) != len(migrations):
        raise SchemaError("Migration chain is not connected")
    return ordered


def load_migrations(directory: Path = MIGRATIONS_DIR) -> List[Migration]:
    """Load and order every migration module in ``directory``."""
    migrations = []
    for path in sorted(directory.glob("*.py")):
        if not _MIGRATION_FILE.match(path.name):
            continue
        module = _load_module(path)
        migrations.append(
            Migration(
                name=path.stem,
                revision=module.revision,
                down_revision=module.down_revision,
                module=module,
            )
        )
    return order_migrations(migrations)


class SchemaManager:
    """Versioned, append-only schema changes with a persistent ledger."""

    def __init__(self, engine: AsyncEngine, directory: Path = MIGRATIONS_DIR) -> None:
        """Initialize the schema manager.

        Args:
            engine: Database engine
            directory: Folder holding the migration modules
        """
        self.engine = engine
        self.migrations = load_migrations(directory)
        self._by_name = {m.name: m for m in self.migrations}

    async def apply(self, up_to: Optional[str] = None) -> List[str]:
        """Apply pending migrations as one batch.

        Args:
            up_to: Stop after this migration (name or revision), inclusive

        Returns:
            Names of the migrations applied, in order. Empty when nothing
            was pending.

        Raises:
            SchemaError: If the ledger disagrees with the migration chain or
                ``up_to`` is unknown
        """
        with logfire.span("schema_manager.apply", up_to=up_to):
            async with self.engine.begin() as conn:
                await conn.run_sync(ledger_metadata.create_all, checkfirst=True)
                applied = await self._applied(conn)
                pending = self._pending([row.name for row in applied])

                if up_to is not None:
                    target = self._resolve(up_to)
                    if target.name not in {m.name for m in pending}:
                        pending = []
                    else:
                        pending = pending[: pending.index(target) + 1]

                if not pending:
                    logfire.info("Schema is up to date")
                    return []

                batch = max((row.batch for row in applied), default=0) + 1
                for migration in pending:
                    logfire.info(
                        "Applying migration", name=migration.name, batch=batch
                    )
                    await conn.run_sync(migration.upgrade)
                    await conn.execute(
                        insert(schema_migrations_table).values(
                            name=migration.name,
                            batch=batch,
                            migration_time=datetime.now(timezone.utc),
                        )
                    )

            names = [m.name for m in pending]
            logfire.info("Migration batch applied", batch=batch, count=len(names))
            return names

    async def rollback(self, steps: int = 1, all_batches: bool = False) -> List[str]:
        """Revert the most recent batch(es), newest migration first.

        Args:
            steps: Number of batches to revert
            all_batches: Revert everything in the ledger

        Returns:
            Names of the migrations reverted, in the order they were undone
        """
        if steps < 1 and not all_batches:
            raise ValueError("steps must be at least 1")

        with logfire.span(
            "schema_manager.rollback", steps=steps, all_batches=all_batches
        ):
            async with self.engine.begin() as conn:
                await conn.run_sync(ledger_metadata.create_all, checkfirst=True)
                applied = await self._applied(conn)
                batches = sorted({row.batch for row in applied}, reverse=True)
                targets = set(batches if all_batches else batches[:steps])

                to_revert = [row for row in reversed(applied) if row.batch in targets]
                if not to_revert:
                    logfire.info("Nothing to roll back")
                    return []

                for row in to_revert:
                    migration = self._by_name.get(row.name)
                    if migration is None:
                        raise SchemaError(f"Ledger references unknown migration {row.name}")
                    logfire.info(
                        "Reverting migration", name=row.name, batch=row.batch
                    )
                    await conn.run_sync(migration.downgrade)
                    await conn.execute(
                        delete(schema_migrations_table).where(
                            schema_migrations_table.c.name == row.name
                        )
                    )

            names = [row.name for row in to_revert]
            logfire.info("Rolled back migrations", count=len(names))
            return names

    async def status(self) -> SchemaStatus:
        """List applied and pending migrations."""
        async with self.engine.begin() as conn:
            await conn.run_sync(ledger_metadata.create_all, checkfirst=True)
            applied = await self._applied(conn)
        pending = self._pending([row.name for row in applied])
        return SchemaStatus(applied=applied, pending=[m.name for m in pending])

    async def _applied(self, conn: AsyncConnection) -> List[AppliedMigration]:
        result = await conn.execute(
            select(
                schema_migrations_table.c.name,
                schema_migrations_table.c.batch,
                schema_migrations_table.c.migration_time,
            ).order_by(schema_migrations_table.c.id)
        )
        return [
            AppliedMigration(
                name=row.name, batch=row.batch, migration_time=row.migration_time
            )
            for row in result
        ]

    def _pending(self, applied_names: List[str]) -> List[Migration]:
        """Return the migrations after the applied prefix of the chain."""
        expected = [m.name for m in self.migrations[: len(applied_names)]]
        if applied_names != expected:
            raise SchemaError(
                f"Ledger {applied_names} does not match migration chain {expected}"
            )
        return self.migrations[len(applied_names) :]

    def _resolve(self, key: str) -> Migration:
        for migration in self.migrations:
            if key in (migration.name, migration.revision):
                return migration
        raise SchemaError(f"Unknown migration {key}")
