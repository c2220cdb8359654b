#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py                 # apply everything pending
    python scripts/run_migrations.py --up-to 0004
    python scripts/run_migrations.py rollback --steps 2
    python scripts/run_migrations.py rollback --all
    python scripts/run_migrations.py status
"""

import argparse
import asyncio
import sys

import logfire

from board.config import Settings
from board.persistence.schema import SchemaManager
from board.util.di.container import create_container
from board.util.logging import get_logger, setup_logging
from board.util.observability import configure_logfire

logger = get_logger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the database schema")
    parser.add_argument(
        "command", nargs="?", default="apply", choices=["apply", "rollback", "status"]
    )
    parser.add_argument("--up-to", help="Last migration to apply (name or revision)")
    parser.add_argument("--steps", type=int, default=1, help="Batches to roll back")
    parser.add_argument("--all", action="store_true", help="Roll back every batch")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> None:
    container = create_container(settings)
    try:
        manager = await container.get(SchemaManager)
        if args.command == "apply":
            applied = await manager.apply(up_to=args.up_to)
            logger.info("Applied %d migration(s): %s", len(applied), ", ".join(applied))
        elif args.command == "rollback":
            reverted = await manager.rollback(steps=args.steps, all_batches=args.all)
            logger.info("Rolled back %d migration(s): %s", len(reverted), ", ".join(reverted))
        else:
            status = await manager.status()
            for migration in status.applied:
                logger.info("[x] %s (batch %d)", migration.name, migration.batch)
            for name in status.pending:
                logger.info("[ ] %s", name)
    finally:
        await container.close()


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    args = parse_args(sys.argv[1:])
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting schema command", command=args.command)
        asyncio.run(run(args, settings))
        logfire.info("Schema command completed", command=args.command)
        return 0

    except Exception as e:
        logfire.error(
            "Schema command failed",
            command=args.command,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
