#!/usr/bin/env python3
"""Load baseline data (categories, tags, admin account).

Safe to run repeatedly: rows are upserted by natural key.
"""

import asyncio
import sys

import logfire

from board.config import Settings
from board.persistence.seed import SeedLoader
from board.util.di.container import create_container
from board.util.logging import get_logger, setup_logging
from board.util.observability import configure_logfire

logger = get_logger(__name__)


async def run(settings: Settings) -> None:
    container = create_container(settings)
    try:
        loader = await container.get(SeedLoader)
        report = await loader.run()
        logger.info(
            "Seeded %d categories, %d tags, admin created: %s",
            report.categories_created,
            report.tags_created,
            report.admin_created,
        )
    finally:
        await container.close()


def main() -> int:
    """Run the seed loader and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        asyncio.run(run(settings))
        return 0

    except Exception as e:
        logfire.error(
            "Seeding failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
