"""Logfire setup.

Services log through ``logfire`` directly:

    logfire.info("User registered", user_id=user.id, email=user.email)

    with logfire.span("post_service.delete_post", post_id=post_id):
        ...

Password hashes and tokens never reach a log record: ``User.password`` is
excluded from dumps, and the scrubbing patterns below catch the rest.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from board.config import Settings

# Attribute names redacted on top of Logfire's defaults (which cover "password")
SCRUB_PATTERNS = ["jwt", "token", "hash"]


def should_send(settings: Settings) -> bool:
    """Explicit setting first, then token presence. Local-only otherwise."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> bool:
    """Configure Logfire for the scripts.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship records to Logfire cloud;
    OBSERVABILITY__SEND_TO_LOGFIRE overrides either way.

    Args:
        settings: Application settings

    Returns:
        Whether records are sent to Logfire cloud
    """
    send_to_logfire = should_send(settings)

    logfire.configure(
        service_name="community-board",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )
    return send_to_logfire


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement issued through ``engine``."""
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
