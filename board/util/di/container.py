"""Dependency injection container."""

from typing import Optional

from dishka import AsyncContainer, make_async_container

from board.config import Settings
from board.util.di import PROVIDERS
from board.util.di.core import ConfigProvider


def create_container(settings: Optional[Settings] = None) -> AsyncContainer:
    """Build the application container.

    Args:
        settings: Explicit settings; loaded from the environment if omitted

    Returns:
        Configured DI container
    """
    return make_async_container(
        ConfigProvider(settings), *(provider() for provider in PROVIDERS)
    )
