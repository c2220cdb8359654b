"""Core DI providers."""

from typing import Optional

from dishka import Scope, provide

from board.config import AuthSettings, SeedSettings, Settings
from board.util.di.base import ProviderBase


class ConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded from environment variables and .env file unless an
    explicit ``Settings`` instance is passed in (tests, scripts).
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return self._settings if self._settings is not None else Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_seed_settings(self, settings: Settings) -> SeedSettings:
        return settings.seed
