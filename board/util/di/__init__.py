"""Dependency injection module."""

from typing import Type

from board.util.di.base import ProviderBase
from board.util.di.core import ConfigProvider
from board.util.di.domain import DomainProvider
from board.util.di.persistence import PersistenceProvider

# Providers built without arguments; ConfigProvider takes the settings
PROVIDERS: list[Type[ProviderBase]] = [
    PersistenceProvider,
    DomainProvider,
]

__all__ = [
    "ProviderBase",
    "PROVIDERS",
    "ConfigProvider",
    "DomainProvider",
    "PersistenceProvider",
]
