"""
Platform factory for creating platform instances by name or connection URL.
"""

from typing import Dict, List, Optional, Type
import logging

from .base import Platform
from .db2 import Db2Platform
from .derby import DerbyPlatform
from .firebird import FirebirdPlatform
from .generic import GenericPlatform
from .hsqldb import HsqlDbPlatform
from .interbase import InterbasePlatform
from .mckoi import MckoiPlatform
from .mssql import MsSqlPlatform
from .mysql import MySqlPlatform
from .oracle import Oracle8Platform
from .postgresql import PostgreSqlPlatform
from .sapdb import MaxDbPlatform, SapDbPlatform
from .sybase import SybasePlatform
from ..exceptions import PlatformError


logger = logging.getLogger(__name__)


class PlatformFactory:
    """
    Factory for creating database platforms.

    Platforms are registered under their case-insensitive name; every call
    to create_new_platform_instance returns a fresh, independent instance.
    """

    # Registry of available platform implementations
    _PLATFORM_REGISTRY: Dict[str, Type[Platform]] = {
        platform_class.NAME.lower(): platform_class
        for platform_class in (
            GenericPlatform,
            Db2Platform,
            DerbyPlatform,
            FirebirdPlatform,
            HsqlDbPlatform,
            InterbasePlatform,
            MaxDbPlatform,
            MckoiPlatform,
            MsSqlPlatform,
            MySqlPlatform,
            Oracle8Platform,
            PostgreSqlPlatform,
            SapDbPlatform,
            SybasePlatform,
        )
    }

    @classmethod
    def create_new_platform_instance(cls, name: str, **kwargs) -> Platform:
        """
        Create a platform by name.

        Args:
            name: Platform name, matched case-insensitively
            **kwargs: Passed to the platform constructor

        Returns:
            A new platform instance

        Raises:
            PlatformError: If no platform is registered under the name
        """
        platform_class = cls._PLATFORM_REGISTRY.get(name.lower())
        if platform_class is None:
            raise PlatformError(
                f"Unsupported database platform: {name}. "
                f"Available platforms: {', '.join(cls.get_supported_platforms())}",
                {"platform": name},
            )
        logger.debug(f"Creating {platform_class.NAME} platform")
        return platform_class(**kwargs)

    @classmethod
    def get_supported_platforms(cls) -> List[str]:
        """Names of all registered platforms, sorted."""
        return sorted({platform_class.NAME for platform_class in cls._PLATFORM_REGISTRY.values()})

    @classmethod
    def is_platform_supported(cls, name: str) -> bool:
        return name.lower() in cls._PLATFORM_REGISTRY

    @classmethod
    def register_platform(cls, name: str, platform_class: Type[Platform]) -> None:
        """
        Register a new platform implementation, replacing any platform
        already registered under the name.

        Args:
            name: Platform name
            platform_class: Platform class implementing the dialect

        Raises:
            PlatformError: If platform_class is not a Platform subclass
        """
        if not isinstance(platform_class, type) or not issubclass(platform_class, Platform):
            raise PlatformError(
                f"Platform class must inherit from Platform: {platform_class}",
                {"platform": name},
            )
        cls._PLATFORM_REGISTRY[name.lower()] = platform_class
        logger.info(f"Registered database platform: {name}")

    @classmethod
    def platform_for_url(cls, url: str) -> Optional[str]:
        """
        Name of the platform serving a connection URL.

        Accepts JDBC style URLs (jdbc:postgresql://...) as well as plain
        ones with an optional driver suffix (postgresql+asyncpg://...).

        Returns:
            The platform name, or None when no platform handles the scheme
        """
        if not url:
            return None
        if url.lower().startswith("jdbc:"):
            url = url[len("jdbc:"):]
        scheme = url.split(":", 1)[0].split("+", 1)[0].lower()
        for platform_class in cls._PLATFORM_REGISTRY.values():
            if scheme in platform_class.URL_SCHEMES:
                return platform_class.NAME
        return None
