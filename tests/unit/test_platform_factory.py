"""
Unit tests for the platform factory.
"""

import pytest

from ddlkit.exceptions import PlatformError
from ddlkit.platform import (
    GenericPlatform,
    MySqlPlatform,
    Oracle8Platform,
    Platform,
    PlatformFactory,
    PostgreSqlPlatform,
)


class TestPlatformFactory:
    """Test cases for PlatformFactory."""

    @pytest.fixture(autouse=True)
    def restore_registry(self):
        registry = dict(PlatformFactory._PLATFORM_REGISTRY)
        yield
        PlatformFactory._PLATFORM_REGISTRY.clear()
        PlatformFactory._PLATFORM_REGISTRY.update(registry)

    def test_supported_platforms(self):
        names = PlatformFactory.get_supported_platforms()
        assert names == sorted(names)
        assert len(names) == 14
        assert {"PostgreSql", "MySQL", "Oracle8", "MsSql", "Firebird", "MaxDB"} <= set(names)

    def test_lookup_is_case_insensitive(self):
        platform = PlatformFactory.create_new_platform_instance("postgresql")
        assert isinstance(platform, PostgreSqlPlatform)
        assert PlatformFactory.is_platform_supported("MYSQL")

    def test_instances_are_independent(self):
        first = PlatformFactory.create_new_platform_instance("MySQL")
        second = PlatformFactory.create_new_platform_instance("MySQL")
        assert first is not second

    def test_constructor_options(self):
        platform = PlatformFactory.create_new_platform_instance(
            "Generic", use_delimited_identifiers=True, case_sensitive=True
        )
        assert platform.builder.use_delimited_identifiers
        assert platform.case_sensitive

    def test_unsupported_platform(self):
        with pytest.raises(PlatformError) as exc_info:
            PlatformFactory.create_new_platform_instance("Access")
        assert "Available platforms" in str(exc_info.value)
        assert exc_info.value.details["platform"] == "Access"

    def test_register_platform(self):
        class TestPlatform(GenericPlatform):
            NAME = "Test"

        PlatformFactory.register_platform("Test", TestPlatform)
        assert isinstance(PlatformFactory.create_new_platform_instance("test"), TestPlatform)
        assert "Test" in PlatformFactory.get_supported_platforms()

    def test_register_requires_platform_subclass(self):
        with pytest.raises(PlatformError):
            PlatformFactory.register_platform("Bad", dict)

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgresql://localhost/shop", "PostgreSql"),
            ("postgresql+asyncpg://localhost/shop", "PostgreSql"),
            ("jdbc:mysql://localhost/shop", "MySQL"),
            ("mariadb://localhost/shop", "MySQL"),
            ("jdbc:oracle:thin:@localhost:1521:orcl", "Oracle8"),
            ("jdbc:sqlserver://localhost;databaseName=shop", "MsSql"),
            ("jdbc:firebirdsql://localhost/shop", "Firebird"),
            ("jdbc:derby:shop", "Derby"),
            ("jdbc:hsqldb:mem:shop", "HsqlDb"),
            ("jdbc:unknown://localhost", None),
            ("", None),
        ],
    )
    def test_platform_for_url(self, url, expected):
        assert PlatformFactory.platform_for_url(url) == expected


class TestPlatformInstances:
    """Test cases for the capabilities the platforms declare."""

    @pytest.mark.parametrize("name", PlatformFactory.get_supported_platforms())
    def test_every_platform_builds(self, name, shop_database):
        platform = PlatformFactory.create_new_platform_instance(name)

        assert isinstance(platform, Platform)
        assert platform.info.is_frozen
        assert "CREATE TABLE" in platform.get_create_tables_sql(shop_database)
        assert "DROP TABLE" in platform.get_drop_tables_sql(shop_database)

    def test_identifier_limits(self):
        assert PostgreSqlPlatform().info.max_identifier_length == 63
        assert MySqlPlatform().info.max_identifier_length == 64
        assert Oracle8Platform().info.max_identifier_length == 30

    def test_repr(self):
        assert repr(MySqlPlatform()) == "MySqlPlatform [name=MySQL]"
