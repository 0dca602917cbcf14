"""
Database platforms for ddlkit.

This package provides:
- PlatformInfo capability descriptors
- The SqlBuilder rendering DDL for models, tables and changes
- The ModelReader turning database metadata into a schema model
- Platform facades for each supported database and a factory to find them
"""

from .info import PlatformInfo
from .builder import CreationParameters, SqlBuilder, SqlWriter
from .reader import MetadataColumnDescriptor, MetadataSource, ModelReader
from .base import Platform
from .generic import GenericPlatform
from .db2 import Db2Builder, Db2Platform
from .derby import DerbyPlatform
from .interbase import InterbaseBuilder, InterbasePlatform
from .firebird import FirebirdPlatform
from .hsqldb import HsqlDbBuilder, HsqlDbPlatform
from .mckoi import MckoiBuilder, MckoiPlatform
from .mssql import MsSqlBuilder, MsSqlPlatform
from .mysql import MySqlBuilder, MySqlPlatform
from .oracle import Oracle8Builder, Oracle8Platform
from .postgresql import PostgreSqlBuilder, PostgreSqlModelReader, PostgreSqlPlatform
from .sapdb import MaxDbPlatform, SapDbBuilder, SapDbPlatform
from .sybase import SybaseBuilder, SybasePlatform
from .factory import PlatformFactory

__all__ = [
    "PlatformInfo",
    "CreationParameters",
    "SqlBuilder",
    "SqlWriter",
    "MetadataColumnDescriptor",
    "MetadataSource",
    "ModelReader",
    "Platform",
    "GenericPlatform",
    "Db2Builder",
    "Db2Platform",
    "DerbyPlatform",
    "InterbaseBuilder",
    "InterbasePlatform",
    "FirebirdPlatform",
    "HsqlDbBuilder",
    "HsqlDbPlatform",
    "MckoiBuilder",
    "MckoiPlatform",
    "MsSqlBuilder",
    "MsSqlPlatform",
    "MySqlBuilder",
    "MySqlPlatform",
    "Oracle8Builder",
    "Oracle8Platform",
    "PostgreSqlBuilder",
    "PostgreSqlModelReader",
    "PostgreSqlPlatform",
    "MaxDbPlatform",
    "SapDbBuilder",
    "SapDbPlatform",
    "SybaseBuilder",
    "SybasePlatform",
    "PlatformFactory",
]
