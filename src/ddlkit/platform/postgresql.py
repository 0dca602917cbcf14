"""
PostgreSQL platform.

Auto-increment columns are identity columns. Reading a live database goes
through ddlkit.database.introspection.PostgresMetadataSource.
"""

import logging
from typing import Any, Dict, Optional

from ..database.connection import ConnectionPool
from ..exceptions import ExecutionError
from ..model import Column, ForeignKey, Index, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo
from .reader import ModelReader


logger = logging.getLogger(__name__)


class PostgreSqlBuilder(SqlBuilder):
    alter_column_type_clause = "TYPE"
    add_identity_clause = "ADD GENERATED BY DEFAULT AS IDENTITY"
    drop_identity_clause = "DROP IDENTITY IF EXISTS"

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("GENERATED BY DEFAULT AS IDENTITY")

    def get_primary_key_name(self, table: Table) -> str:
        return self.get_constraint_name(None, table, "pkey")


class PostgreSqlModelReader(ModelReader):
    """PostgreSQL creates no indexes for foreign keys."""

    def is_internal_foreign_key_index(self, table: Table, foreign_key: ForeignKey, index: Index) -> bool:
        return False


class PostgreSqlPlatform(Platform):
    NAME = "PostgreSql"
    URL_SCHEMES = ("postgresql", "postgres")

    builder_class = PostgreSqlBuilder
    model_reader_class = PostgreSqlModelReader

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 63

        info.add_native_type_mapping(TypeCode.ARRAY, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BINARY, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIT, "BOOLEAN")
        info.add_native_type_mapping(TypeCode.BLOB, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "BOOLEAN", TypeCode.BIT)
        info.add_native_type_mapping(TypeCode.CLOB, "TEXT", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DISTINCT, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DOUBLE, "DOUBLE PRECISION")
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE PRECISION", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "BYTEA")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "TEXT")
        info.add_native_type_mapping(TypeCode.NULL, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.OTHER, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REF, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "BYTEA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.TINYINT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.VARBINARY, "BYTEA", TypeCode.LONGVARBINARY)

        info.set_has_size(TypeCode.BINARY, False)
        info.set_has_size(TypeCode.VARBINARY, False)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)

    async def create_database(
        self, pool: ConnectionPool, name: str, parameters: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Create the database `name`, e.g. from a pool connected to `postgres`.

        Parameters are appended as options, e.g. {"OWNER": "app", "ENCODING": "'UTF8'"}.
        """
        statement = f"CREATE DATABASE {self._builder.get_delimited_identifier(name)}"
        for option, value in (parameters or {}).items():
            statement += f" {option} {value}"
        await self._execute_database_statement(pool, statement)

    async def drop_database(self, pool: ConnectionPool, name: str) -> None:
        statement = f"DROP DATABASE {self._builder.get_delimited_identifier(name)}"
        await self._execute_database_statement(pool, statement)

    async def _execute_database_statement(self, pool: ConnectionPool, statement: str) -> None:
        logger.info(f"Executing: {statement}")
        try:
            await pool.execute(statement)
        except Exception as e:
            logger.error(f"Failed to execute {statement}: {e}")
            raise ExecutionError(statement, cause=e) from e
