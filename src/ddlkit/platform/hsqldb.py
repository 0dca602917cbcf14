"""
HSQLDB platform.
"""

from typing import Optional

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder
from .info import PlatformInfo


class HsqlDbBuilder(SqlBuilder):
    """SQL builder for HSQLDB; columns can be inserted before another column."""

    def drop_table(self, table: Table) -> str:
        out = self._new_writer()
        out.write("DROP TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.write(" IF EXISTS")
        out.write_end_of_statement()
        return out.getvalue()

    def insert_column(self, table: Table, column: Column, next_column: Optional[Column] = None) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write(f"{self.add_column_keyword} ")
        self.write_column(out, table, column)
        if next_column is not None:
            out.write(" BEFORE ")
            out.write_identifier(self.get_column_name(next_column))
        out.write_end_of_statement()
        return out.getvalue()


class HsqlDbPlatform(Platform):
    NAME = "HsqlDb"
    URL_SCHEMES = ("hsqldb",)

    builder_class = HsqlDbBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.add_native_type_mapping(TypeCode.ARRAY, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BLOB, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.CLOB, "LONGVARCHAR", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DISTINCT, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "OBJECT")
        info.add_native_type_mapping(TypeCode.NULL, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REF, "LONGVARBINARY", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "LONGVARBINARY", TypeCode.LONGVARBINARY)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
