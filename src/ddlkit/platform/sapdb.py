"""
SapDB and MaxDB platforms.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class SapDbBuilder(SqlBuilder):
    modify_column_keyword = "MODIFY"

    def get_sql_type(self, column: Column) -> str:
        if column.type_code in (TypeCode.BINARY, TypeCode.VARBINARY):
            return self.get_native_type(column)
        return super().get_sql_type(column)

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("DEFAULT SERIAL(1)")

    def drop_table(self, table: Table) -> str:
        out = self._new_writer()
        out.write("DROP TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.write(" CASCADE")
        out.write_end_of_statement()
        return out.getvalue()

    def drop_primary_key(self, table: Table) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP PRIMARY KEY")
        out.write_end_of_statement()
        return out.getvalue()


class SapDbPlatform(Platform):
    NAME = "SapDB"
    URL_SCHEMES = ("sapdb",)

    builder_class = SapDbBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 32
        info.column_modification_style = "modify"

        info.add_native_type_mapping(TypeCode.ARRAY, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIGINT, "FIXED(38,0)")
        info.add_native_type_mapping(TypeCode.BINARY, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIT, "BOOLEAN")
        info.add_native_type_mapping(TypeCode.BLOB, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.CLOB, "LONG UNICODE", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DISTINCT, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DOUBLE, "DOUBLE PRECISION")
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE PRECISION", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "LONG BYTE")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "LONG UNICODE")
        info.add_native_type_mapping(TypeCode.NULL, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.NUMERIC, "DECIMAL", TypeCode.DECIMAL)
        info.add_native_type_mapping(TypeCode.OTHER, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REF, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.TINYINT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.VARBINARY, "LONG BYTE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "BOOLEAN", TypeCode.BIT)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)


class MaxDbPlatform(SapDbPlatform):
    """MaxDB is the renamed SapDB and shares its dialect."""

    NAME = "MaxDB"
    URL_SCHEMES = ("maxdb",)
