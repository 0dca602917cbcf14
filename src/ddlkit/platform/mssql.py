"""
Microsoft SQL Server platform.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class MsSqlBuilder(SqlBuilder):
    """
    SQL builder for SQL Server.

    Default values are named constraints on SQL Server; dropping or
    replacing one needs the constraint name, which the model does not carry,
    so such changes are reported instead of rendered.
    """

    add_column_keyword = "ADD"

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("IDENTITY (1,1)")

    def drop_index(self, table: Table, index) -> str:
        out = self._new_writer()
        out.write("DROP INDEX ")
        out.write_identifier(self.get_table_name(table))
        out.write(".")
        out.write_identifier(self.get_index_name(table, index))
        out.write_end_of_statement()
        return out.getvalue()

    def change_column(self, table: Table, old_column: Column, new_column: Column) -> str:
        out = self._new_writer()
        if (
            old_column.type_code != new_column.type_code
            or old_column.size != new_column.size
            or old_column.scale != new_column.scale
            or old_column.required != new_column.required
        ):
            null_clause = "NOT NULL" if new_column.required else "NULL"
            self._write_alter_column(
                out, table, new_column, f"{self.get_sql_type(new_column)} {null_clause}"
            )

        if old_column.default_value != new_column.default_value:
            if old_column.default_value is None:
                self._write_alter_table(out, table)
                out.write(f"ADD DEFAULT {self.get_default_value(new_column)} FOR ")
                out.write_identifier(self.get_column_name(new_column))
                out.write_end_of_statement()
            else:
                self.write_unsupported_change(out, table, new_column, "Changing the default value")

        if old_column.auto_increment != new_column.auto_increment:
            self.write_unsupported_change(out, table, new_column, "Changing the identity status")
        return out.getvalue()


class MsSqlPlatform(Platform):
    NAME = "MsSql"
    URL_SCHEMES = ("sqlserver", "mssql", "microsoft")

    builder_class = MsSqlBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 128

        info.add_native_type_mapping(TypeCode.ARRAY, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIGINT, "DECIMAL(19,0)")
        info.add_native_type_mapping(TypeCode.BLOB, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "BIT", TypeCode.BIT)
        info.add_native_type_mapping(TypeCode.CLOB, "TEXT", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DATE, "DATETIME", TypeCode.TIMESTAMP)
        info.add_native_type_mapping(TypeCode.DISTINCT, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DOUBLE, "FLOAT", TypeCode.FLOAT)
        info.add_native_type_mapping(TypeCode.INTEGER, "INT")
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "IMAGE")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "TEXT")
        info.add_native_type_mapping(TypeCode.NULL, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.OTHER, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REF, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.TIME, "DATETIME", TypeCode.TIMESTAMP)
        info.add_native_type_mapping(TypeCode.TIMESTAMP, "DATETIME")
        info.add_native_type_mapping(TypeCode.TINYINT, "SMALLINT", TypeCode.SMALLINT)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
