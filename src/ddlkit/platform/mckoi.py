"""
McKoi platform.

Auto-increment columns draw their values from the table's unique key
counter through the column default.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class MckoiBuilder(SqlBuilder):
    def drop_table(self, table: Table) -> str:
        out = self._new_writer()
        out.write("DROP TABLE IF EXISTS ")
        out.write_identifier(self.get_table_name(table))
        out.write_end_of_statement()
        return out.getvalue()

    def _unique_key_default(self, table: Table) -> str:
        # start at 1
        return f"UNIQUEKEY('{self.get_table_name(table)}') + 1"

    def has_column_default(self, table: Table, column: Column) -> bool:
        if column.auto_increment:
            return True
        return super().has_column_default(table, column)

    def write_column_default_value(self, out: SqlWriter, table: Table, column: Column) -> None:
        if column.auto_increment:
            out.write(self._unique_key_default(table))
        else:
            super().write_column_default_value(out, table, column)

    def change_column(self, table: Table, old_column: Column, new_column: Column) -> str:
        out = self._new_writer()
        out.write(super().change_column(table, old_column, new_column))
        if old_column.auto_increment != new_column.auto_increment:
            if new_column.auto_increment:
                clause = f"SET DEFAULT {self._unique_key_default(table)}"
            elif new_column.default_value is not None:
                clause = f"SET DEFAULT {self.get_default_value(new_column)}"
            else:
                clause = "DROP DEFAULT"
            self._write_alter_column(out, table, new_column, clause)
        return out.getvalue()


class MckoiPlatform(Platform):
    NAME = "McKoi"
    URL_SCHEMES = ("mckoi",)

    builder_class = MckoiBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.auto_increment_uses_identity = False

        info.add_native_type_mapping(TypeCode.ARRAY, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.BIT, "BOOLEAN")
        info.add_native_type_mapping(TypeCode.DATALINK, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.DISTINCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.NULL, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.OTHER, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.REF, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.STRUCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "BOOLEAN", TypeCode.BIT)

        info.add_default_size(TypeCode.CHAR, 1024)
        info.add_default_size(TypeCode.VARCHAR, 1024)
        info.add_default_size(TypeCode.BINARY, 1024)
        info.add_default_size(TypeCode.VARBINARY, 1024)
