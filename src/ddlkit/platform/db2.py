"""
IBM DB2 platform.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


_BIT_DATA_TYPES = {
    TypeCode.BINARY: "CHAR",
    TypeCode.VARBINARY: "VARCHAR",
}


class Db2Builder(SqlBuilder):
    """SQL builder for DB2; binary types are character types FOR BIT DATA."""

    def get_sql_type(self, column: Column) -> str:
        base_type = _BIT_DATA_TYPES.get(column.type_code)
        if base_type is None:
            return super().get_sql_type(column)
        size = column.size or self.info.get_default_size(column.type_code)
        if size:
            return f"{base_type}({size}) FOR BIT DATA"
        return f"{base_type} FOR BIT DATA"

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("GENERATED BY DEFAULT AS IDENTITY")

    def drop_primary_key(self, table: Table) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP PRIMARY KEY")
        out.write_end_of_statement()
        return out.getvalue()


class Db2Platform(Platform):
    NAME = "DB2"
    URL_SCHEMES = ("db2", "db2os390", "as400")

    builder_class = Db2Builder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 18

        info.add_native_type_mapping(TypeCode.ARRAY, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.BINARY, "CHAR")
        info.add_native_type_mapping(TypeCode.BIT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.DATALINK, "DATALINK")
        info.add_native_type_mapping(TypeCode.DISTINCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "LONG VARCHAR FOR BIT DATA")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "LONG VARCHAR")
        info.add_native_type_mapping(TypeCode.NULL, "LONG VARCHAR FOR BIT DATA", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.NUMERIC, "DECIMAL", TypeCode.DECIMAL)
        info.add_native_type_mapping(TypeCode.OTHER, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.STRUCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.TINYINT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.VARBINARY, "VARCHAR")

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
