"""
Sybase platform.
"""

from ..model import Index, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder
from .info import PlatformInfo


class SybaseBuilder(SqlBuilder):
    modify_column_keyword = "MODIFY"
    add_column_keyword = "ADD"

    def drop_index(self, table: Table, index: Index) -> str:
        out = self._new_writer()
        out.write("DROP INDEX ")
        out.write_identifier(self.get_table_name(table))
        out.write(".")
        out.write_identifier(self.get_index_name(table, index))
        out.write_end_of_statement()
        return out.getvalue()


class SybasePlatform(Platform):
    NAME = "Sybase"
    URL_SCHEMES = ("sybase",)

    builder_class = SybaseBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 30
        info.null_as_default_value_required = True
        info.column_modification_style = "modify"

        info.add_native_type_mapping(TypeCode.ARRAY, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIGINT, "DECIMAL(19,0)")
        info.add_native_type_mapping(TypeCode.BLOB, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "BIT", TypeCode.BIT)
        info.add_native_type_mapping(TypeCode.CLOB, "TEXT", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DATE, "DATETIME", TypeCode.TIMESTAMP)
        info.add_native_type_mapping(TypeCode.DISTINCT, "IMAGE", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DOUBLE, "DOUBLE PRECISION")
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE PRECISION", TypeCode.DOUBLE)
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

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
