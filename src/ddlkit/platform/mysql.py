"""
MySQL platform.
"""

from typing import Any, Dict

from ..model import ForeignKey, Index, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class MySqlBuilder(SqlBuilder):
    """SQL builder for MySQL; indexes are declared inside CREATE TABLE."""

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column) -> None:
        out.write("AUTO_INCREMENT")

    def write_table_creation_suffix(
        self, out: SqlWriter, table: Table, parameters: Dict[str, Any]
    ) -> None:
        # options without value are written bare
        for name, value in parameters.items():
            out.write(f" {name}")
            if value is not None:
                out.write(f"={value}")

    def drop_primary_key(self, table: Table) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP PRIMARY KEY")
        out.write_end_of_statement()
        return out.getvalue()

    def drop_foreign_key(self, table: Table, foreign_key: ForeignKey) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP FOREIGN KEY ")
        out.write_identifier(self.get_foreign_key_name(table, foreign_key))
        out.write_end_of_statement()
        return out.getvalue()

    def drop_index(self, table: Table, index: Index) -> str:
        out = self._new_writer()
        out.write("DROP INDEX ")
        out.write_identifier(self.get_index_name(table, index))
        out.write(" ON ")
        out.write_identifier(self.get_table_name(table))
        out.write_end_of_statement()
        return out.getvalue()


class MySqlPlatform(Platform):
    NAME = "MySQL"
    URL_SCHEMES = ("mysql", "mariadb")

    builder_class = MySqlBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 64
        info.indexes_embedded = True
        info.column_modification_style = "modify"
        info.default_values_for_lobs_supported = False
        info.identifier_quote_string = "`"

        info.add_escaped_char_sequence("\\", "\\\\")
        info.add_escaped_char_sequence("\0", "\\0")
        info.add_escaped_char_sequence("'", "\\'")
        info.add_escaped_char_sequence('"', '\\"')
        info.add_escaped_char_sequence("\b", "\\b")
        info.add_escaped_char_sequence("\n", "\\n")
        info.add_escaped_char_sequence("\r", "\\r")
        info.add_escaped_char_sequence("\t", "\\t")
        info.add_escaped_char_sequence("\x1a", "\\Z")

        info.add_native_type_mapping(TypeCode.ARRAY, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIT, "TINYINT(1)")
        info.add_native_type_mapping(TypeCode.BLOB, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.CLOB, "LONGTEXT", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "MEDIUMBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DISTINCT, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "MEDIUMBLOB")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "MEDIUMTEXT")
        info.add_native_type_mapping(TypeCode.NULL, "MEDIUMBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.NUMERIC, "DECIMAL", TypeCode.DECIMAL)
        info.add_native_type_mapping(TypeCode.OTHER, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REAL, "FLOAT")
        info.add_native_type_mapping(TypeCode.REF, "MEDIUMBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "LONGBLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.TIMESTAMP, "DATETIME")
        info.add_native_type_mapping(TypeCode.BOOLEAN, "TINYINT(1)", TypeCode.BIT)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
