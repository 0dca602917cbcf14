"""
Interbase platform.

Interbase has no identity columns; auto-increment columns are fed by a
generator and a BEFORE INSERT trigger per column.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class InterbaseBuilder(SqlBuilder):
    """SQL builder for Interbase and Firebird."""

    alter_column_type_clause = "TYPE"
    add_column_keyword = "ADD"

    def get_generator_name(self, table: Table, column: Column) -> str:
        return self.get_constraint_name("gen", table, column.name)

    def get_trigger_name(self, table: Table, column: Column) -> str:
        return self.get_constraint_name("trg", table, column.name)

    def create_auto_increment_support(self, table: Table, column: Column) -> str:
        generator_name = self.get_generator_name(table, column)
        column_name = self.get_column_name(column)
        out = self._new_writer()

        out.write("CREATE GENERATOR ")
        out.write_identifier(generator_name)
        out.write_end_of_statement()

        out.write("CREATE TRIGGER ")
        out.write_identifier(self.get_trigger_name(table, column))
        out.write(" FOR ")
        out.write_identifier(self.get_table_name(table))
        out.writeln()
        out.writeln("ACTIVE BEFORE INSERT POSITION 0 AS")
        out.write(f"BEGIN IF (NEW.{column_name} IS NULL) THEN ")
        out.write(f"NEW.{column_name} = GEN_ID({generator_name}, 1); END;")
        out.write_end_of_statement()
        return out.getvalue()

    def _drop_generator(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("DROP GENERATOR ")
        out.write_identifier(self.get_generator_name(table, column))
        out.write_end_of_statement()

    def drop_auto_increment_support(self, table: Table, column: Column) -> str:
        out = self._new_writer()
        out.write("DROP TRIGGER ")
        out.write_identifier(self.get_trigger_name(table, column))
        out.write_end_of_statement()
        self._drop_generator(out, table, column)
        return out.getvalue()

    def drop_table(self, table: Table) -> str:
        # the triggers go with the table, the generators do not
        out = self._new_writer()
        out.write(super().drop_table(table))
        for column in table.get_auto_increment_columns():
            self._drop_generator(out, table, column)
        return out.getvalue()

    def write_alter_column_changes(
        self, out: SqlWriter, table: Table, old_column: Column, new_column: Column
    ) -> None:
        if (
            old_column.type_code != new_column.type_code
            or old_column.size != new_column.size
            or old_column.scale != new_column.scale
        ):
            self._write_alter_column(
                out, table, new_column,
                f"{self.alter_column_type_clause} {self.get_sql_type(new_column)}",
            )
        if old_column.default_value != new_column.default_value:
            self.write_unsupported_change(out, table, new_column, "Changing the default value")
        if old_column.required != new_column.required:
            self.write_unsupported_change(out, table, new_column, "Changing the required status")


class InterbasePlatform(Platform):
    NAME = "Interbase"
    URL_SCHEMES = ("interbase",)

    builder_class = InterbaseBuilder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 31
        info.auto_increment_uses_identity = False

        info.add_native_type_mapping(TypeCode.ARRAY, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIGINT, "NUMERIC(18,0)")
        info.add_native_type_mapping(TypeCode.BINARY, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BIT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.BLOB, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.BOOLEAN, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.CLOB, "BLOB SUB_TYPE TEXT", TypeCode.LONGVARCHAR)
        info.add_native_type_mapping(TypeCode.DATALINK, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DISTINCT, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.DOUBLE, "DOUBLE PRECISION")
        info.add_native_type_mapping(TypeCode.FLOAT, "DOUBLE PRECISION", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "BLOB")
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "BLOB SUB_TYPE TEXT")
        info.add_native_type_mapping(TypeCode.NULL, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.OTHER, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.REAL, "FLOAT")
        info.add_native_type_mapping(TypeCode.REF, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.STRUCT, "BLOB", TypeCode.LONGVARBINARY)
        info.add_native_type_mapping(TypeCode.TINYINT, "SMALLINT", TypeCode.SMALLINT)
        info.add_native_type_mapping(TypeCode.VARBINARY, "BLOB", TypeCode.LONGVARBINARY)

        info.set_has_size(TypeCode.BINARY, False)
        info.set_has_size(TypeCode.VARBINARY, False)

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
