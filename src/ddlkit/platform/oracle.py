"""
Oracle platform.

Oracle 8 has no identity columns; an auto-increment column gets a sequence
and a BEFORE INSERT trigger that fills the column when it is NULL.
"""

from ..model import Column, Table, TypeCode
from .base import Platform
from .builder import SqlBuilder, SqlWriter
from .info import PlatformInfo


class Oracle8Builder(SqlBuilder):
    add_column_keyword = "ADD"

    def get_sequence_name(self, table: Table, column: Column) -> str:
        return self.get_constraint_name("seq", table, column.name)

    def get_trigger_name(self, table: Table, column: Column) -> str:
        return self.get_constraint_name("trg", table, column.name)

    def create_auto_increment_support(self, table: Table, column: Column) -> str:
        sequence_name = self.get_sequence_name(table, column)
        column_name = self.get_column_name(column)
        out = self._new_writer()

        out.write("CREATE SEQUENCE ")
        out.write_identifier(sequence_name)
        out.write_end_of_statement()

        out.write("CREATE OR REPLACE TRIGGER ")
        out.write_identifier(self.get_trigger_name(table, column))
        out.write(" BEFORE INSERT ON ")
        out.write_identifier(self.get_table_name(table))
        out.writeln()
        out.writeln(f"FOR EACH ROW WHEN (new.{column_name} IS NULL)")
        out.write(f"BEGIN SELECT {sequence_name}.nextval INTO :new.{column_name} FROM dual; END;")
        out.write_end_of_statement()
        return out.getvalue()

    def _drop_sequence(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("DROP SEQUENCE ")
        out.write_identifier(self.get_sequence_name(table, column))
        out.write_end_of_statement()

    def drop_auto_increment_support(self, table: Table, column: Column) -> str:
        out = self._new_writer()
        out.write("DROP TRIGGER ")
        out.write_identifier(self.get_trigger_name(table, column))
        out.write_end_of_statement()
        self._drop_sequence(out, table, column)
        return out.getvalue()

    def drop_table(self, table: Table) -> str:
        out = self._new_writer()
        out.write("DROP TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.write(" CASCADE CONSTRAINTS")
        out.write_end_of_statement()
        for column in table.get_auto_increment_columns():
            self._drop_sequence(out, table, column)
        return out.getvalue()

    def drop_primary_key(self, table: Table) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP PRIMARY KEY")
        out.write_end_of_statement()
        return out.getvalue()


class Oracle8Platform(Platform):
    NAME = "Oracle8"
    URL_SCHEMES = ("oracle",)

    builder_class = Oracle8Builder

    def init_platform_info(self, info: PlatformInfo) -> None:
        info.max_identifier_length = 30
        info.auto_increment_uses_identity = False
        info.column_modification_style = "modify_parens"

        info.add_native_type_mapping(TypeCode.ARRAY, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.BIGINT, "NUMBER(38)")
        info.add_native_type_mapping(TypeCode.BINARY, "RAW", TypeCode.VARBINARY)
        info.add_native_type_mapping(TypeCode.BIT, "NUMBER(1)")
        info.add_native_type_mapping(TypeCode.DATE, "DATE", TypeCode.TIMESTAMP)
        info.add_native_type_mapping(TypeCode.DECIMAL, "NUMBER")
        info.add_native_type_mapping(TypeCode.DISTINCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.DOUBLE, "DOUBLE PRECISION")
        info.add_native_type_mapping(TypeCode.FLOAT, "FLOAT", TypeCode.DOUBLE)
        info.add_native_type_mapping(TypeCode.INTEGER, "INTEGER")
        info.add_native_type_mapping(TypeCode.JAVA_OBJECT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.LONGVARBINARY, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.LONGVARCHAR, "CLOB", TypeCode.CLOB)
        info.add_native_type_mapping(TypeCode.NULL, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.NUMERIC, "NUMBER", TypeCode.DECIMAL)
        info.add_native_type_mapping(TypeCode.OTHER, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.REAL, "REAL")
        info.add_native_type_mapping(TypeCode.REF, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.SMALLINT, "NUMBER(5)")
        info.add_native_type_mapping(TypeCode.STRUCT, "BLOB", TypeCode.BLOB)
        info.add_native_type_mapping(TypeCode.TIME, "DATE", TypeCode.TIMESTAMP)
        info.add_native_type_mapping(TypeCode.TIMESTAMP, "DATE")
        info.add_native_type_mapping(TypeCode.TINYINT, "NUMBER(3)")
        info.add_native_type_mapping(TypeCode.VARBINARY, "RAW")
        info.add_native_type_mapping(TypeCode.VARCHAR, "VARCHAR2")

        info.add_native_type_mapping("BOOLEAN", "NUMBER(1,0)", "BIT")
        info.add_native_type_mapping("DATALINK", "BLOB", "BLOB")

        info.add_default_size(TypeCode.CHAR, 254)
        info.add_default_size(TypeCode.VARCHAR, 254)
        info.add_default_size(TypeCode.BINARY, 254)
        info.add_default_size(TypeCode.VARBINARY, 254)
