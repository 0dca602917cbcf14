"""
SQL rendering for ddlkit.

The SqlBuilder turns a schema model, a single table or a single change
record into DDL text for one platform. The base class renders ANSI style
statements; a dialect subclasses it and overrides only the hooks where its
syntax differs (type sizing, drop statements, default value expressions,
the auto-increment clause and the ALTER TABLE column syntax).

Every public rendering method returns a string, so results compose by
concatenation and rendering the same input twice yields identical text.
"""

import io
import logging
import re
from typing import Any, Dict, List, Optional, Union

from ..alteration.apply import apply_change
from ..alteration.changes import (
    AddColumn,
    AddForeignKey,
    AddIndex,
    AddPrimaryKey,
    AddTable,
    ColumnChange,
    ModelChange,
    RemoveColumn,
    RemoveForeignKey,
    RemoveIndex,
    RemovePrimaryKey,
    RemoveTable,
)
from ..exceptions import AlterationError, ModelError, OrderingError, PlatformError, TargetNotFoundError
from ..model import (
    Column,
    Database,
    ForeignKey,
    Index,
    Table,
    TypeCode,
    sort_tables_by_dependencies,
)
from .info import PlatformInfo


logger = logging.getLogger(__name__)


_LOB_TYPES = {
    TypeCode.BLOB,
    TypeCode.CLOB,
    TypeCode.LONGVARBINARY,
    TypeCode.LONGVARCHAR,
}


class SqlWriter:
    """Accumulates the text of one rendering call."""

    INDENT = "    "

    def __init__(self, builder: "SqlBuilder"):
        self._builder = builder
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def writeln(self, text: str = "") -> None:
        self._buffer.write(text)
        self._buffer.write("\n")

    def write_indent(self) -> None:
        self._buffer.write(self.INDENT)

    def write_identifier(self, identifier: str) -> None:
        self._buffer.write(self._builder.get_delimited_identifier(identifier))

    def write_end_of_statement(self) -> None:
        self.writeln(self._builder.info.statement_delimiter)
        self.writeln()

    def write_comment(self, text: str) -> None:
        if not self._builder.sql_comments:
            return
        info = self._builder.info
        line = f"{info.comment_prefix} {text}"
        if info.comment_suffix:
            line += f" {info.comment_suffix}"
        self.writeln(line)

    def getvalue(self) -> str:
        return self._buffer.getvalue()


class CreationParameters:
    """
    Platform specific parameters for CREATE TABLE statements, such as the
    storage engine on MySQL.

    Parameters added without a table apply to every table; table parameters
    override them. Table names are matched case-insensitively.
    """

    def __init__(self):
        self._parameters: Dict[Optional[str], Dict[str, Any]] = {}

    def add_parameter(self, table: Optional[Union[Table, str]], name: str, value: Any = None) -> None:
        if isinstance(table, Table):
            table = table.name
        key = table.lower() if table is not None else None
        self._parameters.setdefault(key, {})[name] = value

    def get_parameters_for(self, table: Table) -> Dict[str, Any]:
        result = dict(self._parameters.get(None, {}))
        result.update(self._parameters.get(table.name.lower(), {}))
        return result

    def __bool__(self) -> bool:
        return bool(self._parameters)


class SqlBuilder:
    """
    Renders DDL for a platform described by a PlatformInfo.

    Class attributes hold the clause texts dialects commonly vary; methods
    are the substitution points for everything else.
    """

    alter_column_type_clause = "SET DATA TYPE"
    add_identity_clause = "SET GENERATED BY DEFAULT AS IDENTITY"
    drop_identity_clause = "DROP IDENTITY"
    modify_column_keyword = "MODIFY COLUMN"
    add_column_keyword = "ADD COLUMN"

    def __init__(
        self,
        info: PlatformInfo,
        use_delimited_identifiers: bool = False,
        sql_comments: bool = True,
    ):
        self.info = info
        self.use_delimited_identifiers = use_delimited_identifiers
        self.sql_comments = sql_comments

    def _new_writer(self) -> SqlWriter:
        return SqlWriter(self)

    # Names

    def shorten_name(self, name: str, desired_length: int) -> str:
        """
        Shorten a name to at most desired_length characters.

        The middle of the name is cut out and replaced by an underscore
        unless the cut already borders on one. A non-positive length means
        no limit.
        """
        original_length = len(name)
        if desired_length <= 0 or original_length <= desired_length:
            return name

        delta = original_length - desired_length
        start_cut = desired_length // 2
        end_start = start_cut + delta + 1

        result = name[:start_cut]
        if (start_cut == 0 or name[start_cut - 1] != "_") and (
            end_start == original_length or name[end_start] != "_"
        ):
            result += "_"
        return result + name[end_start:]

    def _shortened(self, name: str) -> str:
        return self.shorten_name(name, self.info.max_identifier_length)

    def get_delimited_identifier(self, identifier: str) -> str:
        if not self.use_delimited_identifiers:
            return identifier
        quote = self.info.identifier_quote_string
        return f"{quote}{identifier}{quote}"

    def get_table_name(self, table: Table) -> str:
        return self._shortened(table.name)

    def get_column_name(self, column: Column) -> str:
        return self._shortened(column.name)

    def get_constraint_name(
        self,
        prefix: Optional[str],
        table: Table,
        second_part: str,
        suffix: Optional[str] = None,
    ) -> str:
        parts = []
        if prefix is not None:
            parts.append(prefix)
        parts.append(table.name)
        parts.append(second_part)
        if suffix is not None:
            parts.append(suffix)
        return self._shortened("_".join(parts))

    def get_index_name(self, table: Table, index: Index) -> str:
        if index.name:
            return self._shortened(index.name)
        return self.get_constraint_name(None, table, "IDX", "_".join(index.column_names()))

    def get_foreign_key_name(self, table: Table, foreign_key: ForeignKey) -> str:
        if foreign_key.name:
            return self._shortened(foreign_key.name)
        second_part = "_".join(
            foreign_key.local_column_names() + [foreign_key.foreign_table_name or ""]
        )
        return self.get_constraint_name(None, table, "FK", second_part)

    def get_primary_key_name(self, table: Table) -> str:
        return self.get_constraint_name(None, table, "PK")

    def _column_name_of(self, table: Table, column_name: str) -> str:
        column = table.find_column(column_name)
        return self.get_column_name(column) if column is not None else self._shortened(column_name)

    def _write_column_list(self, out: SqlWriter, table: Table, column_names: List[str]) -> None:
        for idx, name in enumerate(column_names):
            if idx > 0:
                out.write(", ")
            out.write_identifier(self._column_name_of(table, name))

    # Types and values

    def get_native_type(self, column: Column) -> str:
        return self.info.get_native_type(column.type_code)

    def get_sql_type(self, column: Column) -> str:
        """The native type of the column with size or precision where the platform wants one."""
        native_type = self.get_native_type(column)
        # native types with a fixed size, e.g. NUMBER(38)
        if "(" in native_type:
            return native_type

        type_code = column.type_code
        size = column.size if column.size is not None else self.info.get_default_size(type_code)
        if size is None:
            return native_type
        if self.info.has_size(type_code):
            return f"{native_type}({size})"
        if self.info.has_precision_and_scale(type_code):
            if column.size is None and "," in size:
                return f"{native_type}({size})"
            return f"{native_type}({size},{column.scale})"
        return native_type

    def escape_string_value(self, value: str) -> str:
        sequences = self.info.escaped_char_sequences
        if not sequences:
            return value
        pattern = "|".join(re.escape(seq) for seq in sorted(sequences, key=len, reverse=True))
        return re.sub(pattern, lambda match: sequences[match.group(0)], value)

    def get_default_value(self, column: Column) -> Optional[str]:
        """The default value as SQL literal; text values are quoted and escaped."""
        if column.default_value is None:
            return None
        if column.is_of_text_type:
            quote = self.info.value_quote_char
            return f"{quote}{self.escape_string_value(column.default_value)}{quote}"
        return column.default_value

    # Columns

    def has_column_default(self, table: Table, column: Column) -> bool:
        if column.default_value is None:
            return False
        if column.type_code in _LOB_TYPES and not self.info.default_values_for_lobs_supported:
            logger.warning(
                f"Platform does not support default values for LOB column "
                f"{table.name}.{column.name}, ignoring it"
            )
            return False
        return True

    def write_column_default_value(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write(self.get_default_value(column))

    def write_column_auto_increment_stmt(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write("IDENTITY")

    def write_column(self, out: SqlWriter, table: Table, column: Column) -> None:
        out.write_identifier(self.get_column_name(column))
        out.write(" ")
        out.write(self.get_sql_type(column))
        if self.has_column_default(table, column):
            out.write(" DEFAULT ")
            self.write_column_default_value(out, table, column)
        if column.required:
            if self.info.requiring_not_null_on_required:
                out.write(" NOT NULL")
        elif self.info.null_as_default_value_required:
            out.write(" NULL")
        if column.auto_increment and self.info.auto_increment_uses_identity:
            out.write(" ")
            self.write_column_auto_increment_stmt(out, table, column)

    def get_column_definition(self, table: Table, column: Column) -> str:
        out = self._new_writer()
        self.write_column(out, table, column)
        return out.getvalue()

    def create_auto_increment_support(self, table: Table, column: Column) -> str:
        """Statements creating the objects (sequences, triggers) that feed an auto-increment column."""
        return ""

    def drop_auto_increment_support(self, table: Table, column: Column) -> str:
        return ""

    # Tables

    def _tables_in_creation_order(self, database: Database) -> List[Table]:
        try:
            return sort_tables_by_dependencies(database.tables)
        except OrderingError as e:
            logger.debug(f"Using declaration order for tables: {e}")
            return list(database.tables)

    def write_table_comment(self, out: SqlWriter, table: Table) -> None:
        out.write_comment("-" * 71)
        out.write_comment(self.get_table_name(table))
        out.write_comment("-" * 71)
        if self.sql_comments:
            out.writeln()

    def create_tables(
        self,
        database: Database,
        drop_tables_first: bool = False,
        parameters: Optional[CreationParameters] = None,
    ) -> str:
        """DDL for the whole model; foreign keys that are not embedded follow all tables."""
        out = self._new_writer()
        if drop_tables_first:
            out.write(self.drop_tables(database))

        tables = self._tables_in_creation_order(database)
        for table in tables:
            self.write_table_comment(out, table)
            out.write(self.create_table(database, table, parameters))

        for table in tables:
            out.write(self.create_external_foreign_keys(database, table))
        return out.getvalue()

    def drop_tables(self, database: Database) -> str:
        """DDL dropping the whole model, referencing tables first."""
        out = self._new_writer()
        tables = list(reversed(self._tables_in_creation_order(database)))
        for table in tables:
            out.write(self.drop_external_foreign_keys(table))
        for table in tables:
            self.write_table_comment(out, table)
            out.write(self.drop_table(table))
        return out.getvalue()

    def write_table_creation_suffix(
        self, out: SqlWriter, table: Table, parameters: Dict[str, Any]
    ) -> None:
        """Text between the closing parenthesis and the delimiter of CREATE TABLE."""
        pass

    def write_embedded_primary_key(self, out: SqlWriter, table: Table) -> None:
        out.write("PRIMARY KEY (")
        self._write_column_list(out, table, table.get_primary_key_column_names())
        out.write(")")

    def write_embedded_foreign_key(
        self, out: SqlWriter, database: Database, table: Table, foreign_key: ForeignKey
    ) -> None:
        out.write("CONSTRAINT ")
        out.write_identifier(self.get_foreign_key_name(table, foreign_key))
        out.write(" ")
        self._write_foreign_key_body(out, database, table, foreign_key)

    def write_embedded_index(self, out: SqlWriter, table: Table, index: Index) -> None:
        out.write("UNIQUE INDEX " if index.is_unique else "INDEX ")
        out.write_identifier(self.get_index_name(table, index))
        out.write(" (")
        self._write_column_list(out, table, index.column_names())
        out.write(")")

    def create_table(
        self, database: Database, table: Table, parameters: Optional[CreationParameters] = None
    ) -> str:
        """
        CREATE TABLE for one table plus its standalone primary key, index and
        auto-increment statements. Foreign keys are only included when the
        platform embeds them; otherwise see create_external_foreign_keys.
        """
        info = self.info
        out = self._new_writer()

        out.write("CREATE TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.writeln()
        out.writeln("(")

        parts: List[str] = []
        for column in table.columns:
            parts.append(self.get_column_definition(table, column))

        if info.primary_key_embedded and table.has_primary_key():
            part = self._new_writer()
            self.write_embedded_primary_key(part, table)
            parts.append(part.getvalue())

        if info.foreign_keys_embedded and info.foreign_keys_supported:
            for foreign_key in table.foreign_keys:
                part = self._new_writer()
                self.write_embedded_foreign_key(part, database, table, foreign_key)
                parts.append(part.getvalue())

        if info.indexes_embedded and info.indexes_supported:
            for index in table.indexes:
                part = self._new_writer()
                self.write_embedded_index(part, table, index)
                parts.append(part.getvalue())

        for idx, part in enumerate(parts):
            out.write_indent()
            out.write(part)
            out.writeln("," if idx < len(parts) - 1 else "")
        out.write(")")
        self.write_table_creation_suffix(
            out, table, parameters.get_parameters_for(table) if parameters else {}
        )
        out.write_end_of_statement()

        if not info.primary_key_embedded and table.has_primary_key():
            out.write(self.create_primary_key(table, table.get_primary_key_column_names()))

        if not info.indexes_embedded:
            for index in table.indexes:
                out.write(self.create_index(table, index))

        if not info.auto_increment_uses_identity:
            for column in table.get_auto_increment_columns():
                out.write(self.create_auto_increment_support(table, column))

        return out.getvalue()

    def drop_table(self, table: Table) -> str:
        out = self._new_writer()
        out.write("DROP TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.write_end_of_statement()
        return out.getvalue()

    def _write_alter_table(self, out: SqlWriter, table: Table) -> None:
        out.write("ALTER TABLE ")
        out.write_identifier(self.get_table_name(table))
        out.writeln()
        out.write_indent()

    # Primary keys

    def create_primary_key(self, table: Table, column_names: List[str]) -> str:
        if not column_names:
            return ""
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("ADD CONSTRAINT ")
        out.write_identifier(self.get_primary_key_name(table))
        out.write(" PRIMARY KEY (")
        self._write_column_list(out, table, column_names)
        out.write(")")
        out.write_end_of_statement()
        return out.getvalue()

    def drop_primary_key(self, table: Table) -> str:
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP CONSTRAINT ")
        out.write_identifier(self.get_primary_key_name(table))
        out.write_end_of_statement()
        return out.getvalue()

    # Indexes

    def create_index(self, table: Table, index: Index) -> str:
        if not self.info.indexes_supported:
            logger.debug(f"Platform does not support indexes, skipping index on {table.name}")
            return ""
        if index.column_count == 0:
            raise ModelError(
                f"Index on table '{table.name}' has no columns",
                {"table": table.name, "index": index.name},
            )
        out = self._new_writer()
        out.write("CREATE UNIQUE INDEX " if index.is_unique else "CREATE INDEX ")
        out.write_identifier(self.get_index_name(table, index))
        out.write(" ON ")
        out.write_identifier(self.get_table_name(table))
        out.write(" (")
        self._write_column_list(out, table, index.column_names())
        out.write(")")
        out.write_end_of_statement()
        return out.getvalue()

    def drop_index(self, table: Table, index: Index) -> str:
        if not self.info.indexes_supported:
            return ""
        out = self._new_writer()
        out.write("DROP INDEX ")
        out.write_identifier(self.get_index_name(table, index))
        out.write_end_of_statement()
        return out.getvalue()

    # Foreign keys

    def _write_foreign_key_body(
        self, out: SqlWriter, database: Database, table: Table, foreign_key: ForeignKey
    ) -> None:
        if not foreign_key.foreign_table_name:
            raise ModelError(
                f"Foreign key on table '{table.name}' has no foreign table",
                {"table": table.name, "foreign_key": foreign_key.name},
            )
        foreign_table = database.find_table(foreign_key.foreign_table_name)
        out.write("FOREIGN KEY (")
        self._write_column_list(out, table, foreign_key.local_column_names())
        out.write(") REFERENCES ")
        if foreign_table is not None:
            out.write_identifier(self.get_table_name(foreign_table))
            out.write(" (")
            self._write_column_list(out, foreign_table, foreign_key.foreign_column_names())
        else:
            out.write_identifier(self._shortened(foreign_key.foreign_table_name))
            out.write(" (")
            for idx, name in enumerate(foreign_key.foreign_column_names()):
                if idx > 0:
                    out.write(", ")
                out.write_identifier(self._shortened(name))
        out.write(")")

    def create_foreign_key(self, database: Database, table: Table, foreign_key: ForeignKey) -> str:
        if not self.info.foreign_keys_supported:
            logger.debug(f"Platform does not support foreign keys, skipping key on {table.name}")
            return ""
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("ADD CONSTRAINT ")
        out.write_identifier(self.get_foreign_key_name(table, foreign_key))
        out.write(" ")
        self._write_foreign_key_body(out, database, table, foreign_key)
        out.write_end_of_statement()
        return out.getvalue()

    def drop_foreign_key(self, table: Table, foreign_key: ForeignKey) -> str:
        if not self.info.foreign_keys_supported:
            return ""
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write("DROP CONSTRAINT ")
        out.write_identifier(self.get_foreign_key_name(table, foreign_key))
        out.write_end_of_statement()
        return out.getvalue()

    def create_external_foreign_keys(self, database: Database, table: Table) -> str:
        if self.info.foreign_keys_embedded:
            return ""
        return "".join(self.create_foreign_key(database, table, fk) for fk in table.foreign_keys)

    def drop_external_foreign_keys(self, table: Table) -> str:
        if self.info.foreign_keys_embedded:
            return ""
        return "".join(self.drop_foreign_key(table, fk) for fk in table.foreign_keys)

    # Columns of existing tables

    def insert_column(self, table: Table, column: Column, next_column: Optional[Column] = None) -> str:
        """Add a column to an existing table; next_column is the column it should precede."""
        out = self._new_writer()
        self._write_alter_table(out, table)
        out.write(f"{self.add_column_keyword} ")
        self.write_column(out, table, column)
        out.write_end_of_statement()
        if column.auto_increment and not self.info.auto_increment_uses_identity:
            out.write(self.create_auto_increment_support(table, column))
        return out.getvalue()

    def drop_column(self, table: Table, column: Column) -> str:
        out = self._new_writer()
        if column.auto_increment and not self.info.auto_increment_uses_identity:
            out.write(self.drop_auto_increment_support(table, column))
        self._write_alter_table(out, table)
        out.write("DROP COLUMN ")
        out.write_identifier(self.get_column_name(column))
        out.write_end_of_statement()
        return out.getvalue()

    def _write_alter_column(self, out: SqlWriter, table: Table, column: Column, clause: str) -> None:
        self._write_alter_table(out, table)
        out.write("ALTER COLUMN ")
        out.write_identifier(self.get_column_name(column))
        out.write(f" {clause}")
        out.write_end_of_statement()

    def write_alter_column_changes(
        self, out: SqlWriter, table: Table, old_column: Column, new_column: Column
    ) -> None:
        """One ALTER COLUMN statement per changed aspect of the column."""
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
            if new_column.default_value is None:
                self._write_alter_column(out, table, new_column, "DROP DEFAULT")
            else:
                self._write_alter_column(
                    out, table, new_column, f"SET DEFAULT {self.get_default_value(new_column)}"
                )
        if old_column.required != new_column.required:
            clause = "SET NOT NULL" if new_column.required else "DROP NOT NULL"
            self._write_alter_column(out, table, new_column, clause)
        if old_column.auto_increment != new_column.auto_increment and self.info.auto_increment_uses_identity:
            clause = self.add_identity_clause if new_column.auto_increment else self.drop_identity_clause
            self._write_alter_column(out, table, new_column, clause)

    def _definition_changed(self, old_column: Column, new_column: Column) -> bool:
        if old_column.auto_increment != new_column.auto_increment and self.info.auto_increment_uses_identity:
            return True
        return (
            old_column.type_code != new_column.type_code
            or old_column.size != new_column.size
            or old_column.scale != new_column.scale
            or old_column.default_value != new_column.default_value
            or old_column.required != new_column.required
        )

    def write_modify_column(
        self, out: SqlWriter, table: Table, old_column: Column, new_column: Column
    ) -> None:
        self._write_alter_table(out, table)
        out.write(f"{self.modify_column_keyword} ")
        self.write_column(out, table, new_column)
        out.write_end_of_statement()

    def write_modify_column_in_parens(
        self, out: SqlWriter, table: Table, old_column: Column, new_column: Column
    ) -> None:
        # restating an unchanged NOT NULL is an error on these platforms
        self._write_alter_table(out, table)
        out.write("MODIFY (")
        out.write_identifier(self.get_column_name(new_column))
        out.write(" ")
        out.write(self.get_sql_type(new_column))
        if old_column.default_value != new_column.default_value:
            out.write(" DEFAULT ")
            default_value = self.get_default_value(new_column)
            out.write(default_value if default_value is not None else "NULL")
        if old_column.required != new_column.required:
            out.write(" NOT NULL" if new_column.required else " NULL")
        out.write(")")
        out.write_end_of_statement()

    def write_unsupported_change(
        self, out: SqlWriter, table: Table, column: Column, description: str
    ) -> None:
        logger.warning(
            f"Cannot express {description} of column {table.name}.{column.name} in SQL"
        )
        out.write_comment(
            f"{description} of column {self.get_table_name(table)}.{self.get_column_name(column)} "
            f"must be done manually"
        )

    def change_column(self, table: Table, old_column: Column, new_column: Column) -> str:
        """Statements turning old_column into new_column, per the platform's modification style."""
        out = self._new_writer()
        uses_identity = self.info.auto_increment_uses_identity
        if old_column.auto_increment and not new_column.auto_increment and not uses_identity:
            out.write(self.drop_auto_increment_support(table, old_column))

        style = self.info.column_modification_style
        if style == "alter":
            self.write_alter_column_changes(out, table, old_column, new_column)
        elif style == "modify":
            if self._definition_changed(old_column, new_column):
                self.write_modify_column(out, table, old_column, new_column)
        elif style == "modify_parens":
            if self._definition_changed(old_column, new_column):
                self.write_modify_column_in_parens(out, table, old_column, new_column)
        else:
            raise PlatformError(
                f"Unknown column modification style '{style}'",
                {"table": table.name, "column": new_column.name},
            )

        if new_column.auto_increment and not old_column.auto_increment and not uses_identity:
            out.write(self.create_auto_increment_support(table, new_column))
        return out.getvalue()

    # Changes

    def render_change(
        self,
        change: ModelChange,
        database: Database,
        case_sensitive: bool = False,
        parameters: Optional[CreationParameters] = None,
    ) -> str:
        """
        DDL for one change, rendered against the model state before the
        change is applied.
        """
        if isinstance(change, AddTable):
            return self.create_table(database, change.table, parameters)

        table = database.find_table(change.table_name, case_sensitive)
        if table is None:
            raise TargetNotFoundError(change.change_type.value, change.table_name)

        if isinstance(change, RemoveTable):
            return self.drop_table(table)
        if isinstance(change, AddColumn):
            return self.insert_column(table, change.column, self._next_column(table, change, case_sensitive))
        if isinstance(change, ColumnChange):
            column = table.find_column(change.column_name, case_sensitive)
            if column is None:
                raise TargetNotFoundError(
                    change.change_type.value, table.name, "column", change.column_name
                )
            if isinstance(change, RemoveColumn):
                return self.drop_column(table, column)
            scratch = Database()
            scratch.add_table(table.copy())
            apply_change(change, scratch, case_sensitive)
            new_column = scratch.get_table(0).find_column(change.column_name, case_sensitive)
            return self.change_column(table, column, new_column)
        if isinstance(change, AddPrimaryKey):
            return self.create_primary_key(table, change.column_names)
        if isinstance(change, RemovePrimaryKey):
            return self.drop_primary_key(table)
        if isinstance(change, AddIndex):
            return self.create_index(table, change.index)
        if isinstance(change, RemoveIndex):
            index = table.find_matching_index(change.index, case_sensitive) or change.index
            return self.drop_index(table, index)
        if isinstance(change, AddForeignKey):
            return self.create_foreign_key(database, table, change.foreign_key)
        if isinstance(change, RemoveForeignKey):
            foreign_key = table.find_foreign_key(change.foreign_key, case_sensitive) or change.foreign_key
            return self.drop_foreign_key(table, foreign_key)

        raise AlterationError(f"Cannot render change type {type(change).__name__}")

    @staticmethod
    def _next_column(table: Table, change: AddColumn, case_sensitive: bool) -> Optional[Column]:
        # mirrors the position apply_change inserts the column at
        if change.previous_column_name is not None:
            previous = table.find_column(change.previous_column_name, case_sensitive)
            if previous is not None:
                idx = table.get_column_index(previous) + 1
                return table.get_column(idx) if idx < table.column_count else None
            return None
        if change.next_column_name is not None:
            return table.find_column(change.next_column_name, case_sensitive)
        return None
