"""
Platform facade for ddlkit.

A Platform bundles the capability descriptor, SQL builder and model reader
of one database product and offers the schema operations built on them.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from ..alteration import ModelComparator, apply_change
from ..alteration.changes import (
    ColumnAutoIncrementChange,
    ColumnDefaultValueChange,
    ColumnRequiredChange,
    ColumnSizeChange,
    ColumnTypeChange,
    ModelChange,
    RemoveColumn,
    RemoveForeignKey,
    RemoveTable,
)
from ..database.connection import ConnectionPool
from ..exceptions import PlatformError
from ..executor import ExecutionResult, SqlExecutor
from ..model import Database
from .builder import CreationParameters, SqlBuilder
from .info import PlatformInfo
from .reader import MetadataSource, ModelReader


logger = logging.getLogger(__name__)


_COLUMN_MODIFICATIONS = (
    ColumnAutoIncrementChange,
    ColumnDefaultValueChange,
    ColumnRequiredChange,
    ColumnSizeChange,
    ColumnTypeChange,
)


class Platform:
    """
    Base platform; renders ANSI SQL with the default capabilities.

    Dialects set NAME, URL_SCHEMES and the builder/reader classes, and
    describe their capabilities in init_platform_info.
    """

    NAME = "Generic"
    URL_SCHEMES: Tuple[str, ...] = ()

    builder_class: Type[SqlBuilder] = SqlBuilder
    model_reader_class: Type[ModelReader] = ModelReader

    def __init__(
        self,
        use_delimited_identifiers: bool = False,
        case_sensitive: bool = False,
        sql_comments: bool = True,
    ):
        info = PlatformInfo()
        self.init_platform_info(info)
        self._info = info.freeze()
        self._builder = self.builder_class(self._info, use_delimited_identifiers, sql_comments)
        self._model_reader = self.model_reader_class(self._info)
        self.case_sensitive = case_sensitive

    def init_platform_info(self, info: PlatformInfo) -> None:
        """Describe the platform's capabilities; called once before freezing."""
        pass

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def info(self) -> PlatformInfo:
        return self._info

    @property
    def builder(self) -> SqlBuilder:
        return self._builder

    @property
    def model_reader(self) -> ModelReader:
        return self._model_reader

    # SQL generation

    def get_create_tables_sql(
        self,
        database: Database,
        drop_tables_first: bool = False,
        parameters: Optional[CreationParameters] = None,
    ) -> str:
        return self._builder.create_tables(database, drop_tables_first, parameters)

    def get_drop_tables_sql(self, database: Database) -> str:
        return self._builder.drop_tables(database)

    def get_changes(
        self,
        current: Database,
        desired: Database,
        do_drops: bool = True,
        modify_columns: bool = True,
    ) -> List[ModelChange]:
        """
        Changes migrating current to desired.

        Without do_drops, tables and columns missing from the desired model
        are kept; without modify_columns, existing columns are not changed.
        """
        changes = ModelComparator(self._info, self.case_sensitive).compare(current, desired)
        if do_drops and modify_columns:
            return changes

        removed_tables = {
            change.table_name.lower() if not self.case_sensitive else change.table_name
            for change in changes
            if isinstance(change, RemoveTable)
        }

        def keep(change: ModelChange) -> bool:
            if not do_drops:
                if isinstance(change, (RemoveTable, RemoveColumn)):
                    return False
                table_key = change.table_name if self.case_sensitive else change.table_name.lower()
                if isinstance(change, RemoveForeignKey) and table_key in removed_tables:
                    return False
            if not modify_columns and isinstance(change, _COLUMN_MODIFICATIONS):
                return False
            return True

        return [change for change in changes if keep(change)]

    def get_alter_tables_sql(
        self,
        current: Database,
        desired: Database,
        do_drops: bool = True,
        modify_columns: bool = True,
        parameters: Optional[CreationParameters] = None,
    ) -> str:
        """
        DDL migrating current to desired.

        Each change is rendered against a working copy of the current model
        and then applied to it, so later changes see the earlier ones.
        """
        working = current.copy()
        parts = []
        for change in self.get_changes(current, desired, do_drops, modify_columns):
            parts.append(
                self._builder.render_change(change, working, self.case_sensitive, parameters)
            )
            apply_change(change, working, self.case_sensitive)
        return "".join(parts)

    # Live databases

    async def read_model_from_database(
        self,
        source: MetadataSource,
        name: Optional[str] = None,
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
        table_types: Optional[Sequence[str]] = None,
    ) -> Database:
        return await self._model_reader.read(source, name, catalog, schema, table_types)

    def create_executor(self, pool: ConnectionPool, dry_run: bool = False) -> SqlExecutor:
        quote = self._info.value_quote_char
        return SqlExecutor(
            pool,
            statement_delimiter=self._info.statement_delimiter,
            comment_prefix=self._info.comment_prefix,
            value_quote_char=self._info.value_quote_char,
            backslash_escapes=self._info.escaped_char_sequences.get(quote) == "\\" + quote,
            dry_run=dry_run,
        )

    async def create_tables(
        self,
        executor: SqlExecutor,
        database: Database,
        drop_tables_first: bool = False,
        continue_on_error: bool = False,
        parameters: Optional[CreationParameters] = None,
    ) -> ExecutionResult:
        sql = self.get_create_tables_sql(database, drop_tables_first, parameters)
        return await executor.execute(sql, continue_on_error)

    async def drop_tables(
        self, executor: SqlExecutor, database: Database, continue_on_error: bool = False
    ) -> ExecutionResult:
        return await executor.execute(self.get_drop_tables_sql(database), continue_on_error)

    async def create_database(
        self, pool: ConnectionPool, name: str, parameters: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Create the database `name`.

        The pool must be connected to another database of the same server.
        Only supported where the platform overrides this.
        """
        raise PlatformError(
            f"Creating databases is not supported on {self.NAME}", {"database": name}
        )

    async def drop_database(self, pool: ConnectionPool, name: str) -> None:
        raise PlatformError(
            f"Dropping databases is not supported on {self.NAME}", {"database": name}
        )

    async def alter_tables(
        self,
        executor: SqlExecutor,
        source: MetadataSource,
        desired: Database,
        continue_on_error: bool = False,
        do_drops: bool = True,
        modify_columns: bool = True,
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
        table_types: Optional[Sequence[str]] = None,
        parameters: Optional[CreationParameters] = None,
    ) -> ExecutionResult:
        """Read the live model from source and migrate it to desired."""
        current = await self.read_model_from_database(
            source, catalog=catalog, schema=schema, table_types=table_types
        )
        sql = self.get_alter_tables_sql(current, desired, do_drops, modify_columns, parameters)
        if not sql.strip():
            logger.info("Database schema already matches the desired model")
        return await executor.execute(sql, continue_on_error)

    def __repr__(self) -> str:
        return f"{type(self).__name__} [name={self.NAME}]"
