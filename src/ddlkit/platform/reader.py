"""
Reading schema models from live database metadata.

The ModelReader walks the five metadata scans of a MetadataSource (tables,
columns, primary keys, foreign keys, indexes) and assembles a Database.
Rows are mappings keyed by the JDBC metadata column names; which columns
are read, and how they are coerced, is described by MetadataColumnDescriptor
lists that dialect readers may extend.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..exceptions import DdlKitError, ModelError, ReadError
from ..model import (
    Column,
    Database,
    ForeignKey,
    Index,
    IndexColumn,
    Reference,
    Table,
    TypeCode,
    create_index,
    names_equal,
)
from .info import PlatformInfo


logger = logging.getLogger(__name__)


Row = Mapping[str, Any]

_TRUE_STRINGS = {"1", "TRUE", "T", "YES", "Y"}


class MetadataColumnDescriptor:
    """Describes one column of a metadata row: its name, value type and default."""

    def __init__(self, name: str, value_type: type = str, default: Any = None):
        self.name = name
        self.value_type = value_type
        self.default = default

    def read_column(self, row: Row) -> Any:
        """Read and coerce the value; the default replaces missing and NULL values."""
        try:
            value = row[self.name]
        except KeyError:
            value = None
        if value is None:
            return self.default

        if self.value_type is bool:
            if isinstance(value, str):
                return value.strip().upper() in _TRUE_STRINGS
            return bool(value)
        if self.value_type is int:
            return int(value)
        if self.value_type is str:
            return str(value)
        return value

    def __repr__(self) -> str:
        return f"MetadataColumnDescriptor [name={self.name}; type={self.value_type.__name__}]"


class MetadataSource(ABC):
    """
    Access to the metadata scans of one database connection.

    Each scan returns rows keyed by the JDBC DatabaseMetaData column names
    (TABLE_NAME, COLUMN_NAME, DATA_TYPE, FK_NAME, INDEX_NAME, ...).
    """

    @abstractmethod
    async def get_catalog(self) -> Optional[str]:
        """Name of the catalog (database) the source is connected to."""

    @abstractmethod
    async def get_tables(
        self,
        catalog: Optional[str],
        schema_pattern: str,
        table_pattern: str,
        table_types: Sequence[str],
    ) -> Sequence[Row]:
        """Rows with TABLE_NAME, TABLE_TYPE, TABLE_CAT, TABLE_SCHEM and REMARKS."""

    @abstractmethod
    async def get_columns(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> Sequence[Row]:
        """Column rows in ordinal order."""

    @abstractmethod
    async def get_primary_keys(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> Sequence[Row]:
        """Rows with the COLUMN_NAME of each primary key column."""

    @abstractmethod
    async def get_foreign_keys(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> Sequence[Row]:
        """Imported key rows, one per reference, ordered by key and KEY_SEQ."""

    @abstractmethod
    async def get_indexes(
        self, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> Sequence[Row]:
        """Index info rows, one per index column."""


class ModelReader:
    """Reads a Database from a MetadataSource."""

    def __init__(self, info: PlatformInfo):
        self.info = info

        self.default_sizes: Dict[int, str] = {
            TypeCode.CHAR: "254",
            TypeCode.VARCHAR: "254",
            TypeCode.LONGVARCHAR: "254",
            TypeCode.BINARY: "254",
            TypeCode.VARBINARY: "254",
            TypeCode.LONGVARBINARY: "254",
            TypeCode.INTEGER: "32",
            TypeCode.BIGINT: "64",
            TypeCode.REAL: "7,0",
            TypeCode.FLOAT: "15,0",
            TypeCode.DOUBLE: "15,0",
            TypeCode.DECIMAL: "15,15",
            TypeCode.NUMERIC: "15,15",
        }

        self.default_catalog_pattern: Optional[str] = None
        self.default_schema_pattern = "%"
        self.default_table_pattern = "%"
        self.default_table_types = ("TABLE",)

        self.columns_for_table = self.init_columns_for_table()
        self.columns_for_column = self.init_columns_for_column()
        self.columns_for_pk = self.init_columns_for_pk()
        self.columns_for_fk = self.init_columns_for_fk()
        self.columns_for_index = self.init_columns_for_index()

    def init_columns_for_table(self) -> List[MetadataColumnDescriptor]:
        return [
            MetadataColumnDescriptor("TABLE_NAME", str),
            MetadataColumnDescriptor("TABLE_TYPE", str, "UNKNOWN"),
            MetadataColumnDescriptor("TABLE_CAT", str),
            MetadataColumnDescriptor("TABLE_SCHEM", str),
            MetadataColumnDescriptor("REMARKS", str),
        ]

    def init_columns_for_column(self) -> List[MetadataColumnDescriptor]:
        # COLUMN_DEF goes first, some drivers require LONG columns to be read first
        return [
            MetadataColumnDescriptor("COLUMN_DEF", str),
            MetadataColumnDescriptor("COLUMN_NAME", str),
            MetadataColumnDescriptor("DATA_TYPE", int, int(TypeCode.OTHER)),
            MetadataColumnDescriptor("NUM_PREC_RADIX", int, 10),
            MetadataColumnDescriptor("DECIMAL_DIGITS", int, 0),
            MetadataColumnDescriptor("COLUMN_SIZE", str),
            MetadataColumnDescriptor("IS_NULLABLE", str, "YES"),
            MetadataColumnDescriptor("IS_AUTOINCREMENT", str, "NO"),
            MetadataColumnDescriptor("ORDINAL_POSITION", int, 0),
            MetadataColumnDescriptor("REMARKS", str),
        ]

    def init_columns_for_pk(self) -> List[MetadataColumnDescriptor]:
        return [MetadataColumnDescriptor("COLUMN_NAME", str)]

    def init_columns_for_fk(self) -> List[MetadataColumnDescriptor]:
        return [
            MetadataColumnDescriptor("PKTABLE_NAME", str),
            MetadataColumnDescriptor("KEY_SEQ", int, 0),
            MetadataColumnDescriptor("FK_NAME", str),
            MetadataColumnDescriptor("PKCOLUMN_NAME", str),
            MetadataColumnDescriptor("FKCOLUMN_NAME", str),
        ]

    def init_columns_for_index(self) -> List[MetadataColumnDescriptor]:
        return [
            MetadataColumnDescriptor("INDEX_NAME", str),
            MetadataColumnDescriptor("NON_UNIQUE", bool, True),
            MetadataColumnDescriptor("ORDINAL_POSITION", int, 0),
            MetadataColumnDescriptor("COLUMN_NAME", str),
        ]

    @staticmethod
    def read_values(row: Row, descriptors: List[MetadataColumnDescriptor]) -> Dict[str, Any]:
        return {descriptor.name: descriptor.read_column(row) for descriptor in descriptors}

    async def read(
        self,
        source: MetadataSource,
        name: Optional[str] = None,
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
        table_types: Optional[Sequence[str]] = None,
    ) -> Database:
        """
        Read the schema model visible through the source.

        Tables whose metadata cannot be read are skipped and logged; a failure
        of the table scan itself raises ReadError.
        """
        database = Database(name=name, catalog=catalog, schema=schema)
        if name is None:
            try:
                database.name = await source.get_catalog()
            except Exception as e:
                logger.info(f"Cannot determine the catalog name from the connection: {e}")

        for table in await self.read_tables(source, catalog, schema, table_types):
            try:
                database.add_table(table)
            except ModelError as e:
                # same table name in several schemas
                logger.warning(f"Skipping table {table.name} of schema {table.schema}: {e}")
        logger.info(f"Read {database.table_count} tables from database {database.name}")
        return database

    async def read_tables(
        self,
        source: MetadataSource,
        catalog: Optional[str],
        schema_pattern: Optional[str],
        table_types: Optional[Sequence[str]],
    ) -> List[Table]:
        catalog = catalog if catalog is not None else self.default_catalog_pattern
        schema_pattern = schema_pattern if schema_pattern is not None else self.default_schema_pattern
        table_types = tuple(table_types) if table_types else self.default_table_types

        try:
            rows = await source.get_tables(
                catalog, schema_pattern, self.default_table_pattern, table_types
            )
        except Exception as e:
            raise ReadError(
                f"Failed to read the tables: {e}", catalog, schema_pattern, cause=e
            ) from e

        tables: List[Table] = []
        for row in rows:
            values = self.read_values(row, self.columns_for_table)
            try:
                table = await self.read_table(source, catalog, values)
            except (ReadError, ModelError) as e:
                logger.error(f"Skipping table {values.get('TABLE_NAME')}: {e}")
                continue
            if table is not None:
                tables.append(table)
        return tables

    async def _scan(self, scan, what: str, catalog: Optional[str], schema: Optional[str], table_name: str):
        try:
            return list(await scan(catalog, schema, table_name))
        except DdlKitError:
            raise
        except Exception as e:
            raise ReadError(
                f"Failed to read the {what} of table {table_name}: {e}",
                catalog, schema, table_name, cause=e,
            ) from e

    async def read_table(
        self, source: MetadataSource, catalog: Optional[str], values: Dict[str, Any]
    ) -> Optional[Table]:
        table_name = values.get("TABLE_NAME")
        if not table_name:
            return None

        schema = values.get("TABLE_SCHEM")
        table = Table(
            table_name,
            type=values.get("TABLE_TYPE"),
            catalog=values.get("TABLE_CAT"),
            schema=schema,
            description=values.get("REMARKS"),
        )
        catalog = values.get("TABLE_CAT") or catalog

        table.add_columns(await self.read_columns(source, catalog, schema, table_name))
        table.add_foreign_keys(await self.read_foreign_keys(source, catalog, schema, table_name))
        table.add_indexes(await self.read_indexes(source, catalog, schema, table_name))

        for column_name in await self.read_primary_key_names(source, catalog, schema, table_name):
            column = table.find_column(column_name, True)
            if column is None:
                raise ReadError(
                    f"Primary key column {column_name} not found", catalog, schema, table_name
                )
            column.primary_key = True

        if self.info.returning_system_indexes:
            self.remove_system_indexes(table)
        return table

    async def read_columns(
        self, source: MetadataSource, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Column]:
        rows = await self._scan(source.get_columns, "columns", catalog, schema, table_name)
        return [self.read_column(self.read_values(row, self.columns_for_column)) for row in rows]

    def read_column(self, values: Dict[str, Any]) -> Column:
        column = Column(values["COLUMN_NAME"])
        column.default_value = values["COLUMN_DEF"]
        column.type_code = self.info.get_target_type_code(values["DATA_TYPE"])
        column.precision_radix = values["NUM_PREC_RADIX"]
        column.ordinal_position = values["ORDINAL_POSITION"]

        size = values["COLUMN_SIZE"]
        scale = values["DECIMAL_DIGITS"]
        if size is None:
            size = self.default_sizes.get(column.type_code)
        # the size may carry a scale of its own, so it goes first
        column.size = size
        if scale != 0:
            column.scale = scale

        column.required = values["IS_NULLABLE"].strip().upper() == "NO"
        column.auto_increment = values["IS_AUTOINCREMENT"].strip().upper() == "YES"
        column.description = values["REMARKS"]
        return column

    async def read_primary_key_names(
        self, source: MetadataSource, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[str]:
        rows = await self._scan(source.get_primary_keys, "primary key", catalog, schema, table_name)
        return [self.read_values(row, self.columns_for_pk)["COLUMN_NAME"] for row in rows]

    async def read_foreign_keys(
        self, source: MetadataSource, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[ForeignKey]:
        rows = await self._scan(source.get_foreign_keys, "foreign keys", catalog, schema, table_name)
        known: Dict[Optional[str], ForeignKey] = {}
        for row in rows:
            self.read_foreign_key(self.read_values(row, self.columns_for_fk), known)
        return list(known.values())

    def read_foreign_key(self, values: Dict[str, Any], known: Dict[Optional[str], ForeignKey]) -> None:
        """Add the reference of one row to its key, creating the key on first sight."""
        fk_name = values["FK_NAME"]
        foreign_key = known.get(fk_name)
        if foreign_key is None:
            foreign_key = ForeignKey(fk_name, values["PKTABLE_NAME"])
            known[fk_name] = foreign_key
        foreign_key.add_reference(
            Reference(values["FKCOLUMN_NAME"], values["PKCOLUMN_NAME"], values["KEY_SEQ"])
        )

    async def read_indexes(
        self, source: MetadataSource, catalog: Optional[str], schema: Optional[str], table_name: str
    ) -> List[Index]:
        rows = await self._scan(source.get_indexes, "indexes", catalog, schema, table_name)
        known: Dict[str, Index] = {}
        for row in rows:
            self.read_index(self.read_values(row, self.columns_for_index), known)
        return list(known.values())

    def read_index(self, values: Dict[str, Any], known: Dict[str, Index]) -> None:
        index_name = values["INDEX_NAME"]
        # statistics rows carry no index name
        if index_name is None:
            return
        index = known.get(index_name)
        if index is None:
            index = create_index(not values["NON_UNIQUE"], index_name)
            known[index_name] = index
        index.add_column(IndexColumn(values["COLUMN_NAME"], values["ORDINAL_POSITION"]))

    # Indexes the database created on its own for keys

    def remove_system_indexes(self, table: Table) -> None:
        self.remove_internal_primary_key_index(table)
        for foreign_key in table.foreign_keys:
            self.remove_internal_foreign_key_index(table, foreign_key)

    def remove_internal_primary_key_index(self, table: Table) -> None:
        column_names = table.get_primary_key_column_names()
        for index in table.indexes:
            if (
                index.is_unique
                and self.matches(index, column_names)
                and self.is_internal_primary_key_index(table, index)
            ):
                table.remove_index(index)
                break

    def remove_internal_foreign_key_index(self, table: Table, foreign_key: ForeignKey) -> None:
        column_names = foreign_key.local_column_names()
        for index in table.indexes:
            if (
                not index.is_unique
                and self.matches(index, column_names)
                and self.is_internal_foreign_key_index(table, foreign_key, index)
            ):
                table.remove_index(index)
                break

    @staticmethod
    def matches(index: Index, column_names: List[str]) -> bool:
        """Whether the index covers exactly the given columns in that order."""
        if index.column_count != len(column_names):
            return False
        return all(
            names_equal(index.get_column(idx).name, name, True)
            for idx, name in enumerate(column_names)
        )

    def is_internal_primary_key_index(self, table: Table, index: Index) -> bool:
        return True

    def is_internal_foreign_key_index(self, table: Table, foreign_key: ForeignKey, index: Index) -> bool:
        return True
