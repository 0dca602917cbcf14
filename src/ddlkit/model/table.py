"""
Table entity of the schema model.
"""

import copy
from typing import List, Optional

from .column import Column
from .foreign_key import ForeignKey
from .index import Index
from .naming import names_equal
from ..exceptions import ModelError


class Table:
    """
    A table owning ordered columns, indexes and foreign keys.

    The primary key is not a separate entity: it is the subset of columns
    whose primary_key flag is set, in column declaration order.
    """

    def __init__(
        self,
        name: str,
        type: str = "TABLE",
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
        description: Optional[str] = None,
    ):
        self.name = name
        self.type = type
        self.catalog = catalog
        self.schema = schema
        self.description = description
        self.columns: List[Column] = []
        self.indexes: List[Index] = []
        self.foreign_keys: List[ForeignKey] = []

    # Columns

    def add_column(self, column: Column, index: Optional[int] = None) -> Column:
        if self.find_column(column.name) is not None:
            raise ModelError(
                f"Table '{self.name}' already has a column named '{column.name}'",
                {"table": self.name, "column": column.name},
            )
        if index is None:
            self.columns.append(column)
        else:
            self.columns.insert(index, column)
        return column

    def add_columns(self, columns) -> None:
        for column in columns:
            self.add_column(column)

    def remove_column(self, column: Column) -> None:
        self.columns = [c for c in self.columns if c is not column]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def get_column(self, idx: int) -> Column:
        return self.columns[idx]

    def find_column(self, name: str, case_sensitive: bool = False) -> Optional[Column]:
        for column in self.columns:
            if names_equal(column.name, name, case_sensitive):
                return column
        return None

    def get_column_index(self, column: Column) -> int:
        for idx, candidate in enumerate(self.columns):
            if candidate is column:
                return idx
        return -1

    def get_primary_key_columns(self) -> List[Column]:
        return [c for c in self.columns if c.primary_key]

    def get_primary_key_column_names(self) -> List[str]:
        return [c.name for c in self.columns if c.primary_key]

    def has_primary_key(self) -> bool:
        return any(c.primary_key for c in self.columns)

    def get_auto_increment_columns(self) -> List[Column]:
        return [c for c in self.columns if c.auto_increment]

    def has_auto_increment_columns(self) -> bool:
        return any(c.auto_increment for c in self.columns)

    # Indexes

    def add_index(self, index: Index) -> Index:
        self.indexes.append(index)
        return index

    def add_indexes(self, indexes) -> None:
        for index in indexes:
            self.add_index(index)

    def remove_index(self, index: Index) -> None:
        self.indexes = [i for i in self.indexes if i is not index]

    @property
    def index_count(self) -> int:
        return len(self.indexes)

    def get_index(self, idx: int) -> Index:
        return self.indexes[idx]

    def find_index(self, name: str, case_sensitive: bool = False) -> Optional[Index]:
        for index in self.indexes:
            if names_equal(index.name, name, case_sensitive):
                return index
        return None

    def find_matching_index(self, index: Index, case_sensitive: bool = False) -> Optional[Index]:
        """Find the given index by name, or by structure when it has no name."""
        if index.name:
            return self.find_index(index.name, case_sensitive)
        for candidate in self.indexes:
            if candidate.equals_structurally(index, case_sensitive):
                return candidate
        return None

    def get_unique_indexes(self) -> List[Index]:
        return [i for i in self.indexes if i.is_unique]

    def get_non_unique_indexes(self) -> List[Index]:
        return [i for i in self.indexes if not i.is_unique]

    # Foreign keys

    def add_foreign_key(self, foreign_key: ForeignKey) -> ForeignKey:
        self.foreign_keys.append(foreign_key)
        return foreign_key

    def add_foreign_keys(self, foreign_keys) -> None:
        for foreign_key in foreign_keys:
            self.add_foreign_key(foreign_key)

    def remove_foreign_key(self, foreign_key: ForeignKey) -> None:
        self.foreign_keys = [fk for fk in self.foreign_keys if fk is not foreign_key]

    @property
    def foreign_key_count(self) -> int:
        return len(self.foreign_keys)

    def get_foreign_key(self, idx: int) -> ForeignKey:
        return self.foreign_keys[idx]

    def find_foreign_key(
        self, foreign_key: ForeignKey, case_sensitive: bool = False
    ) -> Optional[ForeignKey]:
        """Find the given key by name, or by structure when it has no name."""
        for candidate in self.foreign_keys:
            if foreign_key.name:
                if names_equal(candidate.name, foreign_key.name, case_sensitive):
                    return candidate
            elif candidate.equals_structurally(foreign_key, case_sensitive):
                return candidate
        return None

    def get_referenced_table_names(self) -> List[str]:
        """Names of the tables this table's foreign keys point to, without duplicates."""
        result: List[str] = []
        for foreign_key in self.foreign_keys:
            name = foreign_key.foreign_table_name
            if name is not None and not any(names_equal(name, r) for r in result):
                result.append(name)
        return result

    def copy(self) -> "Table":
        """Return a deep, fully detached copy of this table."""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Table [name={self.name}; columns={len(self.columns)}; "
            f"indexes={len(self.indexes)}; foreignKeys={len(self.foreign_keys)}]"
        )
