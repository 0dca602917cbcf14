"""
Change records produced by the model comparator.

Every change is a plain data record. It identifies its target by name
(table name, plus column/index/key identity) and carries detached copies of
the model fragments that describe the new state, never references into a
live model. Applying a change is done by ddlkit.alteration.apply.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional

from ..model import Column, ForeignKey, Index, Table, TypeMap


class ChangeType(str, Enum):
    """Types of schema changes."""

    ADD_TABLE = "add_table"
    REMOVE_TABLE = "remove_table"
    ADD_COLUMN = "add_column"
    REMOVE_COLUMN = "remove_column"
    COLUMN_REQUIRED = "column_required"
    COLUMN_TYPE = "column_type"
    COLUMN_SIZE = "column_size"
    COLUMN_DEFAULT_VALUE = "column_default_value"
    COLUMN_AUTO_INCREMENT = "column_auto_increment"
    ADD_PRIMARY_KEY = "add_primary_key"
    REMOVE_PRIMARY_KEY = "remove_primary_key"
    ADD_INDEX = "add_index"
    REMOVE_INDEX = "remove_index"
    ADD_FOREIGN_KEY = "add_foreign_key"
    REMOVE_FOREIGN_KEY = "remove_foreign_key"


class ChangePhase:
    """Execution phases; changes run in ascending phase order."""

    REMOVE_FOREIGN_KEYS = 1
    REMOVE_INDEXES = 2
    REMOVE_PRIMARY_KEYS = 3
    REMOVE_TABLES = 4
    ADD_TABLES = 5
    COLUMNS = 6
    ADD_PRIMARY_KEYS = 7
    ADD_INDEXES = 8
    ADD_FOREIGN_KEYS = 9


@dataclass
class ModelChange:
    """Common part of all changes: the name of the affected table."""

    table_name: str

    change_type: ClassVar[ChangeType]
    phase: ClassVar[int]

    @property
    def is_column_change(self) -> bool:
        return False

    def describe(self) -> str:
        return f"{self.change_type.value} on table {self.table_name}"


@dataclass
class ColumnChange(ModelChange):
    """Common part of the changes scoped to one column."""

    column_name: str

    phase: ClassVar[int] = ChangePhase.COLUMNS

    @property
    def is_column_change(self) -> bool:
        return True

    def describe(self) -> str:
        return f"{self.change_type.value} on column {self.table_name}.{self.column_name}"


@dataclass
class AddTable(ModelChange):
    table: Table

    change_type: ClassVar[ChangeType] = ChangeType.ADD_TABLE
    phase: ClassVar[int] = ChangePhase.ADD_TABLES

    def describe(self) -> str:
        return f"Add table {self.table_name} ({self.table.column_count} columns)"


@dataclass
class RemoveTable(ModelChange):
    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_TABLE
    phase: ClassVar[int] = ChangePhase.REMOVE_TABLES

    def describe(self) -> str:
        return f"Remove table {self.table_name}"


@dataclass
class AddColumn(ModelChange):
    column: Column
    previous_column_name: Optional[str] = None
    next_column_name: Optional[str] = None

    change_type: ClassVar[ChangeType] = ChangeType.ADD_COLUMN
    phase: ClassVar[int] = ChangePhase.COLUMNS

    @property
    def column_name(self) -> str:
        return self.column.name

    @property
    def is_column_change(self) -> bool:
        return True

    def describe(self) -> str:
        return f"Add column {self.table_name}.{self.column.name} {self.column.type}"


@dataclass
class RemoveColumn(ColumnChange):
    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_COLUMN

    def describe(self) -> str:
        return f"Remove column {self.table_name}.{self.column_name}"


@dataclass
class ColumnRequiredChange(ColumnChange):
    """Flips the NOT NULL constraint of the column; applying it twice reverts it."""

    change_type: ClassVar[ChangeType] = ChangeType.COLUMN_REQUIRED

    def describe(self) -> str:
        return f"Toggle required flag of column {self.table_name}.{self.column_name}"


@dataclass
class ColumnTypeChange(ColumnChange):
    new_type_code: int

    change_type: ClassVar[ChangeType] = ChangeType.COLUMN_TYPE

    def describe(self) -> str:
        type_name = TypeMap.get_type_name(self.new_type_code)
        return f"Change type of column {self.table_name}.{self.column_name} to {type_name}"


@dataclass
class ColumnSizeChange(ColumnChange):
    new_size: Optional[str]
    new_scale: int = 0

    change_type: ClassVar[ChangeType] = ChangeType.COLUMN_SIZE

    def describe(self) -> str:
        size = self.new_size if not self.new_scale else f"{self.new_size},{self.new_scale}"
        return f"Change size of column {self.table_name}.{self.column_name} to {size}"


@dataclass
class ColumnDefaultValueChange(ColumnChange):
    new_default_value: Optional[str]

    change_type: ClassVar[ChangeType] = ChangeType.COLUMN_DEFAULT_VALUE

    def describe(self) -> str:
        return (
            f"Change default value of column {self.table_name}.{self.column_name} "
            f"to {self.new_default_value!r}"
        )


@dataclass
class ColumnAutoIncrementChange(ColumnChange):
    """Flips the auto-increment flag of the column."""

    change_type: ClassVar[ChangeType] = ChangeType.COLUMN_AUTO_INCREMENT

    def describe(self) -> str:
        return f"Toggle auto-increment of column {self.table_name}.{self.column_name}"


@dataclass
class AddPrimaryKey(ModelChange):
    column_names: List[str] = field(default_factory=list)

    change_type: ClassVar[ChangeType] = ChangeType.ADD_PRIMARY_KEY
    phase: ClassVar[int] = ChangePhase.ADD_PRIMARY_KEYS

    def describe(self) -> str:
        return f"Add primary key ({', '.join(self.column_names)}) to table {self.table_name}"


@dataclass
class RemovePrimaryKey(ModelChange):
    """Carries the full old key so exactly those columns lose the flag."""

    column_names: List[str] = field(default_factory=list)

    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_PRIMARY_KEY
    phase: ClassVar[int] = ChangePhase.REMOVE_PRIMARY_KEYS

    def describe(self) -> str:
        return (
            f"Remove primary key ({', '.join(self.column_names)}) from table {self.table_name}"
        )


@dataclass
class AddIndex(ModelChange):
    index: Index

    change_type: ClassVar[ChangeType] = ChangeType.ADD_INDEX
    phase: ClassVar[int] = ChangePhase.ADD_INDEXES

    def describe(self) -> str:
        kind = "unique index" if self.index.is_unique else "index"
        return (
            f"Add {kind} {self.index.name or ''} ({', '.join(self.index.column_names())}) "
            f"to table {self.table_name}"
        )


@dataclass
class RemoveIndex(ModelChange):
    index: Index

    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_INDEX
    phase: ClassVar[int] = ChangePhase.REMOVE_INDEXES

    def describe(self) -> str:
        return f"Remove index {self.index.name} from table {self.table_name}"


@dataclass
class AddForeignKey(ModelChange):
    foreign_key: ForeignKey

    change_type: ClassVar[ChangeType] = ChangeType.ADD_FOREIGN_KEY
    phase: ClassVar[int] = ChangePhase.ADD_FOREIGN_KEYS

    def describe(self) -> str:
        return (
            f"Add foreign key from {self.table_name} "
            f"({', '.join(self.foreign_key.local_column_names())}) to "
            f"{self.foreign_key.foreign_table_name}"
        )


@dataclass
class RemoveForeignKey(ModelChange):
    foreign_key: ForeignKey

    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_FOREIGN_KEY
    phase: ClassVar[int] = ChangePhase.REMOVE_FOREIGN_KEYS

    def describe(self) -> str:
        name = self.foreign_key.name or self.foreign_key.foreign_table_name
        return f"Remove foreign key {name} from table {self.table_name}"
