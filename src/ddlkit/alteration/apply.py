"""
Applying change records to a schema model.

Each change locates its target inside the given model by name and mutates
it in place. Applying is not idempotent: the required and auto-increment
changes are toggles, so every change must be applied exactly once per
model instance.
"""

import logging
from typing import Callable, Dict, Iterable, Type

from .changes import (
    AddColumn,
    AddForeignKey,
    AddIndex,
    AddPrimaryKey,
    AddTable,
    ColumnAutoIncrementChange,
    ColumnChange,
    ColumnDefaultValueChange,
    ColumnRequiredChange,
    ColumnSizeChange,
    ColumnTypeChange,
    ModelChange,
    RemoveColumn,
    RemoveForeignKey,
    RemoveIndex,
    RemovePrimaryKey,
    RemoveTable,
)
from ..exceptions import AlterationError, TargetNotFoundError
from ..model import Column, Database, Table


logger = logging.getLogger(__name__)


def _find_table(change: ModelChange, database: Database, case_sensitive: bool) -> Table:
    table = database.find_table(change.table_name, case_sensitive)
    if table is None:
        raise TargetNotFoundError(change.change_type.value, change.table_name)
    return table


def _find_column(
    change: ModelChange, table: Table, column_name: str, case_sensitive: bool
) -> Column:
    column = table.find_column(column_name, case_sensitive)
    if column is None:
        raise TargetNotFoundError(change.change_type.value, table.name, "column", column_name)
    return column


def _find_changed_column(
    change: ColumnChange, database: Database, case_sensitive: bool
) -> Column:
    table = _find_table(change, database, case_sensitive)
    return _find_column(change, table, change.column_name, case_sensitive)


def _apply_add_table(change: AddTable, database: Database, case_sensitive: bool) -> None:
    database.add_table(change.table.copy())


def _apply_remove_table(change: RemoveTable, database: Database, case_sensitive: bool) -> None:
    database.remove_table(_find_table(change, database, case_sensitive))


def _apply_add_column(change: AddColumn, database: Database, case_sensitive: bool) -> None:
    table = _find_table(change, database, case_sensitive)
    position = None
    if change.previous_column_name is not None:
        previous = table.find_column(change.previous_column_name, case_sensitive)
        if previous is not None:
            position = table.get_column_index(previous) + 1
    elif change.next_column_name is not None:
        following = table.find_column(change.next_column_name, case_sensitive)
        if following is not None:
            position = table.get_column_index(following)
    table.add_column(change.column.copy(), position)


def _apply_remove_column(change: RemoveColumn, database: Database, case_sensitive: bool) -> None:
    table = _find_table(change, database, case_sensitive)
    table.remove_column(_find_column(change, table, change.column_name, case_sensitive))


def _apply_column_required(
    change: ColumnRequiredChange, database: Database, case_sensitive: bool
) -> None:
    column = _find_changed_column(change, database, case_sensitive)
    column.required = not column.required


def _apply_column_type(
    change: ColumnTypeChange, database: Database, case_sensitive: bool
) -> None:
    _find_changed_column(change, database, case_sensitive).type_code = change.new_type_code


def _apply_column_size(
    change: ColumnSizeChange, database: Database, case_sensitive: bool
) -> None:
    column = _find_changed_column(change, database, case_sensitive)
    column.size = change.new_size
    column.scale = change.new_scale


def _apply_column_default_value(
    change: ColumnDefaultValueChange, database: Database, case_sensitive: bool
) -> None:
    column = _find_changed_column(change, database, case_sensitive)
    column.default_value = change.new_default_value


def _apply_column_auto_increment(
    change: ColumnAutoIncrementChange, database: Database, case_sensitive: bool
) -> None:
    column = _find_changed_column(change, database, case_sensitive)
    column.auto_increment = not column.auto_increment


def _apply_add_primary_key(
    change: AddPrimaryKey, database: Database, case_sensitive: bool
) -> None:
    table = _find_table(change, database, case_sensitive)
    columns = [_find_column(change, table, name, case_sensitive) for name in change.column_names]
    for column in columns:
        column.primary_key = True


def _apply_remove_primary_key(
    change: RemovePrimaryKey, database: Database, case_sensitive: bool
) -> None:
    table = _find_table(change, database, case_sensitive)
    columns = [_find_column(change, table, name, case_sensitive) for name in change.column_names]
    for column in columns:
        column.primary_key = False


def _apply_add_index(change: AddIndex, database: Database, case_sensitive: bool) -> None:
    _find_table(change, database, case_sensitive).add_index(change.index.copy())


def _apply_remove_index(change: RemoveIndex, database: Database, case_sensitive: bool) -> None:
    table = _find_table(change, database, case_sensitive)
    index = table.find_matching_index(change.index, case_sensitive)
    if index is None:
        raise TargetNotFoundError(
            change.change_type.value, table.name, "index",
            change.index.name or ", ".join(change.index.column_names()),
        )
    table.remove_index(index)


def _apply_add_foreign_key(
    change: AddForeignKey, database: Database, case_sensitive: bool
) -> None:
    _find_table(change, database, case_sensitive).add_foreign_key(change.foreign_key.copy())


def _apply_remove_foreign_key(
    change: RemoveForeignKey, database: Database, case_sensitive: bool
) -> None:
    table = _find_table(change, database, case_sensitive)
    foreign_key = table.find_foreign_key(change.foreign_key, case_sensitive)
    if foreign_key is None:
        raise TargetNotFoundError(
            change.change_type.value, table.name, "foreign_key",
            change.foreign_key.name or change.foreign_key.foreign_table_name,
        )
    table.remove_foreign_key(foreign_key)


_APPLIERS: Dict[Type[ModelChange], Callable[..., None]] = {
    AddTable: _apply_add_table,
    RemoveTable: _apply_remove_table,
    AddColumn: _apply_add_column,
    RemoveColumn: _apply_remove_column,
    ColumnRequiredChange: _apply_column_required,
    ColumnTypeChange: _apply_column_type,
    ColumnSizeChange: _apply_column_size,
    ColumnDefaultValueChange: _apply_column_default_value,
    ColumnAutoIncrementChange: _apply_column_auto_increment,
    AddPrimaryKey: _apply_add_primary_key,
    RemovePrimaryKey: _apply_remove_primary_key,
    AddIndex: _apply_add_index,
    RemoveIndex: _apply_remove_index,
    AddForeignKey: _apply_add_foreign_key,
    RemoveForeignKey: _apply_remove_foreign_key,
}


def apply_change(change: ModelChange, database: Database, case_sensitive: bool = False) -> None:
    """Apply a single change to the model, locating its target by name."""
    applier = _APPLIERS.get(type(change))
    if applier is None:
        raise AlterationError(f"Unsupported change type {type(change).__name__}")
    logger.debug(f"Applying: {change.describe()}")
    applier(change, database, case_sensitive)


def apply_changes(
    changes: Iterable[ModelChange], database: Database, case_sensitive: bool = False
) -> Database:
    """
    Apply changes in order; the first failure aborts the sequence.

    The model is then left partially migrated.
    """
    for change in changes:
        apply_change(change, database, case_sensitive)
    return database
