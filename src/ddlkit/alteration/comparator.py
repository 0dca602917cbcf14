"""
Model comparison for ddlkit.

Compares a current schema model with a desired one and produces the
ordered list of atomic changes that migrates the former into the latter.
"""

import logging
from typing import Dict, List, Optional

from .changes import (
    AddColumn,
    AddForeignKey,
    AddIndex,
    AddPrimaryKey,
    AddTable,
    ChangePhase,
    ColumnAutoIncrementChange,
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
from ..model import Column, Database, Table, names_equal, sort_tables_by_dependencies


logger = logging.getLogger(__name__)


class ModelComparator:
    """
    Computes the changes between two schema models.

    Tables are matched by name. Inside matched tables, columns are matched by
    name, indexes by kind and ordered column list, and foreign keys by
    foreign table and ordered reference list; index and key names are
    ignored when matching. The resulting changes are ordered in phases:

    1. foreign key removals
    2. index removals
    3. primary key removals
    4. table removals
    5. table additions, referenced tables first
    6. column additions, removals and modifications
    7. primary key additions
    8. index additions
    9. foreign key additions

    New tables are created without their foreign keys; those are added in
    the last phase so that mutually dependent tables can be created.
    """

    def __init__(self, platform_info: Optional["PlatformInfo"] = None, case_sensitive: bool = False):
        if platform_info is None:
            # ddlkit.platform depends on this package, so import on demand
            from ..platform.info import PlatformInfo
            platform_info = PlatformInfo()
        self.platform_info = platform_info
        self.case_sensitive = case_sensitive

    def compare(self, current: Database, desired: Database) -> List[ModelChange]:
        """Return the ordered changes that transform `current` into `desired`."""
        phases: Dict[int, List[ModelChange]] = {phase: [] for phase in range(1, 10)}
        new_tables: List[Table] = []

        for desired_table in desired.tables:
            current_table = current.find_table(desired_table.name, self.case_sensitive)
            if current_table is None:
                new_tables.append(desired_table)
                for foreign_key in desired_table.foreign_keys:
                    phases[ChangePhase.ADD_FOREIGN_KEYS].append(
                        AddForeignKey(desired_table.name, foreign_key.copy())
                    )
            else:
                self._compare_tables(current_table, desired_table, phases)

        for current_table in current.tables:
            if desired.find_table(current_table.name, self.case_sensitive) is None:
                for foreign_key in current_table.foreign_keys:
                    phases[ChangePhase.REMOVE_FOREIGN_KEYS].append(
                        RemoveForeignKey(current_table.name, foreign_key.copy())
                    )
                phases[ChangePhase.REMOVE_TABLES].append(RemoveTable(current_table.name))

        for desired_table in sort_tables_by_dependencies(
            new_tables, self.case_sensitive, strict=False
        ):
            table = desired_table.copy()
            table.foreign_keys = []
            phases[ChangePhase.ADD_TABLES].append(AddTable(table.name, table))

        changes = [change for phase in sorted(phases) for change in phases[phase]]
        if changes:
            logger.info(f"Found {len(changes)} changes between the models")
        else:
            logger.info("No changes needed, the models are equal")
        return changes

    def _compare_tables(
        self, current_table: Table, desired_table: Table, phases: Dict[int, List[ModelChange]]
    ) -> None:
        self._compare_columns(current_table, desired_table, phases[ChangePhase.COLUMNS])
        self._compare_primary_keys(current_table, desired_table, phases)
        self._compare_indexes(current_table, desired_table, phases)
        self._compare_foreign_keys(current_table, desired_table, phases)

    def _compare_columns(
        self, current_table: Table, desired_table: Table, changes: List[ModelChange]
    ) -> None:
        table_name = desired_table.name

        for current_column in current_table.columns:
            if desired_table.find_column(current_column.name, self.case_sensitive) is None:
                changes.append(RemoveColumn(table_name, current_column.name))

        columns = desired_table.columns
        for idx, desired_column in enumerate(columns):
            current_column = current_table.find_column(desired_column.name, self.case_sensitive)
            if current_column is None:
                column = desired_column.copy()
                # the primary key is handled as a whole by the key changes
                column.primary_key = False
                changes.append(
                    AddColumn(
                        table_name,
                        column,
                        previous_column_name=columns[idx - 1].name if idx > 0 else None,
                        next_column_name=columns[idx + 1].name if idx + 1 < len(columns) else None,
                    )
                )
            else:
                changes.extend(
                    self._compare_column(table_name, current_column, desired_column)
                )

    def _compare_column(
        self, table_name: str, current_column: Column, desired_column: Column
    ) -> List[ModelChange]:
        changes: List[ModelChange] = []
        column_name = current_column.name
        info = self.platform_info

        # the reader maps type codes to the ones the platform stores them as
        if info.get_target_type_code(current_column.type_code) != info.get_target_type_code(
            desired_column.type_code
        ):
            changes.append(ColumnTypeChange(table_name, column_name, desired_column.type_code))

        type_code = desired_column.type_code
        size_matters = info.has_size(type_code) or info.has_precision_and_scale(type_code)
        scale_matters = info.has_precision_and_scale(type_code)
        if desired_column.size is not None and (
            (size_matters and current_column.size != desired_column.size)
            or (scale_matters and current_column.scale != desired_column.scale)
        ):
            changes.append(
                ColumnSizeChange(
                    table_name, column_name, desired_column.size, desired_column.scale
                )
            )

        if current_column.default_value != desired_column.default_value:
            changes.append(
                ColumnDefaultValueChange(table_name, column_name, desired_column.default_value)
            )

        if current_column.required != desired_column.required:
            changes.append(ColumnRequiredChange(table_name, column_name))

        if current_column.auto_increment != desired_column.auto_increment:
            changes.append(ColumnAutoIncrementChange(table_name, column_name))

        return changes

    def _same_names(self, first: List[str], second: List[str]) -> bool:
        if len(first) != len(second):
            return False
        return all(
            any(names_equal(name, other, self.case_sensitive) for other in second)
            for name in first
        )

    def _compare_primary_keys(
        self, current_table: Table, desired_table: Table, phases: Dict[int, List[ModelChange]]
    ) -> None:
        current_pk = current_table.get_primary_key_column_names()
        desired_pk = desired_table.get_primary_key_column_names()
        if self._same_names(current_pk, desired_pk):
            return
        if current_pk:
            phases[ChangePhase.REMOVE_PRIMARY_KEYS].append(
                RemovePrimaryKey(desired_table.name, current_pk)
            )
        if desired_pk:
            phases[ChangePhase.ADD_PRIMARY_KEYS].append(
                AddPrimaryKey(desired_table.name, desired_pk)
            )

    def _compare_indexes(
        self, current_table: Table, desired_table: Table, phases: Dict[int, List[ModelChange]]
    ) -> None:
        unmatched = list(current_table.indexes)
        for desired_index in desired_table.indexes:
            match = None
            for candidate in unmatched:
                if candidate.equals_structurally(desired_index, self.case_sensitive):
                    match = candidate
                    break
            if match is not None:
                unmatched.remove(match)
            else:
                phases[ChangePhase.ADD_INDEXES].append(
                    AddIndex(desired_table.name, desired_index.copy())
                )
        for current_index in unmatched:
            phases[ChangePhase.REMOVE_INDEXES].append(
                RemoveIndex(desired_table.name, current_index.copy())
            )

    def _compare_foreign_keys(
        self, current_table: Table, desired_table: Table, phases: Dict[int, List[ModelChange]]
    ) -> None:
        unmatched = list(current_table.foreign_keys)
        for desired_fk in desired_table.foreign_keys:
            match = None
            for candidate in unmatched:
                if candidate.equals_structurally(desired_fk, self.case_sensitive):
                    match = candidate
                    break
            if match is not None:
                unmatched.remove(match)
            else:
                phases[ChangePhase.ADD_FOREIGN_KEYS].append(
                    AddForeignKey(desired_table.name, desired_fk.copy())
                )
        for current_fk in unmatched:
            phases[ChangePhase.REMOVE_FOREIGN_KEYS].append(
                RemoveForeignKey(desired_table.name, current_fk.copy())
            )


def compare(
    current: Database,
    desired: Database,
    case_sensitive: bool = False,
    platform_info: Optional["PlatformInfo"] = None,
) -> List[ModelChange]:
    """Ordered changes that transform `current` into `desired`."""
    return ModelComparator(platform_info, case_sensitive).compare(current, desired)
