"""
Schema alteration for ddlkit.

This package provides:
- Change records describing atomic schema modifications
- The model comparator producing phase ordered change lists
- Application of changes to an in-memory model
"""

from .changes import (
    ChangeType,
    ChangePhase,
    ModelChange,
    ColumnChange,
    AddTable,
    RemoveTable,
    AddColumn,
    RemoveColumn,
    ColumnRequiredChange,
    ColumnTypeChange,
    ColumnSizeChange,
    ColumnDefaultValueChange,
    ColumnAutoIncrementChange,
    AddPrimaryKey,
    RemovePrimaryKey,
    AddIndex,
    RemoveIndex,
    AddForeignKey,
    RemoveForeignKey,
)
from .comparator import ModelComparator, compare
from .apply import apply_change, apply_changes

__all__ = [
    "ChangeType",
    "ChangePhase",
    "ModelChange",
    "ColumnChange",
    "AddTable",
    "RemoveTable",
    "AddColumn",
    "RemoveColumn",
    "ColumnRequiredChange",
    "ColumnTypeChange",
    "ColumnSizeChange",
    "ColumnDefaultValueChange",
    "ColumnAutoIncrementChange",
    "AddPrimaryKey",
    "RemovePrimaryKey",
    "AddIndex",
    "RemoveIndex",
    "AddForeignKey",
    "RemoveForeignKey",
    "ModelComparator",
    "compare",
    "apply_change",
    "apply_changes",
]
