"""
Database-agnostic schema model for ddlkit.

This package provides:
- Database, Table and Column entities with their structural invariants
- Unique and non-unique indexes, foreign keys and their references
- The JDBC type code table
- Foreign key dependency ordering of tables
"""

from .types import TypeCode, TypeMap
from .column import Column
from .index import Index, IndexColumn, UniqueIndex, NonUniqueIndex, create_index
from .foreign_key import ForeignKey, Reference
from .table import Table
from .database import Database, sort_tables_by_dependencies
from .naming import names_equal

__all__ = [
    "TypeCode",
    "TypeMap",
    "Column",
    "Index",
    "IndexColumn",
    "UniqueIndex",
    "NonUniqueIndex",
    "create_index",
    "ForeignKey",
    "Reference",
    "Table",
    "Database",
    "sort_tables_by_dependencies",
    "names_equal",
]
