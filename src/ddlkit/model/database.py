"""
Database entity of the schema model and foreign key dependency ordering.
"""

import copy
import logging
from typing import Iterable, List, Optional

from .naming import names_equal
from .table import Table
from ..exceptions import ModelError, OrderingError


logger = logging.getLogger(__name__)


class Database:
    """
    A schema model: an ordered sequence of uniquely named tables.

    The table order is the default creation order before any foreign key
    reordering is applied.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        catalog: Optional[str] = None,
        schema: Optional[str] = None,
    ):
        self.name = name
        self.catalog = catalog
        self.schema = schema
        self.tables: List[Table] = []

    def add_table(self, table: Table, index: Optional[int] = None) -> Table:
        if self.find_table(table.name) is not None:
            raise ModelError(
                f"Database '{self.name}' already has a table named '{table.name}'",
                {"table": table.name},
            )
        if index is None:
            self.tables.append(table)
        else:
            self.tables.insert(index, table)
        return table

    def add_tables(self, tables: Iterable[Table]) -> None:
        for table in tables:
            self.add_table(table)

    def remove_table(self, table: Table) -> None:
        self.tables = [t for t in self.tables if t is not table]

    @property
    def table_count(self) -> int:
        return len(self.tables)

    def get_table(self, idx: int) -> Table:
        return self.tables[idx]

    def find_table(self, name: str, case_sensitive: bool = False) -> Optional[Table]:
        for table in self.tables:
            if names_equal(table.name, name, case_sensitive):
                return table
        return None

    def get_tables_in_dependency_order(self, case_sensitive: bool = False) -> List[Table]:
        """
        Tables ordered so that every table comes after the tables it references.

        This is the foreign key safe insertion order. Self references are
        ignored; a cycle raises OrderingError naming its member tables.
        """
        return sort_tables_by_dependencies(self.tables, case_sensitive, strict=True)

    def copy(self) -> "Database":
        """Return a deep clone; the clone shares no entity with this model."""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"Database [name={self.name}; tables={len(self.tables)}]"


def _dependencies(table: Table, candidates: List[Table], case_sensitive: bool) -> List[Table]:
    result = []
    for name in table.get_referenced_table_names():
        if names_equal(name, table.name, case_sensitive):
            continue
        for candidate in candidates:
            if names_equal(candidate.name, name, case_sensitive) and candidate not in result:
                result.append(candidate)
    return result


def _find_cycle(remaining: List[Table], case_sensitive: bool) -> List[str]:
    path: List[Table] = []
    current = remaining[0]
    while current not in path:
        path.append(current)
        pending = _dependencies(current, remaining, case_sensitive)
        if not pending:
            break
        current = pending[0]
    if current in path:
        path = path[path.index(current):]
    return [t.name for t in path]


def sort_tables_by_dependencies(
    tables: List[Table], case_sensitive: bool = False, strict: bool = True
) -> List[Table]:
    """
    Stable topological sort of tables by their foreign keys.

    Among the tables whose dependencies are satisfied, the one declared first
    goes first. Only foreign keys between the given tables count. When a
    cycle blocks progress, strict mode raises OrderingError; otherwise the
    first blocked table is emitted as is and sorting continues.
    """
    remaining = list(tables)
    ordered: List[Table] = []

    while remaining:
        ready = None
        for table in remaining:
            if not _dependencies(table, remaining, case_sensitive):
                ready = table
                break

        if ready is None:
            cycle = _find_cycle(remaining, case_sensitive)
            if strict:
                raise OrderingError(cycle)
            logger.debug(f"Breaking foreign key cycle between {cycle}")
            ready = remaining[0]

        ordered.append(ready)
        remaining.remove(ready)

    return ordered
