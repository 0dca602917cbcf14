"""
Index entities of the schema model.
"""

import copy
from dataclasses import dataclass
from typing import List, Optional

from .naming import names_equal


@dataclass
class IndexColumn:
    """One column of an index; the order inside the index is significant."""

    name: str
    ordinal_position: int = 0
    size: Optional[str] = None


class Index:
    """Base class of the unique and non-unique index variants."""

    is_unique = False

    def __init__(self, name: Optional[str] = None, columns: Optional[List[IndexColumn]] = None):
        self.name = name
        self.columns: List[IndexColumn] = []
        for column in columns or []:
            self.add_column(column)

    def add_column(self, column) -> IndexColumn:
        """Append a column (an IndexColumn or a plain column name)."""
        if isinstance(column, str):
            column = IndexColumn(column)
        self.columns.append(column)
        return column

    def remove_column(self, name: str, case_sensitive: bool = False) -> None:
        self.columns = [
            c for c in self.columns if not names_equal(c.name, name, case_sensitive)
        ]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def get_column(self, idx: int) -> IndexColumn:
        return self.columns[idx]

    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def has_column(self, name: str, case_sensitive: bool = False) -> bool:
        return any(names_equal(c.name, name, case_sensitive) for c in self.columns)

    def equals_structurally(self, other: "Index", case_sensitive: bool = False) -> bool:
        """Same kind and same ordered column names; the index name is ignored."""
        if self.is_unique != other.is_unique:
            return False
        if len(self.columns) != len(other.columns):
            return False
        return all(
            names_equal(mine.name, theirs.name, case_sensitive)
            for mine, theirs in zip(self.columns, other.columns)
        )

    def copy(self) -> "Index":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        kind = "UniqueIndex" if self.is_unique else "NonUniqueIndex"
        return f"{kind} [name={self.name}; columns={self.column_names()}]"


class UniqueIndex(Index):
    """An index enforcing uniqueness of its column values."""

    is_unique = True


class NonUniqueIndex(Index):
    """A plain lookup index."""

    is_unique = False


def create_index(unique: bool, name: Optional[str] = None, columns=None) -> Index:
    """Create the index variant matching the uniqueness flag."""
    index = UniqueIndex(name) if unique else NonUniqueIndex(name)
    for column in columns or []:
        index.add_column(column)
    return index
