"""
Foreign key entities of the schema model.
"""

import copy
from dataclasses import dataclass
from typing import List, Optional

from .naming import names_equal


@dataclass
class Reference:
    """One local-column/foreign-column pairing inside a (composite) foreign key."""

    local_column_name: str
    foreign_column_name: str
    sequence_value: int = 0


class ForeignKey:
    """A foreign key; the order of its references is significant."""

    def __init__(
        self,
        name: Optional[str] = None,
        foreign_table_name: Optional[str] = None,
        references: Optional[List[Reference]] = None,
    ):
        self.name = name
        self.foreign_table_name = foreign_table_name
        self.references: List[Reference] = list(references or [])

    def add_reference(self, reference: Reference) -> Reference:
        self.references.append(reference)
        return reference

    @property
    def reference_count(self) -> int:
        return len(self.references)

    def get_reference(self, idx: int) -> Reference:
        return self.references[idx]

    def local_column_names(self) -> List[str]:
        return [ref.local_column_name for ref in self.references]

    def foreign_column_names(self) -> List[str]:
        return [ref.foreign_column_name for ref in self.references]

    def has_local_column(self, name: str, case_sensitive: bool = False) -> bool:
        return any(
            names_equal(ref.local_column_name, name, case_sensitive) for ref in self.references
        )

    def equals_structurally(self, other: "ForeignKey", case_sensitive: bool = False) -> bool:
        """Same foreign table and same ordered reference pairs; the key name is ignored."""
        if not names_equal(self.foreign_table_name, other.foreign_table_name, case_sensitive):
            return False
        if len(self.references) != len(other.references):
            return False
        return all(
            names_equal(mine.local_column_name, theirs.local_column_name, case_sensitive)
            and names_equal(mine.foreign_column_name, theirs.foreign_column_name, case_sensitive)
            for mine, theirs in zip(self.references, other.references)
        )

    def copy(self) -> "ForeignKey":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        pairs = ", ".join(
            f"{ref.local_column_name}->{ref.foreign_column_name}" for ref in self.references
        )
        return f"ForeignKey [name={self.name}; foreignTable={self.foreign_table_name}; {pairs}]"
