"""Name comparison shared by the model lookups."""

from typing import Optional


def names_equal(first: Optional[str], second: Optional[str], case_sensitive: bool = False) -> bool:
    """Compare two identifiers; None only equals None."""
    if first is None or second is None:
        return first is None and second is None
    if case_sensitive:
        return first == second
    return first.lower() == second.lower()
