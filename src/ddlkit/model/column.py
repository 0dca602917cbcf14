"""
Column entity of the schema model.
"""

import copy
from typing import Optional, Union

from .types import TypeCode, TypeMap
from ..exceptions import ModelError, UnknownTypeError


class Column:
    """
    A table column.

    The JDBC type code and type name are kept redundant: assigning either
    one recomputes the other from the fixed type table, and an unknown value
    raises UnknownTypeError instead of being coerced.

    The size is a string so it can carry "precision,scale"; assigning such a
    value splits it and overrides any scale set before.
    """

    def __init__(
        self,
        name: str,
        type_name: Optional[str] = None,
        type_code: Optional[int] = None,
        size: Optional[Union[str, int]] = None,
        scale: int = 0,
        required: bool = False,
        primary_key: bool = False,
        auto_increment: bool = False,
        default_value: Optional[str] = None,
        description: Optional[str] = None,
        java_name: Optional[str] = None,
        precision_radix: int = 10,
        ordinal_position: int = 0,
    ):
        self.name = name
        self.java_name = java_name
        self.description = description
        self.primary_key = primary_key
        self.required = required
        self.auto_increment = auto_increment
        self.precision_radix = precision_radix
        self.ordinal_position = ordinal_position
        self.default_value = default_value

        self._type_code: int = TypeCode.VARCHAR
        self._type: str = TypeCode.VARCHAR.name
        if type_name is not None:
            self.type = type_name
        elif type_code is not None:
            self.type_code = type_code

        self._size: Optional[str] = None
        self._scale = scale
        self.size = size

    @property
    def type_code(self) -> int:
        return self._type_code

    @type_code.setter
    def type_code(self, type_code: int) -> None:
        type_name = TypeMap.get_type_name(type_code)
        if type_name is None:
            raise UnknownTypeError(type_code=type_code, column_name=self.name)
        self._type_code = int(type_code)
        self._type = type_name

    @property
    def type(self) -> str:
        return self._type

    @type.setter
    def type(self, type_name: str) -> None:
        type_code = TypeMap.get_type_code(type_name)
        if type_code is None:
            raise UnknownTypeError(type_name=type_name, column_name=self.name)
        self._type_code = type_code
        self._type = TypeMap.get_type_name(type_code)

    @property
    def size(self) -> Optional[str]:
        return self._size

    @size.setter
    def size(self, size: Optional[Union[str, int]]) -> None:
        if size is None:
            self._size = None
            return
        size = str(size).strip()
        pos = size.find(",")
        if pos < 0:
            self._size = size
        else:
            precision, scale = size[:pos].strip(), size[pos + 1:].strip()
            try:
                int(precision)
                self._scale = int(scale)
            except ValueError as e:
                raise ModelError(
                    f"Invalid size {size!r} of column {self.name}",
                    {"column": self.name, "size": size},
                    cause=e,
                ) from e
            self._size = precision

    @property
    def scale(self) -> int:
        return self._scale

    @scale.setter
    def scale(self, scale: Optional[int]) -> None:
        self._scale = scale or 0

    @property
    def size_as_int(self) -> int:
        """The size as an integer, 0 when no size is set."""
        return int(self._size) if self._size else 0

    @property
    def is_of_numeric_type(self) -> bool:
        return TypeMap.is_numeric_type(self._type_code)

    @property
    def is_of_text_type(self) -> bool:
        return TypeMap.is_text_type(self._type_code)

    @property
    def is_of_binary_type(self) -> bool:
        return TypeMap.is_binary_type(self._type_code)

    @property
    def is_of_special_type(self) -> bool:
        return TypeMap.is_special_type(self._type_code)

    def copy(self) -> "Column":
        """Return a detached copy of this column."""
        return copy.copy(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return (
            self.name == other.name
            and self._type_code == other._type_code
            and self._size == other._size
            and self._scale == other._scale
            and self.required == other.required
            and self.primary_key == other.primary_key
            and self.auto_increment == other.auto_increment
            and self.default_value == other.default_value
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Column [name={self.name}; type={self._type}]"

    def to_verbose_string(self) -> str:
        return (
            f"Column [name={self.name}; javaName={self.java_name}; type={self._type}; "
            f"typeCode={self._type_code}; size={self._size}; required={self.required}; "
            f"primaryKey={self.primary_key}; autoIncrement={self.auto_increment}; "
            f"defaultValue={self.default_value}; scale={self._scale}; "
            f"precisionRadix={self.precision_radix}; ordinalPosition={self.ordinal_position}]"
        )
