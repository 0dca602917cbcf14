"""
JDBC type codes and the fixed type-code/type-name table.

Every column carries both a numeric type code and its JDBC type name;
this module is the single source for converting between the two.
"""

from enum import IntEnum
from typing import Dict, Optional, Set, Union


class TypeCode(IntEnum):
    """The JDBC type codes (java.sql.Types) understood by the model."""

    ARRAY = 2003
    BIGINT = -5
    BINARY = -2
    BIT = -7
    BLOB = 2004
    BOOLEAN = 16
    CHAR = 1
    CLOB = 2005
    DATALINK = 70
    DATE = 91
    DECIMAL = 3
    DISTINCT = 2001
    DOUBLE = 8
    FLOAT = 6
    INTEGER = 4
    JAVA_OBJECT = 2000
    LONGVARBINARY = -4
    LONGVARCHAR = -1
    NULL = 0
    NUMERIC = 2
    OTHER = 1111
    REAL = 7
    REF = 2006
    SMALLINT = 5
    STRUCT = 2002
    TIME = 92
    TIMESTAMP = 93
    TINYINT = -6
    VARBINARY = -3
    VARCHAR = 12


class TypeMap:
    """Lookups between JDBC type codes and names plus type categories."""

    _NUMERIC_TYPES: Set[int] = {
        TypeCode.BIGINT,
        TypeCode.BIT,
        TypeCode.DECIMAL,
        TypeCode.DOUBLE,
        TypeCode.FLOAT,
        TypeCode.INTEGER,
        TypeCode.NUMERIC,
        TypeCode.REAL,
        TypeCode.SMALLINT,
        TypeCode.TINYINT,
    }

    _TEXT_TYPES: Set[int] = {
        TypeCode.CHAR,
        TypeCode.CLOB,
        TypeCode.LONGVARCHAR,
        TypeCode.VARCHAR,
    }

    _BINARY_TYPES: Set[int] = {
        TypeCode.BINARY,
        TypeCode.BLOB,
        TypeCode.LONGVARBINARY,
        TypeCode.VARBINARY,
    }

    _DATETIME_TYPES: Set[int] = {
        TypeCode.DATE,
        TypeCode.TIME,
        TypeCode.TIMESTAMP,
    }

    _SPECIAL_TYPES: Set[int] = {
        TypeCode.ARRAY,
        TypeCode.DATALINK,
        TypeCode.DISTINCT,
        TypeCode.JAVA_OBJECT,
        TypeCode.NULL,
        TypeCode.OTHER,
        TypeCode.REF,
        TypeCode.STRUCT,
    }

    _NAME_TO_CODE: Dict[str, int] = {member.name: int(member) for member in TypeCode}
    _CODE_TO_NAME: Dict[int, str] = {int(member): member.name for member in TypeCode}

    @classmethod
    def get_type_name(cls, type_code: int) -> Optional[str]:
        """Return the JDBC type name for a code, or None if unknown."""
        return cls._CODE_TO_NAME.get(type_code)

    @classmethod
    def get_type_code(cls, type_name: str) -> Optional[int]:
        """Return the JDBC type code for a (case-insensitive) name, or None."""
        if type_name is None:
            return None
        return cls._NAME_TO_CODE.get(type_name.strip().upper())

    @classmethod
    def is_known(cls, type_code_or_name: Union[int, str]) -> bool:
        if isinstance(type_code_or_name, str):
            return cls.get_type_code(type_code_or_name) is not None
        return type_code_or_name in cls._CODE_TO_NAME

    @classmethod
    def is_numeric_type(cls, type_code: int) -> bool:
        return type_code in cls._NUMERIC_TYPES

    @classmethod
    def is_text_type(cls, type_code: int) -> bool:
        return type_code in cls._TEXT_TYPES

    @classmethod
    def is_binary_type(cls, type_code: int) -> bool:
        return type_code in cls._BINARY_TYPES

    @classmethod
    def is_datetime_type(cls, type_code: int) -> bool:
        return type_code in cls._DATETIME_TYPES

    @classmethod
    def is_special_type(cls, type_code: int) -> bool:
        return type_code in cls._SPECIAL_TYPES
