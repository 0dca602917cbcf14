"""
Dialect capability descriptor.

A PlatformInfo holds the facts about one database product that the model
reader and the SQL builder consult: native type names, default sizes,
identifier limits, which constraints are embedded into CREATE TABLE and
the quoting rules. It contains no algorithms.
"""

from typing import Any, Dict, Optional, Set, Union

from ..model.types import TypeCode, TypeMap
from ..exceptions import ModelError


class PlatformInfo:
    """Capability descriptor of a database platform; immutable once frozen."""

    def __init__(self):
        self._frozen = False

        # Statement shape
        self.primary_key_embedded = True
        self.foreign_keys_embedded = False
        self.indexes_embedded = False
        self.indexes_supported = True
        self.foreign_keys_supported = True
        self.column_modification_style = "alter"

        # Reading
        self.returning_system_indexes = True

        # Column rendering
        self.null_as_default_value_required = False
        self.requiring_not_null_on_required = True
        self.auto_increment_uses_identity = True
        self.default_values_for_lobs_supported = True

        # Identifiers and delimiters
        self.max_identifier_length = -1
        self.statement_delimiter = ";"
        self.identifier_quote_string = '"'
        self.value_quote_char = "'"
        self.comment_prefix = "--"
        self.comment_suffix = ""
        self.escaped_char_sequences: Dict[str, str] = {"'": "''"}

        self._native_types: Dict[int, str] = {}
        self._target_types: Dict[int, int] = {}
        self._default_sizes: Dict[int, str] = {}
        self._sized_types: Set[int] = {
            TypeCode.CHAR,
            TypeCode.VARCHAR,
            TypeCode.BINARY,
            TypeCode.VARBINARY,
        }
        self._precision_and_scale_types: Set[int] = {
            TypeCode.DECIMAL,
            TypeCode.NUMERIC,
        }

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise ModelError(f"Platform info is frozen, cannot change '{name}'")
        super().__setattr__(name, value)

    def freeze(self) -> "PlatformInfo":
        """Make the descriptor read-only so it can be shared freely."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ModelError("Platform info is frozen")

    @staticmethod
    def _resolve_code(code_or_name: Union[int, str, None]) -> Optional[int]:
        if code_or_name is None:
            return None
        if isinstance(code_or_name, str):
            return TypeMap.get_type_code(code_or_name)
        return int(code_or_name) if TypeMap.is_known(code_or_name) else None

    def add_native_type_mapping(
        self,
        type_code: Union[int, str],
        native_type: str,
        target_type_code: Union[int, str, None] = None,
    ) -> None:
        """
        Map a JDBC type to its native name.

        target_type_code is the JDBC type the database reports back when the
        column is read again (e.g. a TIME stored as DATE reads back as
        TIMESTAMP). Unknown JDBC types are silently ignored.
        """
        self._check_mutable()
        code = self._resolve_code(type_code)
        if code is None:
            return
        self._native_types[code] = native_type
        target = self._resolve_code(target_type_code)
        if target is not None:
            self._target_types[code] = target

    def get_native_type(self, type_code: int) -> str:
        """The native type name, or the generic JDBC name when unmapped."""
        native = self._native_types.get(type_code)
        if native is not None:
            return native
        return TypeMap.get_type_name(type_code) or "OTHER"

    def has_native_type_mapping(self, type_code: int) -> bool:
        return type_code in self._native_types

    def get_target_type_code(self, type_code: int) -> int:
        return self._target_types.get(type_code, type_code)

    def add_default_size(self, type_code: Union[int, str], size: Union[int, str]) -> None:
        self._check_mutable()
        code = self._resolve_code(type_code)
        if code is not None:
            self._default_sizes[code] = str(size)

    def get_default_size(self, type_code: int) -> Optional[str]:
        return self._default_sizes.get(type_code)

    def set_has_size(self, type_code: int, has_size: bool) -> None:
        self._check_mutable()
        if has_size:
            self._sized_types.add(type_code)
        else:
            self._sized_types.discard(type_code)

    def has_size(self, type_code: int) -> bool:
        return type_code in self._sized_types

    def set_has_precision_and_scale(self, type_code: int, has_precision: bool) -> None:
        self._check_mutable()
        if has_precision:
            self._precision_and_scale_types.add(type_code)
        else:
            self._precision_and_scale_types.discard(type_code)

    def has_precision_and_scale(self, type_code: int) -> bool:
        return type_code in self._precision_and_scale_types

    def add_escaped_char_sequence(self, char_sequence: str, escaped: str) -> None:
        self._check_mutable()
        self.escaped_char_sequences[char_sequence] = escaped
