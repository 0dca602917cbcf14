"""
Unit tests for the platform capability descriptor.
"""

import pytest

from ddlkit.exceptions import ModelError
from ddlkit.model import TypeCode
from ddlkit.platform import PlatformInfo


class TestPlatformInfo:
    """Test cases for PlatformInfo."""

    def test_defaults(self):
        info = PlatformInfo()
        assert info.primary_key_embedded
        assert not info.foreign_keys_embedded
        assert info.max_identifier_length == -1
        assert info.statement_delimiter == ";"
        assert info.column_modification_style == "alter"

    def test_unmapped_type_falls_back_to_jdbc_name(self):
        info = PlatformInfo()
        assert info.get_native_type(TypeCode.LONGVARCHAR) == "LONGVARCHAR"
        assert not info.has_native_type_mapping(TypeCode.LONGVARCHAR)

    def test_native_mapping_with_target_code(self):
        info = PlatformInfo()
        info.add_native_type_mapping(TypeCode.TIME, "DATE", TypeCode.TIMESTAMP)
        assert info.get_native_type(TypeCode.TIME) == "DATE"
        assert info.get_target_type_code(TypeCode.TIME) == TypeCode.TIMESTAMP
        assert info.get_target_type_code(TypeCode.INTEGER) == TypeCode.INTEGER

    def test_mapping_by_type_name(self):
        info = PlatformInfo()
        info.add_native_type_mapping("BOOLEAN", "NUMBER(1,0)", "BIT")
        assert info.get_native_type(TypeCode.BOOLEAN) == "NUMBER(1,0)"
        assert info.get_target_type_code(TypeCode.BOOLEAN) == TypeCode.BIT

    def test_unknown_type_names_are_ignored(self):
        info = PlatformInfo()
        info.add_native_type_mapping("NO_SUCH_TYPE", "WHATEVER")
        info.add_default_size("NO_SUCH_TYPE", 10)
        assert info.get_default_size(TypeCode.OTHER) is None

    def test_default_sizes_are_strings(self):
        info = PlatformInfo()
        info.add_default_size(TypeCode.VARCHAR, 254)
        assert info.get_default_size(TypeCode.VARCHAR) == "254"
        assert info.get_default_size(TypeCode.CHAR) is None

    def test_size_and_precision_flags(self):
        info = PlatformInfo()
        assert info.has_size(TypeCode.VARCHAR)
        assert info.has_precision_and_scale(TypeCode.DECIMAL)
        assert not info.has_size(TypeCode.INTEGER)

        info.set_has_size(TypeCode.VARBINARY, False)
        assert not info.has_size(TypeCode.VARBINARY)

    def test_escaped_sequences(self):
        info = PlatformInfo()
        info.add_escaped_char_sequence("\\", "\\\\")
        assert info.escaped_char_sequences == {"'": "''", "\\": "\\\\"}

    def test_frozen_info_rejects_changes(self):
        info = PlatformInfo().freeze()
        assert info.is_frozen
        with pytest.raises(ModelError):
            info.max_identifier_length = 30
        with pytest.raises(ModelError):
            info.add_native_type_mapping(TypeCode.INTEGER, "INT")
        with pytest.raises(ModelError):
            info.set_has_size(TypeCode.INTEGER, True)
