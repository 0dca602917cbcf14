"""
Test suite for ddlkit.

Unit tests for the schema model, platforms, alteration engine, reader,
executor, configuration and CLI live in tests/unit.
"""
